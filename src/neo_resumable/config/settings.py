"""
Configuration management for the resumable upload service.

Settings are read from ``RESUMABLE_``-prefixed environment variables or a
``.env`` file and cached for the life of the process.
"""
import json
from functools import lru_cache
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


MIB = 1024 * 1024


class UploadSettings(BaseSettings):
    """Settings for the resumable upload engine and its HTTP surface."""

    model_config = SettingsConfigDict(
        env_prefix="RESUMABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    app_name: str = Field(default="neo-resumable", description="Application name")
    environment: str = Field(default="development", description="Environment name")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    api_prefix: str = Field(default="/uploads/resumable", description="Path of the upload endpoint")

    # Admission
    max_file_size: int = Field(default=0, ge=0, description="Largest accepted upload in bytes (0 = no cap)")
    allowed_mime_types: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Allowed MIME types; 'family/*' admits a whole family (empty = allow all)"
    )
    default_chunk_size: int = Field(default=MIB, gt=0, description="Chunk size used when the client omits one")

    # Session lifecycle
    session_ttl_seconds: int = Field(default=86400, gt=0, description="Idle time before a session is evicted")
    eviction_interval_seconds: int = Field(default=300, gt=0, description="Seconds between eviction sweeps")
    eviction_enabled: bool = Field(default=True, description="Run the background eviction sweeper")
    hook_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-hook execution timeout")

    # Storage
    storage_backend: Literal["memory", "local"] = Field(default="memory", description="Blob store backend")
    storage_path: str = Field(default="./data/uploads", description="Base directory of the local store")
    storage_base_url: str = Field(default="", description="Public URL prefix for stored blobs")
    url_signing_secret: Optional[SecretStr] = Field(default=None, description="HS256 secret for signed URLs")
    signed_url_ttl_seconds: int = Field(default=3600, gt=0, description="Default lifetime of signed URLs")

    # Errors
    http_status_overrides: Dict[str, int] = Field(
        default_factory=dict,
        description="Exception class name to HTTP status overrides"
    )

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalize the endpoint path to start with '/' and carry no trailing slash."""
        v = "/" + v.strip().strip("/")
        return v

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def split_mime_types(cls, v):
        """Accept a JSON list or a comma separated string as well as a list."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def signing_enabled(self) -> bool:
        return self.url_signing_secret is not None


@lru_cache()
def get_settings() -> UploadSettings:
    """Get cached settings instance."""
    return UploadSettings()
