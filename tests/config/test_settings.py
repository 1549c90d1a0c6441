"""Tests for settings and logging configuration."""

import logging

import pytest

from neo_resumable.config import MIB, UploadSettings
from neo_resumable.config.logging_config import (
    STORAGE_LOGGER,
    LoggingConfig,
    RequestIdFilter,
    get_log_level_from_verbosity,
    resolve_log_level,
)
from neo_resumable.core import OperationContext, bind_context


class TestUploadSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("RESUMABLE_MAX_FILE_SIZE", raising=False)
        settings = UploadSettings(_env_file=None)

        assert settings.default_chunk_size == MIB
        assert settings.session_ttl_seconds == 86400
        assert settings.api_prefix == "/uploads/resumable"
        assert settings.allowed_mime_types == []
        assert not settings.signing_enabled
        assert not settings.is_production

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("RESUMABLE_MAX_FILE_SIZE", "1024")
        monkeypatch.setenv("RESUMABLE_ALLOWED_MIME_TYPES", "image/*, application/pdf")
        monkeypatch.setenv("RESUMABLE_URL_SIGNING_SECRET", "s3cret")
        monkeypatch.setenv("RESUMABLE_HTTP_STATUS_OVERRIDES", '{"ExternalServiceError": 502}')

        settings = UploadSettings(_env_file=None)

        assert settings.max_file_size == 1024
        assert settings.allowed_mime_types == ["image/*", "application/pdf"]
        assert settings.url_signing_secret.get_secret_value() == "s3cret"
        assert settings.http_status_overrides == {"ExternalServiceError": 502}

    def test_json_mime_list(self, monkeypatch):
        monkeypatch.setenv("RESUMABLE_ALLOWED_MIME_TYPES", '["text/plain"]')

        assert UploadSettings(_env_file=None).allowed_mime_types == ["text/plain"]

    def test_api_prefix_normalized(self):
        assert UploadSettings(api_prefix="files/").api_prefix == "/files"

    def test_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            UploadSettings(default_chunk_size=0)
        with pytest.raises(ValueError):
            UploadSettings(storage_backend="s3")


class TestLoggingConfig:

    @pytest.mark.parametrize("verbosity,level", [
        ("quiet", "ERROR"),
        ("NORMAL", "WARNING"),
        ("verbose", "INFO"),
        ("debug", "DEBUG"),
        ("nonsense", "WARNING"),
    ])
    def test_verbosity(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level

    def test_explicit_level_wins(self):
        assert resolve_log_level("debug", "QUIET") == "DEBUG"
        assert resolve_log_level("", "QUIET") == "ERROR"

    def test_build_config(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("LOG_FORMAT", "detailed")

        config = LoggingConfig.build_config()

        assert config["root"]["level"] == "INFO"
        assert "%(filename)s" in config["formatters"]["default"]["format"]
        assert config["loggers"]["httpx"]["level"] == "ERROR"
        assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"

    def test_storage_logging_toggle(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.delenv("ENABLE_STORAGE_LOGGING", raising=False)
        assert LoggingConfig.build_config()["loggers"][STORAGE_LOGGER]["level"] == "WARNING"

        monkeypatch.setenv("ENABLE_STORAGE_LOGGING", "true")
        assert STORAGE_LOGGER not in LoggingConfig.build_config()["loggers"]

    def test_request_id_filter(self):
        record = logging.LogRecord("neo_resumable", logging.INFO, __file__, 1, "chunk stored", None, None)

        with bind_context(OperationContext(request_id="req-42")):
            assert RequestIdFilter().filter(record)

        assert record.request_id == "req-42"
