"""Signed blob URLs.

Tokens are HS256 JWTs (python-jose) naming a single blob and carrying an
expiry, appended to the blob's public URL as ``?token=``.
"""

import logging
import time
from typing import Optional
from urllib.parse import quote

from jose import ExpiredSignatureError, JWTError, jwt

from ...core.exceptions import InvalidSignedUrl

logger = logging.getLogger(__name__)

TOKEN_PURPOSE = "blob-access"


def join_url(base_url: str, name: str) -> str:
    """Join a base URL and a blob name with exactly one slash."""
    if not base_url:
        return ""
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url + quote(name)


class UrlSigner:
    """Issues and verifies time-bounded access tokens for blob names."""

    ALGORITHM = "HS256"

    def __init__(self, secret: str, base_url: str = ""):
        if not secret:
            raise ValueError("URL signing secret cannot be empty")
        self._secret = secret
        self.base_url = base_url

    def create_token(self, name: str, ttl_seconds: int, now: Optional[float] = None) -> str:
        """Create a token granting access to ``name`` for ``ttl_seconds``."""
        if ttl_seconds <= 0:
            raise ValueError("Signed URL TTL must be positive")
        issued_at = int(now if now is not None else time.time())
        claims = {
            "sub": name,
            "purpose": TOKEN_PURPOSE,
            "iat": issued_at,
            "exp": issued_at + int(ttl_seconds),
        }
        return jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)

    def sign(self, name: str, ttl_seconds: int) -> str:
        """Build ``<base_url><name>?token=<jwt>``."""
        url = join_url(self.base_url, name) or "/" + quote(name)
        return f"{url}?token={self.create_token(name, ttl_seconds)}"

    def verify(self, token: str) -> str:
        """Verify a token and return the blob name it grants.

        Raises:
            InvalidSignedUrl: token is malformed, tampered with or expired
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
        except ExpiredSignatureError as e:
            raise InvalidSignedUrl("token expired") from e
        except JWTError as e:
            logger.debug(f"Rejected signed URL token: {e}")
            raise InvalidSignedUrl("token verification failed") from e

        if claims.get("purpose") != TOKEN_PURPOSE or not claims.get("sub"):
            raise InvalidSignedUrl("token does not grant blob access")
        return claims["sub"]
