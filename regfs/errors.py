"""
Exceptions for the registry file gateway.

Every failure in the resolution chain is a GatewayError. Each error carries a
human-readable message and a structured ``inner`` payload that is returned to
the caller as diagnostic detail.
"""

import json


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def inner(self):
        """Structured diagnostic detail for the error response."""
        return {"message": self.message}

    def to_dict(self) -> dict:
        return {"message": "internal server error", "inner": self.inner}


class MalformedNameError(GatewayError):
    """Raised when a requested filename or repository name cannot be parsed."""

    pass


class UpstreamError(GatewayError):
    """Raised when the upstream registry answers with a non-200 status."""

    def __init__(self, url: str, status: int, body: str):
        super().__init__(f"upstream returned HTTP {status} for {url}")
        self.url = url
        self.status = status
        self.body = body

    @property
    def inner(self):
        """
        The upstream response body.

        Registries answer failures with a JSON ``{"errors": [...]}`` document,
        which is passed through as-is. Anything else is returned as text.
        """
        try:
            return json.loads(self.body)
        except ValueError:
            return self.body


class RegistryConnectionError(GatewayError):
    """Raised when the upstream registry cannot be reached."""

    pass


class DecodeError(GatewayError):
    """Raised when an upstream body is not a valid tag list or manifest."""

    pass


class EmptyManifestError(GatewayError):
    """Raised when an image manifest has no layers."""

    pass


class InvalidDigestError(GatewayError):
    """Raised when a descriptor digest is not a sha256 digest."""

    pass
