"""
Configuration module for the registry file gateway.

Loads all configuration from environment variables with sensible defaults.
"""

import os


class Config:
    """
    Gateway configuration from environment variables.

    Loads all configuration values from environment variables with sensible defaults.
    All settings can be overridden by setting the corresponding environment variable.
    """

    def __init__(self):
        """
        Initialize configuration from environment variables.

        Environment Variables:
            LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO
            FLASK_HOST: Server bind address. Default: 127.0.0.1
            FLASK_PORT: Server bind port. Default: 5001
            REGISTRY_URL: Upstream OCI registry base URL. Default: http://localhost:5000
            REQUEST_TIMEOUT: Timeout for each upstream request in seconds. Default: 30
            MAX_REPO_NAME_LENGTH: Maximum repository name length. Default: 255
            MAX_TAG_LENGTH: Maximum tag length. Default: 128
        """
        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Server
        self.FLASK_HOST = os.getenv("FLASK_HOST", "127.0.0.1")
        self.FLASK_PORT = int(os.getenv("FLASK_PORT", "5001"))

        # Upstream registry
        self.REGISTRY_URL = os.getenv("REGISTRY_URL", "http://localhost:5000").rstrip("/")
        self.REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))  # seconds

        # Validation limits
        self.MAX_REPO_NAME_LENGTH = int(os.getenv("MAX_REPO_NAME_LENGTH", "255"))
        self.MAX_TAG_LENGTH = int(os.getenv("MAX_TAG_LENGTH", "128"))

    def __repr__(self):
        """String representation for logging."""
        return (
            f"Config(LOG_LEVEL={self.LOG_LEVEL}, "
            f"FLASK_HOST={self.FLASK_HOST}, "
            f"FLASK_PORT={self.FLASK_PORT}, "
            f"REGISTRY_URL={self.REGISTRY_URL}, "
            f"REQUEST_TIMEOUT={self.REQUEST_TIMEOUT})"
        )


# Global config instance
config = Config()
