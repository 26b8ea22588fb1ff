"""
Filesystem-style gateway for an OCI container registry.

Lists the tags of a registry repository as a SHA256SUMS document and redirects
synthetic filenames to the layer blobs in the registry.

Architecture:
    1. Client requests checksums (GET /<repo>/SHA256SUMS)
    2. Gateway lists tags (GET /v2/<repo>/tags/list)
    3. Gateway fetches each tag's manifest (GET /v2/<repo>/manifests/<tag>)
    4. Gateway returns "<digest>  <repo>-<tag><extension>" per tag
    5. Client requests a file (GET /<repo>/<repo>-<tag><extension>)
    6. Gateway redirects to the blob (<registry>/v2/<repo>/blobs/<digest>)

Environment Variables:
    LOG_LEVEL, FLASK_HOST, FLASK_PORT, REGISTRY_URL, REQUEST_TIMEOUT,
    MAX_REPO_NAME_LENGTH, MAX_TAG_LENGTH

Example:
    $ REGISTRY_URL=http://localhost:5000 python app.py
    $ curl http://localhost:5001/myrepo/SHA256SUMS
    $ curl -L -O http://localhost:5001/myrepo/myrepo-v1.tar.gz
"""

import logging

from regfs.config import config
from regfs.routes import create_app

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point for the gateway application."""
    debug_mode = logger.getEffectiveLevel() == logging.DEBUG
    logger.info(f"Starting registry file gateway on {config.FLASK_HOST}:{config.FLASK_PORT}")
    logger.info(f"Configuration: {config}")
    logger.info(f"Log level: {logging.getLevelName(logger.getEffectiveLevel())}")
    if debug_mode:
        logger.info("Flask debug mode enabled")
    app = create_app(config)
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=debug_mode)


if __name__ == "__main__":
    main()
