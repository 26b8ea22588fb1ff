"""
Flask application and gateway endpoints.

Exposes the tags of an upstream OCI registry as checksummed files.
"""

import logging
from flask import Flask, Response, current_app, jsonify, redirect, request

from .client import RegistryClient
from .config import Config, config as default_config
from .errors import GatewayError
from .naming import decode_filename, validate_repository
from .resolver import build_checksums, resolve_descriptor, to_redirect_target

logger = logging.getLogger(__name__)


def create_app(config: Config = None, session=None) -> Flask:
    """
    Create the gateway Flask application.

    Args:
        config: Gateway configuration, defaults to the environment-derived config
        session: HTTP session for upstream requests, a new requests.Session if omitted

    Returns:
        Flask application with a single RegistryClient shared by all requests
    """
    config = config or default_config

    app = Flask(__name__)
    app.config["REGFS"] = config
    app.extensions["regfs"] = RegistryClient(
        config.REGISTRY_URL,
        timeout=config.REQUEST_TIMEOUT,
        session=session,
    )

    app.add_url_rule("/<repo>/SHA256SUMS", view_func=get_checksums)
    app.add_url_rule("/<repo>/<filename>", view_func=get_file)
    app.register_error_handler(GatewayError, handle_gateway_error)
    app.register_error_handler(404, catch_all)

    logger.debug(f"Gateway app created for registry {config.REGISTRY_URL}")
    return app


def get_client() -> RegistryClient:
    """The RegistryClient shared by all requests of the current app."""
    return current_app.extensions["regfs"]


def get_config() -> Config:
    """The Config the current app was created with."""
    return current_app.config["REGFS"]


# -------------------------------
# Gateway Endpoints
# -------------------------------


def get_checksums(repo):
    """
    List a repository as a SHA256SUMS document.

    Every tag of the repository becomes one line pointing at the file name
    the tag is served under.

    Args:
        repo: Repository name (validated)

    Returns:
        200 text/plain document

    Response Format:
        <hex digest>  <repo>-<tag>.tar.gz
        <hex digest>  <repo>-<tag>.raw

    Raises:
        GatewayError: If any tag fails to resolve (no partial listing)
    """
    config = get_config()
    validate_repository(repo, config.MAX_REPO_NAME_LENGTH)
    logger.info(f"SHA256SUMS requested: repo='{repo}'")

    body = build_checksums(get_client(), repo, config.MAX_TAG_LENGTH)
    return Response(body, status=200, mimetype="text/plain")


def get_file(repo, filename):
    """
    Redirect a synthetic filename to its blob in the upstream registry.

    Args:
        repo: Repository name (validated)
        filename: File name in format "<repo>-<tag><extension>"

    Returns:
        307 redirect to <registry>/v2/<repo>/blobs/<digest>

    Raises:
        MalformedNameError: If the filename does not belong to the repository
        GatewayError: If the tag cannot be resolved
    """
    config = get_config()
    validate_repository(repo, config.MAX_REPO_NAME_LENGTH)
    tag = decode_filename(repo, filename, config.MAX_TAG_LENGTH)
    logger.info(f"File requested: repo='{repo}', filename='{filename}', tag='{tag}'")

    client = get_client()
    descriptor = resolve_descriptor(client, repo, tag)
    url = to_redirect_target(client, repo, descriptor)

    logger.info(f"Redirecting {filename} to {url}")
    return redirect(url, code=307)


# -------------------------------
# Error Handlers
# -------------------------------


def handle_gateway_error(error: GatewayError):
    """Serialize a gateway error as {"message", "inner"}."""
    logger.warning(f"Request {request.path} failed: {error}")
    return jsonify(error.to_dict()), error.status_code


def catch_all(error):
    """Answer any unmatched path with a 404 {"message": "catch all"}."""
    logger.info(f"catch all: {request.path}")
    return jsonify({"message": "catch all"}), 404
