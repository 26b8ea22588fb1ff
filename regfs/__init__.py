"""
Filesystem-style gateway for an OCI container registry.

Serves the tags of a registry repository as plain files. Each tag becomes one
file named after its first layer, listed in a SHA256SUMS document and
redirected to the layer blob in the upstream registry.

Endpoints:
    GET /<repo>/SHA256SUMS
        "<sha256 hex>  <repo>-<tag><extension>" line per tag
    GET /<repo>/<repo>-<tag><extension>
        307 redirect to <registry>/v2/<repo>/blobs/<digest>

Extensions:
    .tar.gz  Docker gzip layer (application/vnd.docker.image.rootfs.diff.tar.gzip)
    .raw     any other layer media type

See README.md for full documentation.
"""

__version__ = "0.1.0"

# Import key components for convenience
from .config import Config
from .client import RegistryClient
from .errors import (
    GatewayError,
    MalformedNameError,
    UpstreamError,
    RegistryConnectionError,
    DecodeError,
    EmptyManifestError,
    InvalidDigestError,
)
from .models import Descriptor, Manifest, TagList
from .naming import encode_filename, decode_filename, extension_for
from .resolver import resolve_descriptor, to_checksum_line, to_redirect_target, build_checksums
from .routes import create_app

__all__ = [
    "Config",
    "RegistryClient",
    "GatewayError",
    "MalformedNameError",
    "UpstreamError",
    "RegistryConnectionError",
    "DecodeError",
    "EmptyManifestError",
    "InvalidDigestError",
    "Descriptor",
    "Manifest",
    "TagList",
    "encode_filename",
    "decode_filename",
    "extension_for",
    "resolve_descriptor",
    "to_checksum_line",
    "to_redirect_target",
    "build_checksums",
    "create_app",
]
