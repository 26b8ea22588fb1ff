"""
Tag resolution module for the registry file gateway.

Resolves a tag to the layer descriptor it exposes and derives the checksum
line and redirect target for that layer.

Resolution Flow:
    1. Fetch the image manifest for <repository>:<tag>
    2. Select the first layer descriptor
    3. Checksum line: "<hex digest>  <repository>-<tag><extension>"
    4. Redirect target: <registry>/v2/<repository>/blobs/<digest>

Only the first layer of a manifest is exposed, so images are expected to be
single-layer artifacts.
"""

import logging

from .client import RegistryClient
from .errors import EmptyManifestError, InvalidDigestError, MalformedNameError
from .models import Descriptor
from .naming import encode_filename, validate_tag

logger = logging.getLogger(__name__)

SHA256_PREFIX = "sha256:"


def resolve_descriptor(client: RegistryClient, repository: str, tag: str) -> Descriptor:
    """
    Fetch the manifest of a tag and return its first layer descriptor.

    Raises:
        UpstreamError: If the manifest cannot be fetched
        DecodeError: If the manifest cannot be parsed
        EmptyManifestError: If the manifest has no layers
    """
    manifest = client.fetch_manifest(repository, tag)
    if not manifest.layers:
        logger.error(f"Manifest {repository}:{tag} has no layers")
        raise EmptyManifestError(f"no layers in manifest {repository}:{tag}")

    descriptor = manifest.layers[0]
    if len(manifest.layers) > 1:
        logger.debug(f"Manifest {repository}:{tag} has {len(manifest.layers)} layers, using the first")
    logger.debug(f"Resolved {repository}:{tag} to {descriptor.digest} ({descriptor.media_type})")
    return descriptor


def to_checksum_line(repository: str, tag: str, descriptor: Descriptor) -> str:
    """
    Format the SHA256SUMS line for a tag.

    Raises:
        InvalidDigestError: If the digest is not a sha256 digest

    Example:
        >>> to_checksum_line("myrepo", "v1", Descriptor("", "sha256:abc", 3))
        'abc  myrepo-v1.raw\\n'
    """
    digest = descriptor.digest
    if not digest.startswith(SHA256_PREFIX):
        logger.error(f"Invalid digest for {repository}:{tag}: {digest}")
        raise InvalidDigestError(f"invalid digest: {digest}")

    checksum = digest[len(SHA256_PREFIX):]
    filename = encode_filename(repository, tag, descriptor.media_type)
    return f"{checksum}  {filename}\n"


def to_redirect_target(client: RegistryClient, repository: str, descriptor: Descriptor) -> str:
    """Blob URL to redirect to. The blob is not checked for existence."""
    return client.blob_url(repository, descriptor.digest)


def build_checksums(client: RegistryClient, repository: str, max_tag_length: int = None) -> str:
    """
    Build the SHA256SUMS document for a repository.

    Tags are resolved one at a time in the order the registry lists them. The
    first failure aborts the whole document.

    Tags that could not be requested back as a file (invalid or longer than
    max_tag_length) are left out of the document and never resolved.
    """
    tags = client.list_tags(repository)
    lines = []
    for tag in tags:
        try:
            validate_tag(tag, max_tag_length)
        except MalformedNameError:
            logger.warning(f"Skipping tag {repository}:{tag}: not servable as a file")
            continue

        descriptor = resolve_descriptor(client, repository, tag)
        lines.append(to_checksum_line(repository, tag, descriptor))

    logger.info(f"Built SHA256SUMS for '{repository}': {len(lines)} entries")
    return "".join(lines)
