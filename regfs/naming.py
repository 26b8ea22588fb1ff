"""
Filename encoding module for the registry file gateway.

Maps (repository, tag, media type) to the synthetic filenames served by the
gateway and parses such filenames back into tags.

Filename Format:
    <repository>-<tag><extension>

    Extensions:
        .tar.gz  for application/vnd.docker.image.rootfs.diff.tar.gzip layers
        .raw     for any other layer media type

    Example: myrepo-v1.tar.gz -> repository "myrepo", tag "v1"
"""

import logging
import re

from .config import config
from .errors import MalformedNameError
from .models import DOCKER_LAYER_TGZ

logger = logging.getLogger(__name__)

EXTENSION_TGZ = ".tar.gz"
EXTENSION_RAW = ".raw"

# Checked in this order when decoding
EXTENSIONS = (EXTENSION_TGZ, EXTENSION_RAW)

REPOSITORY_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")
TAG_PATTERN = re.compile(r"^[a-zA-Z0-9_][a-zA-Z0-9._-]*$")


def validate_repository(name: str, max_length: int = None) -> None:
    """
    Validate a repository name.

    Args:
        name: Repository name to validate (e.g., "myrepo")
        max_length: Length limit, defaults to MAX_REPO_NAME_LENGTH

    Raises:
        MalformedNameError: If name is invalid

    Validation Rules:
        - Must be 1-{MAX_REPO_NAME_LENGTH} characters (configurable)
        - Only alphanumeric characters, dots (.), hyphens (-) and underscores (_)
    """
    max_length = max_length or config.MAX_REPO_NAME_LENGTH
    if not name or len(name) > max_length:
        logger.warning(f"Invalid repository name length: {len(name)}")
        raise MalformedNameError(f"invalid repository name: must be 1-{max_length} characters")

    if not REPOSITORY_PATTERN.match(name):
        logger.warning(f"Invalid repository name format: {name}")
        raise MalformedNameError(
            f"invalid repository name {name}: only alphanumeric, dots, hyphens, and underscores allowed"
        )


def validate_tag(tag: str, max_length: int = None) -> None:
    """
    Validate an image tag.

    Args:
        tag: Tag name to validate
        max_length: Length limit, defaults to MAX_TAG_LENGTH

    Raises:
        MalformedNameError: If tag is invalid

    Validation Rules:
        - Must be 1-{MAX_TAG_LENGTH} characters (configurable)
        - Only alphanumeric characters, dots (.), hyphens (-), and underscores (_)
        - Must not start with a dot or hyphen
    """
    max_length = max_length or config.MAX_TAG_LENGTH
    if not tag or len(tag) > max_length:
        logger.warning(f"Invalid tag length: {len(tag)}")
        raise MalformedNameError(f"invalid tag: must be 1-{max_length} characters")

    if not TAG_PATTERN.match(tag):
        logger.warning(f"Invalid tag format: {tag}")
        raise MalformedNameError(
            f"invalid tag {tag}: only alphanumeric, dots, hyphens, and underscores allowed"
        )


def extension_for(media_type: str) -> str:
    """
    Select the file extension for a layer media type.

    Examples:
        >>> extension_for("application/vnd.docker.image.rootfs.diff.tar.gzip")
        '.tar.gz'
        >>> extension_for("application/vnd.oci.image.layer.v1.tar+gzip")
        '.raw'
    """
    if media_type == DOCKER_LAYER_TGZ:
        return EXTENSION_TGZ
    return EXTENSION_RAW


def encode_filename(repository: str, tag: str, media_type: str) -> str:
    """
    Build the synthetic filename for a tag.

    Examples:
        >>> encode_filename("myrepo", "v1", "application/vnd.docker.image.rootfs.diff.tar.gzip")
        'myrepo-v1.tar.gz'
        >>> encode_filename("myrepo", "v2", "")
        'myrepo-v2.raw'
    """
    return f"{repository}-{tag}{extension_for(media_type)}"


def decode_filename(repository: str, filename: str, max_tag_length: int = None) -> str:
    """
    Parse a synthetic filename back into its tag.

    Only one extension is stripped, so a tag that itself ends in ".raw" or
    ".tar.gz" still decodes to the tag it was encoded from.

    Args:
        repository: Repository the filename belongs to
        filename: Filename in format "<repository>-<tag><extension>"
        max_tag_length: Tag length limit, defaults to MAX_TAG_LENGTH

    Returns:
        The tag

    Raises:
        MalformedNameError: If the repository prefix or a known extension is
            missing, or the remaining tag is not a valid tag

    Examples:
        >>> decode_filename("myrepo", "myrepo-v1.tar.gz")
        'v1'
        >>> decode_filename("myrepo", "myrepo-v1.raw")
        'v1'
    """
    prefix = f"{repository}-"
    if not filename.startswith(prefix):
        logger.warning(f"Filename {filename} does not start with {prefix}")
        raise MalformedNameError(f"failed to strip prefix {prefix} from {filename}")
    rest = filename[len(prefix):]

    for extension in EXTENSIONS:
        if rest.endswith(extension):
            tag = rest[: -len(extension)]
            break
    else:
        logger.warning(f"Filename {filename} has no known extension")
        raise MalformedNameError(f"failed to strip suffix from {rest}")

    validate_tag(tag, max_tag_length)
    return tag
