"""
Data models for upstream registry documents.

Parses the tag list and image manifest JSON documents returned by an OCI /
Docker Registry v2 API into small dataclasses.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import DecodeError

# Media types
OCI_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
DOCKER_LAYER_TGZ = "application/vnd.docker.image.rootfs.diff.tar.gzip"


@dataclass
class Descriptor:
    """Content descriptor for a blob referenced by a manifest."""

    media_type: str
    digest: str
    size: int = 0

    @classmethod
    def from_dict(cls, data) -> "Descriptor":
        if not isinstance(data, dict):
            raise DecodeError(f"descriptor is not an object: {data!r}")

        media_type = data.get("mediaType")
        digest = data.get("digest")
        size = data.get("size", 0)
        if not isinstance(media_type, str):
            raise DecodeError(f"descriptor has no mediaType: {data!r}")
        if not isinstance(digest, str):
            raise DecodeError(f"descriptor has no digest: {data!r}")
        if not isinstance(size, int) or isinstance(size, bool):
            raise DecodeError(f"descriptor size is not an integer: {data!r}")
        return cls(media_type=media_type, digest=digest, size=size)


@dataclass
class Manifest:
    """
    Image manifest (OCI image manifest or Docker manifest v2 schema 2).

    Only the parts needed to locate layers are kept.
    """

    layers: List[Descriptor] = field(default_factory=list)
    media_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> "Manifest":
        """
        Build a manifest from a decoded JSON document.

        Raises:
            DecodeError: If the document is not an image manifest

        Example:
            >>> Manifest.from_dict({
            ...     "schemaVersion": 2,
            ...     "layers": [{"mediaType": "x", "digest": "sha256:aa", "size": 1}],
            ... }).layers[0].digest
            'sha256:aa'
        """
        if not isinstance(data, dict):
            raise DecodeError("reading image manifest: document is not an object")

        layers = data.get("layers")
        if not isinstance(layers, list):
            raise DecodeError("reading image manifest: missing layers")

        return cls(
            layers=[Descriptor.from_dict(layer) for layer in layers],
            media_type=data.get("mediaType"),
        )


@dataclass
class TagList:
    """Tag list of a repository as returned by ``/v2/<name>/tags/list``."""

    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> "TagList":
        if not isinstance(data, dict):
            raise DecodeError("reading tag list: document is not an object")

        # registry:2 reports "tags": null once every tag has been deleted
        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise DecodeError("reading tag list: tags is not a list of strings")
        return cls(tags=tags)
