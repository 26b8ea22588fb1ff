"""
Upstream registry client for the registry file gateway.

Speaks the read-only part of the OCI Distribution / Docker Registry v2 API:
tag listing and manifest retrieval. Blob content is never fetched here, the
gateway only builds blob URLs for redirects.
"""

import logging
from typing import List, Optional

import requests

from .errors import DecodeError, RegistryConnectionError, UpstreamError
from .models import DOCKER_MANIFEST_V2, OCI_MANIFEST, Manifest, TagList

logger = logging.getLogger(__name__)

MANIFEST_ACCEPT = ", ".join([OCI_MANIFEST, DOCKER_MANIFEST_V2])


class RegistryClient:
    """Docker Registry API v2 client for an unauthenticated registry."""

    def __init__(
        self,
        registry_url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            registry_url: Registry URL (e.g., http://localhost:5000)
            timeout: Timeout for each request in seconds
            session: HTTP session to reuse; a new one is created if omitted
        """
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _get(self, path: str, headers: Optional[dict] = None) -> requests.Response:
        url = f"{self.registry_url}{path}"
        logger.debug(f"Upstream GET {url}")
        try:
            resp = self.session.get(url, headers=headers or {}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Upstream request failed: {url}: {e}")
            raise RegistryConnectionError(f"failed to reach registry at {url}: {e}") from e

        if resp.status_code != 200:
            logger.error(f"Upstream returned HTTP {resp.status_code} for {url}")
            raise UpstreamError(url, resp.status_code, resp.text)
        return resp

    def list_tags(self, repository: str) -> List[str]:
        """List tags for a repository.

        Args:
            repository: Repository name

        Returns:
            Tag names in the order the registry returned them

        Raises:
            UpstreamError: If the registry does not answer with HTTP 200
            DecodeError: If the body is not a tag list
        """
        resp = self._get(f"/v2/{repository}/tags/list")
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"reading tag list: {e}") from e

        tags = TagList.from_dict(data).tags
        logger.debug(f"Repository '{repository}' has {len(tags)} tags")
        return tags

    def fetch_manifest(self, repository: str, reference: str) -> Manifest:
        """Retrieve an image manifest from the registry.

        Both OCI image manifests and Docker manifest v2 schema 2 are accepted.

        Args:
            repository: Repository name
            reference: Tag or digest reference

        Returns:
            Parsed manifest

        Raises:
            UpstreamError: If the registry does not answer with HTTP 200
            DecodeError: If the body is not an image manifest
        """
        resp = self._get(
            f"/v2/{repository}/manifests/{reference}",
            headers={"Accept": MANIFEST_ACCEPT},
        )
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"reading image manifest: {e}") from e

        manifest = Manifest.from_dict(data)
        logger.debug(
            f"Manifest {repository}:{reference}: {len(manifest.layers)} layers, "
            f"mediaType={manifest.media_type}"
        )
        return manifest

    def blob_url(self, repository: str, digest: str) -> str:
        """URL of a blob in the registry."""
        return f"{self.registry_url}/v2/{repository}/blobs/{digest}"
