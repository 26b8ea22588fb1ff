"""Test helpers: a fake upstream registry."""

import json

from regfs.config import Config

REGISTRY_URL = "http://registry.test:5000"

DOCKER_LAYER = "application/vnd.docker.image.rootfs.diff.tar.gzip"
OCI_LAYER = "application/vnd.oci.image.layer.v1.tar+gzip"

DIGEST_A = "sha256:" + "a" * 64
DIGEST_B = "sha256:" + "b" * 64


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeRegistry:
    """Stand-in for a requests.Session talking to a registry:2 container."""

    def __init__(self, base_url=REGISTRY_URL):
        self.base_url = base_url
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, path, body, status=200):
        """Serve body (dict or str) for GET <base_url><path>."""
        if not isinstance(body, (str, Exception)):
            body = json.dumps(body)
        self.routes[f"{self.base_url}{path}"] = (status, body)

    def add_tags(self, repository, tags):
        self.add(f"/v2/{repository}/tags/list", {"name": repository, "tags": tags})

    def add_manifest(self, repository, reference, layers):
        self.add(
            f"/v2/{repository}/manifests/{reference}",
            {
                "schemaVersion": 2,
                "mediaType": "application/vnd.oci.image.manifest.v1+json",
                "config": {
                    "mediaType": "application/vnd.oci.image.config.v1+json",
                    "digest": "sha256:" + "c" * 64,
                    "size": 2,
                },
                "layers": [
                    {"mediaType": media_type, "digest": digest, "size": 10}
                    for media_type, digest in layers
                ],
            },
        )

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        if url not in self.routes:
            return FakeResponse(
                404,
                json.dumps({"errors": [{"code": "NAME_UNKNOWN", "message": "repository name not known to registry"}]}),
            )
        status, body = self.routes[url]
        if isinstance(body, Exception):
            raise body
        return FakeResponse(status, body)

    def close(self):
        self.closed = True


def make_config(**overrides):
    config = Config()
    config.REGISTRY_URL = REGISTRY_URL
    config.REQUEST_TIMEOUT = 5
    config.MAX_REPO_NAME_LENGTH = 255
    config.MAX_TAG_LENGTH = 128
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


