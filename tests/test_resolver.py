"""Tests for tag resolution."""

import pytest

from regfs.errors import EmptyManifestError, InvalidDigestError, UpstreamError
from regfs.models import Descriptor
from regfs.resolver import build_checksums, resolve_descriptor, to_checksum_line, to_redirect_target
from tests.helpers import DIGEST_A, DIGEST_B, DOCKER_LAYER, OCI_LAYER, REGISTRY_URL


def test_resolve_descriptor(myrepo, registry_client):
    """Test a tag resolves to its layer descriptor."""
    descriptor = resolve_descriptor(registry_client, "myrepo", "v2")
    assert descriptor == Descriptor(OCI_LAYER, DIGEST_B, 10)


def test_resolve_descriptor_first_layer(registry, registry_client):
    """Test only the first layer of a multi-layer image is used."""
    registry.add_manifest("myrepo", "v1", [(OCI_LAYER, DIGEST_B), (DOCKER_LAYER, DIGEST_A)])
    assert resolve_descriptor(registry_client, "myrepo", "v1").digest == DIGEST_B


def test_resolve_descriptor_no_layers(registry, registry_client):
    """Test a manifest without layers."""
    registry.add_manifest("myrepo", "v1", [])
    with pytest.raises(EmptyManifestError, match="no layers"):
        resolve_descriptor(registry_client, "myrepo", "v1")


def test_checksum_line():
    """Test the checksum line format."""
    line = to_checksum_line("myrepo", "v1", Descriptor(DOCKER_LAYER, DIGEST_A, 10))
    assert line == "a" * 64 + "  myrepo-v1.tar.gz\n"


def test_checksum_line_digest_round_trip():
    """Test the hex part is the digest without its algorithm."""
    digest = "sha256:0123456789abcdef"
    checksum = to_checksum_line("myrepo", "v1", Descriptor(OCI_LAYER, digest)).split("  ")[0]
    assert "sha256:" + checksum == digest


@pytest.mark.parametrize("digest", ["sha512:" + "a" * 128, "a" * 64, "", "SHA256:" + "a" * 64])
def test_checksum_line_invalid_digest(digest):
    """Test non-sha256 digests are rejected."""
    with pytest.raises(InvalidDigestError, match="invalid digest"):
        to_checksum_line("myrepo", "v1", Descriptor(OCI_LAYER, digest))


def test_redirect_target(registry_client):
    """Test the redirect target is the blob URL."""
    url = to_redirect_target(registry_client, "myrepo", Descriptor(OCI_LAYER, DIGEST_A))
    assert url == f"{REGISTRY_URL}/v2/myrepo/blobs/{DIGEST_A}"


def test_build_checksums(myrepo, registry_client):
    """Test the checksum document lists every tag in registry order."""
    assert build_checksums(registry_client, "myrepo") == (
        "a" * 64 + "  myrepo-v1.tar.gz\n" + "b" * 64 + "  myrepo-v2.raw\n"
    )


def test_build_checksums_keeps_registry_order(registry, registry_client):
    """Test tags are not sorted."""
    registry.add_tags("myrepo", ["v2", "v1"])
    registry.add_manifest("myrepo", "v1", [(DOCKER_LAYER, DIGEST_A)])
    registry.add_manifest("myrepo", "v2", [(OCI_LAYER, DIGEST_B)])

    lines = build_checksums(registry_client, "myrepo").splitlines()
    assert [line.split("  ")[1] for line in lines] == ["myrepo-v2.raw", "myrepo-v1.tar.gz"]


def test_build_checksums_empty_repository(registry, registry_client):
    """Test a repository without tags has an empty document."""
    registry.add("/v2/myrepo/tags/list", {"name": "myrepo", "tags": None})
    assert build_checksums(registry_client, "myrepo") == ""


def test_build_checksums_aborts_on_failure(registry, registry_client):
    """Test one failing tag aborts the document."""
    registry.add_tags("myrepo", ["v1", "gone", "v2"])
    registry.add_manifest("myrepo", "v1", [(DOCKER_LAYER, DIGEST_A)])
    registry.add_manifest("myrepo", "v2", [(OCI_LAYER, DIGEST_B)])

    with pytest.raises(UpstreamError):
        build_checksums(registry_client, "myrepo")

    # v2 is never fetched
    assert [call["url"].rsplit("/", 1)[1] for call in registry.calls] == ["list", "v1", "gone"]


def test_build_checksums_skips_invalid_tags(myrepo, registry_client):
    """Test tags that cannot be requested back as files are skipped unresolved."""
    myrepo.add_tags("myrepo", ["v1", "-bad", "toolong", "v2"])

    assert build_checksums(registry_client, "myrepo", max_tag_length=4) == (
        "a" * 64 + "  myrepo-v1.tar.gz\n" + "b" * 64 + "  myrepo-v2.raw\n"
    )
    assert [call["url"].rsplit("/", 1)[1] for call in myrepo.calls] == ["list", "v1", "v2"]
