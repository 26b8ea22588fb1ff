"""Test configuration and fixtures."""

import pytest

from regfs.client import RegistryClient
from regfs.routes import create_app
from tests.helpers import (
    DIGEST_A,
    DIGEST_B,
    DOCKER_LAYER,
    OCI_LAYER,
    REGISTRY_URL,
    FakeRegistry,
    make_config,
)


@pytest.fixture
def registry():
    """Fake upstream registry."""
    return FakeRegistry()


@pytest.fixture
def myrepo(registry):
    """Repository "myrepo" with a Docker gzip layer at v1 and an OCI layer at v2."""
    registry.add_tags("myrepo", ["v1", "v2"])
    registry.add_manifest("myrepo", "v1", [(DOCKER_LAYER, DIGEST_A)])
    registry.add_manifest("myrepo", "v2", [(OCI_LAYER, DIGEST_B)])
    return registry


@pytest.fixture
def registry_client(registry):
    return RegistryClient(REGISTRY_URL, timeout=5, session=registry)


@pytest.fixture
def app(registry):
    app = create_app(make_config(), session=registry)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
