"""Shared fixtures for authentik operator unit tests."""

import copy

import pytest

BASE_SPEC = {
    "image": {
        "repository": "ghcr.io/goauthentik/server",
        "tag": "2024.2.1",
        "pullPolicy": "IfNotPresent",
    },
    "secretKey": "s3cret",
    "footerLinks": [{"name": "Docs", "href": "https://docs.example.com"}],
    "postgres": {
        "host": "postgres.db",
        "port": 5432,
        "database": "authentik",
        "username": "authentik",
        "password": "pgpass",
    },
    "redis": {"host": "redis.cache", "port": 6379},
}


def make_body(name="prod", namespace="auth", uid="0f4c2a1e-uid", spec=None):
    """Build an Authentik custom resource body as kopf delivers it."""
    metadata = {"generation": 1}
    if name is not None:
        metadata["name"] = name
    if namespace is not None:
        metadata["namespace"] = namespace
    if uid is not None:
        metadata["uid"] = uid
    return {
        "apiVersion": "ak.dany.dev/v1",
        "kind": "Authentik",
        "metadata": metadata,
        "spec": copy.deepcopy(spec if spec is not None else BASE_SPEC),
    }


@pytest.fixture
def spec_dict():
    return copy.deepcopy(BASE_SPEC)


@pytest.fixture
def authentik_body():
    return make_body()


@pytest.fixture
def make_authentik_body():
    return make_body
