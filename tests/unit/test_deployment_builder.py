"""Unit tests for the authentik Deployment builder."""

import copy

import pytest

from authentik_operator.errors import (
    InvalidObjectError,
    ManifestBuildError,
    NoNamespaceError,
)
from authentik_operator.resources.deployment import (
    build_deployment,
    build_owner_reference,
    deployment_name,
    deployment_to_manifest,
    get_labels,
    get_matching_labels,
)


class TestLabels:
    def test_matching_labels(self):
        assert get_matching_labels("prod") == {
            "app.kubernetes.io/name": "authentik",
            "app.kubernetes.io/component": "server",
            "app.kubernetes.io/instance": "prod",
        }

    def test_full_labels(self):
        assert get_labels("prod", "2024.2.1") == {
            "app.kubernetes.io/name": "authentik",
            "app.kubernetes.io/component": "server",
            "app.kubernetes.io/instance": "prod",
            "app.kubernetes.io/created-by": "authentik-operator",
            "app.kubernetes.io/version": "2024.2.1",
        }

    @pytest.mark.parametrize("instance", ["prod", "staging", "a-b-c"])
    def test_matching_labels_are_subset_of_full_labels(self, instance):
        matching = get_matching_labels(instance)
        full = get_labels(instance, "1.0")

        assert matching.items() <= full.items()


class TestBuildDeployment:
    def test_prod_scenario(self, authentik_body):
        deployment = build_deployment(authentik_body)

        assert deployment.api_version == "apps/v1"
        assert deployment.kind == "Deployment"
        assert deployment.metadata.name == "authentik-prod"
        assert deployment.metadata.namespace == "auth"
        assert deployment.spec.replicas == 1

        server, worker = deployment.spec.template.spec.containers
        assert server.name == "authentik-prod-server"
        assert server.args == ["server"]
        assert len(server.ports) == 1
        assert server.ports[0].container_port == 9000
        assert server.ports[0].name == "http"
        assert worker.name == "authentik-prod-worker"
        assert worker.args == ["worker"]
        assert worker.ports is None

        password = [e for e in server.env if e.name == "AUTHENTIK_POSTGRESQL__PASSWORD"]
        assert password[0].value == "pgpass"

    def test_containers_share_image_and_env(self, authentik_body):
        server, worker = build_deployment(authentik_body).spec.template.spec.containers

        assert server.image == "ghcr.io/goauthentik/server:2024.2.1"
        assert worker.image == server.image
        assert server.image_pull_policy == "IfNotPresent"
        assert worker.image_pull_policy == server.image_pull_policy
        assert worker.env == server.env

    def test_secret_password_scenario(self, make_authentik_body, spec_dict):
        spec_dict["postgres"].update(
            {"passwordSecret": "pg-secret", "passwordSecretKey": "pw"}
        )
        with pytest.warns(UserWarning):
            deployment = build_deployment(make_authentik_body(spec=spec_dict))

        for container in deployment.spec.template.spec.containers:
            password = [
                e for e in container.env if e.name == "AUTHENTIK_POSTGRESQL__PASSWORD"
            ]
            assert len(password) == 1
            assert password[0].value is None
            assert password[0].value_from.secret_key_ref.name == "pg-secret"
            assert password[0].value_from.secret_key_ref.key == "pw"

    def test_labels_and_selector(self, authentik_body):
        deployment = build_deployment(authentik_body)

        selector = deployment.spec.selector.match_labels
        template_labels = deployment.spec.template.metadata.labels

        assert deployment.metadata.labels == get_labels("prod", "2024.2.1")
        assert template_labels == get_labels("prod", "2024.2.1")
        assert selector == get_matching_labels("prod")
        assert selector.items() <= template_labels.items()

    def test_owner_reference(self, authentik_body):
        refs = build_deployment(authentik_body).metadata.owner_references

        assert len(refs) == 1
        assert refs[0].api_version == "ak.dany.dev/v1"
        assert refs[0].kind == "Authentik"
        assert refs[0].name == "prod"
        assert refs[0].uid == "0f4c2a1e-uid"
        assert refs[0].controller is True

    def test_deterministic(self, authentik_body):
        first = build_deployment(authentik_body)
        second = build_deployment(authentik_body)

        assert first.metadata.name == second.metadata.name
        assert first.metadata.labels == second.metadata.labels
        assert deployment_to_manifest(first) == deployment_to_manifest(second)

    def test_does_not_mutate_body(self, authentik_body):
        before = copy.deepcopy(authentik_body)
        build_deployment(authentik_body)

        assert authentik_body == before

    def test_missing_name(self, make_authentik_body):
        with pytest.raises(InvalidObjectError, match="Missing instance name"):
            build_deployment(make_authentik_body(name=None))

    def test_missing_namespace(self, make_authentik_body):
        with pytest.raises(NoNamespaceError) as exc_info:
            build_deployment(make_authentik_body(namespace=None))

        assert exc_info.value.name == "prod"

    def test_missing_uid(self, make_authentik_body):
        with pytest.raises(InvalidObjectError, match="no uid"):
            build_deployment(make_authentik_body(uid=None))

    def test_invalid_spec(self, make_authentik_body, spec_dict):
        del spec_dict["postgres"]

        with pytest.raises(ManifestBuildError, match="Invalid spec"):
            build_deployment(make_authentik_body(spec=spec_dict))

    def test_invalid_port(self, make_authentik_body, spec_dict):
        spec_dict["redis"]["port"] = 70000

        with pytest.raises(ManifestBuildError):
            build_deployment(make_authentik_body(spec=spec_dict))

    def test_build_errors_are_not_retryable(self, make_authentik_body):
        with pytest.raises(InvalidObjectError) as exc_info:
            build_deployment(make_authentik_body(name=None))

        assert exc_info.value.retryable is False


class TestManifest:
    def test_manifest_uses_api_field_names(self, authentik_body):
        manifest = deployment_to_manifest(build_deployment(authentik_body))

        assert manifest["apiVersion"] == "apps/v1"
        assert manifest["metadata"]["name"] == "authentik-prod"
        assert manifest["metadata"]["ownerReferences"][0]["controller"] is True
        assert manifest["spec"]["selector"]["matchLabels"] == get_matching_labels(
            "prod"
        )
        containers = manifest["spec"]["template"]["spec"]["containers"]
        assert [c["name"] for c in containers] == [
            "authentik-prod-server",
            "authentik-prod-worker",
        ]
        assert containers[0]["imagePullPolicy"] == "IfNotPresent"
        assert containers[0]["ports"] == [
            {"name": "http", "containerPort": 9000, "protocol": "TCP"}
        ]
        assert "ports" not in containers[1]


def test_deployment_name():
    assert deployment_name("prod") == "authentik-prod"


def test_owner_reference_blocks_owner_deletion():
    ref = build_owner_reference("prod", "uid-1")

    assert ref.block_owner_deletion is True
