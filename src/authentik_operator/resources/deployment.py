"""
Desired state for the authentik Deployment.

The manifest is fully recomputed from the Authentik resource on every
reconcile. Labels for the selector and the pod template come from the same
helpers so the selector always matches the pods the template produces.
"""

import functools
import logging
from collections.abc import Mapping
from typing import Any

import pydantic
from kubernetes import client

from authentik_operator.constants import (
    API_GROUP,
    API_VERSION,
    DEFAULT_HTTP_PORT,
    DEFAULT_REPLICAS,
    KIND,
    LABEL_COMPONENT,
    LABEL_COMPONENT_VALUE,
    LABEL_CREATED_BY,
    LABEL_CREATED_BY_VALUE,
    LABEL_INSTANCE,
    LABEL_NAME,
    LABEL_NAME_VALUE,
    LABEL_VERSION,
    RESOURCE_PREFIX,
    SERVER_SUFFIX,
    WORKER_SUFFIX,
)
from authentik_operator.errors import (
    InvalidObjectError,
    ManifestBuildError,
    NoNamespaceError,
)
from authentik_operator.models.authentik import AuthentikSpec
from authentik_operator.resources.environment import build_env

logger = logging.getLogger(__name__)


def deployment_name(instance: str) -> str:
    """Name of the Deployment owned by an Authentik instance."""
    return f"{RESOURCE_PREFIX}{instance}"


def get_matching_labels(instance: str) -> dict[str, str]:
    """Labels used in the Deployment selector."""
    return {
        LABEL_NAME: LABEL_NAME_VALUE,
        LABEL_COMPONENT: LABEL_COMPONENT_VALUE,
        LABEL_INSTANCE: instance,
    }


def get_labels(instance: str, version: str) -> dict[str, str]:
    """Full label set for the Deployment and its pod template."""
    labels = get_matching_labels(instance)
    labels[LABEL_CREATED_BY] = LABEL_CREATED_BY_VALUE
    labels[LABEL_VERSION] = version
    return labels


def build_owner_reference(name: str, uid: str) -> client.V1OwnerReference:
    """Owner reference binding a resource's lifecycle to its Authentik."""
    return client.V1OwnerReference(
        api_version=f"{API_GROUP}/{API_VERSION}",
        kind=KIND,
        name=name,
        uid=uid,
        controller=True,
        block_owner_deletion=True,
    )


def _instance_identity(body: Mapping[str, Any]) -> tuple[str, str, str]:
    metadata = body.get("metadata") or {}

    name = metadata.get("name")
    if not name:
        raise InvalidObjectError("Missing instance name.")

    namespace = metadata.get("namespace")
    if not namespace:
        raise NoNamespaceError(name)

    uid = metadata.get("uid")
    if not uid:
        raise InvalidObjectError(
            f"Authentik '{name}' has no uid yet; it has not been admitted by the cluster"
        )

    return name, namespace, uid


def parse_spec(name: str, raw_spec: Mapping[str, Any] | None) -> AuthentikSpec:
    try:
        return AuthentikSpec.model_validate(dict(raw_spec or {}))
    except pydantic.ValidationError as e:
        raise ManifestBuildError(
            f"Invalid spec for Authentik '{name}': {e}", cause=e
        ) from e


def _container(
    name: str,
    spec: AuthentikSpec,
    args: list[str],
    env: list[client.V1EnvVar],
    ports: list[client.V1ContainerPort] | None = None,
) -> client.V1Container:
    return client.V1Container(
        name=name,
        image=spec.image.reference,
        image_pull_policy=spec.image.pull_policy,
        args=args,
        ports=ports,
        env=env,
    )


def build_deployment(body: Mapping[str, Any]) -> client.V1Deployment:
    """
    Build the Deployment for an Authentik resource.

    Args:
        body: The Authentik custom resource as delivered by the API server

    Returns:
        Deployment running the authentik server and worker

    Raises:
        InvalidObjectError: If the resource has no name or uid
        NoNamespaceError: If the resource has no namespace
        ManifestBuildError: If the spec or the manifest structure is invalid
    """
    name, namespace, uid = _instance_identity(body)
    spec = parse_spec(name, body.get("spec"))

    resource_name = deployment_name(name)
    labels = get_labels(name, spec.image.tag)
    env = build_env(spec)

    try:
        server = _container(
            f"{resource_name}{SERVER_SUFFIX}",
            spec,
            ["server"],
            env,
            ports=[
                client.V1ContainerPort(
                    name="http", container_port=DEFAULT_HTTP_PORT, protocol="TCP"
                )
            ],
        )
        worker = _container(f"{resource_name}{WORKER_SUFFIX}", spec, ["worker"], env)

        deployment = client.V1Deployment(
            api_version="apps/v1",
            kind="Deployment",
            metadata=client.V1ObjectMeta(
                name=resource_name,
                namespace=namespace,
                labels=labels,
                owner_references=[build_owner_reference(name, uid)],
            ),
            spec=client.V1DeploymentSpec(
                replicas=DEFAULT_REPLICAS,
                selector=client.V1LabelSelector(
                    match_labels=get_matching_labels(name)
                ),
                template=client.V1PodTemplateSpec(
                    metadata=client.V1ObjectMeta(labels=get_labels(name, spec.image.tag)),
                    spec=client.V1PodSpec(containers=[server, worker]),
                ),
            ),
        )
    except (TypeError, ValueError) as e:
        raise ManifestBuildError(
            f"Failed to assemble Deployment {resource_name}: {e}", cause=e
        ) from e

    logger.debug(f"Built desired Deployment {resource_name} in {namespace}")
    return deployment


@functools.lru_cache(maxsize=1)
def _serializer() -> client.ApiClient:
    return client.ApiClient()


def deployment_to_manifest(deployment: client.V1Deployment) -> dict[str, Any]:
    """Serialize a Deployment to the camelCase dict used for server-side apply."""
    return _serializer().sanitize_for_serialization(deployment)
