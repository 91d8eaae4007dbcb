"""
Apply reconciler for the authentik Deployment.

Creates the Deployment when it is absent and otherwise re-applies the full
desired manifest as a forced server-side apply, so manual drift and partial
earlier failures converge on every pass.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from kubernetes import client
from kubernetes.client.rest import ApiException

from ..resources.deployment import build_deployment, deployment_to_manifest
from ..settings import settings
from .base_reconciler import BaseReconciler, kubernetes_api_error

APPLY_PATCH_CONTENT_TYPE = "application/apply-patch+yaml"


class DeploymentReconciler(BaseReconciler):
    """
    Reconciler for the Deployment owned by an Authentik resource.

    The Deployment is either absent (created) or present (force-applied).
    Removal is handled by the owner reference cascade.
    """

    resource_type = "authentik"

    def __init__(
        self,
        k8s_client: client.ApiClient | None = None,
        field_manager: str | None = None,
    ):
        super().__init__(k8s_client)
        self.field_manager = field_manager or settings.field_manager

    async def do_reconcile(self, body: Mapping[str, Any]) -> str:
        """
        Create or force-apply the Deployment.

        Args:
            body: The Authentik custom resource

        Returns:
            "created" or "patched"

        Raises:
            BuildError: If the desired state cannot be built (before any API call)
            KubernetesAPIError: If any Kubernetes API call fails
        """
        deployment = build_deployment(body)
        name = deployment.metadata.name
        namespace = deployment.metadata.namespace
        apps_api = client.AppsV1Api(self.kubernetes_client)

        try:
            if await self._exists(apps_api, name, namespace):
                await asyncio.to_thread(
                    apps_api.patch_namespaced_deployment,
                    name=name,
                    namespace=namespace,
                    body=deployment_to_manifest(deployment),
                    field_manager=self.field_manager,
                    force=True,
                    _content_type=APPLY_PATCH_CONTENT_TYPE,
                )
                self.logger.info(
                    f"Applied deployment {name}",
                    resource_name=name,
                    namespace=namespace,
                    operation="apply",
                )
                return "patched"

            await asyncio.to_thread(
                apps_api.create_namespaced_deployment,
                namespace=namespace,
                body=deployment,
            )
        except ApiException as e:
            self.logger.error(f"Failed to reconcile deployment {name}: {e}")
            raise kubernetes_api_error(e) from e

        self.logger.info(
            f"Created deployment {name}",
            resource_name=name,
            namespace=namespace,
            operation="create",
        )
        return "created"

    async def _exists(
        self, apps_api: client.AppsV1Api, name: str, namespace: str
    ) -> bool:
        try:
            await asyncio.to_thread(
                apps_api.read_namespaced_deployment, name=name, namespace=namespace
            )
        except ApiException as e:
            if e.status == 404:
                return False
            raise
        return True

    async def cleanup(self, body: Mapping[str, Any]) -> None:
        """
        Nothing to clean up: the Deployment carries an owner reference to the
        Authentik resource and is garbage-collected with it.
        """
        metadata = body.get("metadata") or {}
        self.logger.info(
            f"Deployment for {metadata.get('name')} is removed by owner reference cascade",
            resource_name=metadata.get("name"),
            namespace=metadata.get("namespace"),
            operation="cleanup",
        )
