"""
Base reconciler class providing common patterns for resource reconciliation.

This module defines the BaseReconciler class that implements standard
patterns for status management, error translation and lifecycle logging.
Retry and backoff are left to kopf.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any

from kubernetes import client
from kubernetes.client.rest import ApiException

from ..akapi.errors import RouteError
from ..constants import (
    CONDITION_FALSE,
    CONDITION_READY,
    CONDITION_TRUE,
    PHASE_FAILED,
    PHASE_READY,
)
from ..errors import KubernetesAPIError, OperatorError
from ..observability.logging import OperatorLogger


# Client errors that a later pass can resolve: races with other writers and throttling
TRANSIENT_CLIENT_STATUSES = frozenset({404, 409, 429})


def kubernetes_api_error(e: ApiException) -> KubernetesAPIError:
    """Wrap an ApiException, keeping its status and reason."""
    http_status = getattr(e, "status", None)
    return KubernetesAPIError(
        message=str(e),
        reason=getattr(e, "reason", None),
        status=http_status,
        retryable=(
            http_status is None
            or http_status >= 500
            or http_status in TRANSIENT_CLIENT_STATUSES
        ),
        cause=e,
    )


class BaseReconciler(ABC):
    """
    Base class for all resource reconcilers.

    Provides common patterns for:
    - Status management with conditions
    - Translation of failures into kopf errors
    - Kubernetes client management
    """

    resource_type = "resource"

    def __init__(self, k8s_client: client.ApiClient | None = None):
        """
        Initialize base reconciler.

        Args:
            k8s_client: Kubernetes API client, will be created if not provided
        """
        self.k8s_client = k8s_client
        self.logger = OperatorLogger(self.__class__.__name__)

    @property
    def kubernetes_client(self) -> client.ApiClient:
        """Get or create Kubernetes API client."""
        if self.k8s_client is None:
            from ..utils.kubernetes import get_kubernetes_client

            self.k8s_client = get_kubernetes_client()
        return self.k8s_client

    async def reconcile(
        self, body: Mapping[str, Any], status: MutableMapping[str, Any]
    ) -> Any:
        """
        Main reconciliation entry point.

        Runs ``do_reconcile`` and records the outcome on ``status``. Failures
        are re-raised as kopf errors so kopf decides on requeue and backoff.

        Args:
            body: The custom resource body
            status: Mutable status patch of the resource

        Returns:
            Whatever ``do_reconcile`` returned
        """
        metadata = body.get("metadata") or {}
        name = metadata.get("name", "")
        namespace = metadata.get("namespace", "")
        generation = metadata.get("generation", 0)
        start_time = time.time()

        self.logger.log_reconciliation_start(
            resource_type=self.resource_type, resource_name=name, namespace=namespace
        )

        try:
            result = await self.do_reconcile(body)
        except Exception as e:
            error = self._as_operator_error(e)
            self.logger.log_reconciliation_error(
                resource_type=self.resource_type,
                resource_name=name,
                namespace=namespace,
                error=error,
                duration=time.time() - start_time,
            )
            self.update_status_failed(status, str(error), generation)
            raise error.as_kopf_error() from e

        self.update_status_ready(
            status, "Reconciliation completed successfully", generation
        )
        self.logger.log_reconciliation_success(
            resource_type=self.resource_type,
            resource_name=name,
            namespace=namespace,
            duration=time.time() - start_time,
        )
        return result

    @staticmethod
    def _as_operator_error(e: Exception) -> OperatorError:
        if isinstance(e, OperatorError):
            return e
        if isinstance(e, ApiException):
            return kubernetes_api_error(e)
        if isinstance(e, RouteError):
            return e.as_operator_error()
        return OperatorError(
            f"Unexpected error during reconciliation: {e}",
            category="unexpected",
            cause=e,
        )

    @abstractmethod
    async def do_reconcile(self, body: Mapping[str, Any]) -> Any:
        """
        Perform the actual reconciliation logic.

        Must raise on the first failure; no partial application is attempted.
        """

    async def cleanup(self, body: Mapping[str, Any]) -> None:
        """Clean up resources not covered by owner reference cascade."""

    def update_status_ready(
        self,
        status: MutableMapping[str, Any],
        message: str = "Resource is ready",
        generation: int = 0,
    ) -> None:
        """Update status to indicate resource is ready."""
        status["phase"] = PHASE_READY
        status["message"] = message
        status["observedGeneration"] = generation
        self._set_condition(
            status,
            CONDITION_READY,
            CONDITION_TRUE,
            "ReconciliationSucceeded",
            message,
            generation,
        )

    def update_status_failed(
        self,
        status: MutableMapping[str, Any],
        message: str,
        generation: int = 0,
    ) -> None:
        """Update status to indicate the last reconcile failed."""
        status["phase"] = PHASE_FAILED
        status["message"] = message
        status["observedGeneration"] = generation
        self._set_condition(
            status,
            CONDITION_READY,
            CONDITION_FALSE,
            "ReconciliationFailed",
            message,
            generation,
        )

    def _set_condition(
        self,
        status: MutableMapping[str, Any],
        condition_type: str,
        condition_status: str,
        reason: str,
        message: str,
        generation: int = 0,
    ) -> None:
        """Add or update a status condition, keeping lastTransitionTime stable."""
        conditions = [dict(c) for c in status.get("conditions") or []]
        previous = next(
            (c for c in conditions if c.get("type") == condition_type), None
        )

        transition_time = datetime.now(UTC).isoformat()
        if previous and previous.get("status") == condition_status:
            transition_time = previous.get("lastTransitionTime", transition_time)

        condition = {
            "type": condition_type,
            "status": condition_status,
            "reason": reason,
            "message": message,
            "lastTransitionTime": transition_time,
            "observedGeneration": generation,
        }

        conditions = [c for c in conditions if c.get("type") != condition_type]
        conditions.append(condition)
        status["conditions"] = conditions
