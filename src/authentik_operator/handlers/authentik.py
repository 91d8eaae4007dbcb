"""
Authentik instance handlers.

Wires kopf events for Authentik resources to the Deployment reconciler.
kopf owns scheduling, per-resource serialization and retry; the handlers
only translate events into reconcile calls.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

import kopf

from authentik_operator.constants import API_GROUP, API_VERSION, PLURAL
from authentik_operator.services import DeploymentReconciler


def _status_patch(body: Mapping[str, Any], patch: kopf.Patch) -> MutableMapping[str, Any]:
    # Start from the observed conditions so transition times survive the patch
    status = patch.status
    if "conditions" not in status:
        observed = (body.get("status") or {}).get("conditions") or []
        status["conditions"] = [dict(c) for c in observed]
    return status


@kopf.on.create(PLURAL, group=API_GROUP, version=API_VERSION)
@kopf.on.update(PLURAL, group=API_GROUP, version=API_VERSION)
@kopf.on.resume(PLURAL, group=API_GROUP, version=API_VERSION)
async def reconcile_authentik(
    body: kopf.Body,
    patch: kopf.Patch,
    memo: kopf.Memo,
    **_: Any,
) -> None:
    """Create or force-apply the Deployment for an Authentik resource."""
    reconciler = DeploymentReconciler(k8s_client=memo.k8s_client)
    await reconciler.reconcile(body, _status_patch(body, patch))


@kopf.on.delete(PLURAL, group=API_GROUP, version=API_VERSION, optional=True)
async def delete_authentik(body: kopf.Body, memo: kopf.Memo, **_: Any) -> None:
    """Owned resources are garbage-collected through their owner reference."""
    reconciler = DeploymentReconciler(k8s_client=memo.k8s_client)
    await reconciler.cleanup(body)
