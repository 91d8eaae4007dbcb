"""Unit tests for Authentik kopf handlers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import kopf
import pytest

from authentik_operator.handlers import authentik as handlers


class TestStatusPatch:
    def test_seeds_observed_conditions(self, authentik_body):
        authentik_body["status"] = {
            "conditions": [{"type": "Ready", "status": "True"}]
        }
        patch_obj = SimpleNamespace(status={})

        status = handlers._status_patch(authentik_body, patch_obj)

        assert status["conditions"] == [{"type": "Ready", "status": "True"}]
        assert status["conditions"][0] is not authentik_body["status"]["conditions"][0]

    def test_without_status(self, authentik_body):
        status = handlers._status_patch(authentik_body, SimpleNamespace(status={}))

        assert status["conditions"] == []


class TestHandlers:
    @pytest.mark.asyncio
    async def test_reconcile_uses_memo_client(self, authentik_body):
        k8s_client = MagicMock()
        reconciler = MagicMock()
        reconciler.reconcile = AsyncMock(return_value="created")
        patch_obj = SimpleNamespace(status={})

        with patch.object(
            handlers, "DeploymentReconciler", return_value=reconciler
        ) as reconciler_cls:
            result = await handlers.reconcile_authentik(
                body=authentik_body,
                patch=patch_obj,
                memo=kopf.Memo(k8s_client=k8s_client),
            )

        assert result is None
        reconciler_cls.assert_called_once_with(k8s_client=k8s_client)
        reconciler.reconcile.assert_awaited_once_with(authentik_body, patch_obj.status)

    @pytest.mark.asyncio
    async def test_delete_runs_cleanup(self, authentik_body):
        reconciler = MagicMock()
        reconciler.cleanup = AsyncMock()

        with patch.object(handlers, "DeploymentReconciler", return_value=reconciler):
            await handlers.delete_authentik(
                body=authentik_body, memo=kopf.Memo(k8s_client=MagicMock())
            )

        reconciler.cleanup.assert_awaited_once_with(authentik_body)
