#!/usr/bin/env python3
"""
Authentik Operator - Main entry point for the Kopf-based authentik operator.

Usage:
    python -m authentik_operator.operator
    # Or with kopf directly:
    kopf run -m authentik_operator.operator --all-namespaces

Environment Variables:
    AUTHENTIK_OPERATOR_NAMESPACES: Comma-separated list of namespaces to watch
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    JSON_LOGS: Set to 'false' for plain text logs
"""

import logging

import kopf

# Importing handler modules registers their decorators with kopf
from authentik_operator.handlers import authentik  # noqa: F401
from authentik_operator.observability.logging import setup_structured_logging
from authentik_operator.settings import settings as operator_settings
from authentik_operator.utils.kubernetes import get_kubernetes_client


def configure_logging() -> None:
    """Configure structured logging for the operator based on operator_settings."""
    setup_structured_logging(
        log_level=operator_settings.log_level.upper(),
        enable_json_formatting=operator_settings.json_logs,
        correlation_id_enabled=operator_settings.correlation_ids,
    )


@kopf.on.startup()
async def startup_handler(
    settings: kopf.OperatorSettings, memo: kopf.Memo, **_
) -> None:
    """
    Operator startup configuration.

    Configures logging, kopf behaviour and the shared Kubernetes client
    handed to every reconcile through ``memo``.
    """
    configure_logging()
    logging.info("Starting authentik Operator...")

    settings.watching.reconnect_backoff = 1.0
    settings.posting.level = logging.WARNING

    memo.k8s_client = get_kubernetes_client()


@kopf.on.cleanup()
async def cleanup_handler(memo: kopf.Memo, **_) -> None:
    k8s_client = memo.get("k8s_client")
    if k8s_client is not None:
        k8s_client.close()
    logging.info("authentik Operator stopped")


def main() -> None:
    """Run the operator in standalone mode."""
    kopf.run(
        clusterwide=operator_settings.watched_namespaces is None,
        namespaces=operator_settings.watched_namespaces or [],
    )


if __name__ == "__main__":
    main()
