"""
Service layer for the authentik operator.

This module provides reconciler services that handle the business logic
for managing authentik resources, separated from the kopf handler layer.
"""

from .base_reconciler import BaseReconciler
from .deployment_reconciler import DeploymentReconciler

__all__ = [
    "BaseReconciler",
    "DeploymentReconciler",
]
