"""
Error handling module for the authentik operator.

This module provides an error hierarchy that integrates with kopf
and separates build failures from cluster and remote API failures.
"""

from .operator_errors import (
    AuthentikAPIError,
    BuildError,
    ExternalServiceError,
    InvalidObjectError,
    KubernetesAPIError,
    ManifestBuildError,
    NoNamespaceError,
    OperatorError,
)

__all__ = [
    "OperatorError",
    "BuildError",
    "InvalidObjectError",
    "NoNamespaceError",
    "ManifestBuildError",
    "ExternalServiceError",
    "KubernetesAPIError",
    "AuthentikAPIError",
]
