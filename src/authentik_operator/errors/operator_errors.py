"""
Operator error hierarchy with categorization and retry logic.

This module defines the error types used throughout the authentik operator,
providing clear categorization and integration with kopf's retry mechanisms.
"""

import kopf


class OperatorError(Exception):
    """
    Base error class for all operator-related exceptions.

    Provides categorization, retry behavior, and user guidance for resolution.
    """

    def __init__(
        self,
        message: str,
        category: str,
        retryable: bool = True,
        delay: int = 30,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize operator error.

        Args:
            message: Human-readable error description
            category: Error category (build, external, ...)
            retryable: Whether kopf should retry this operation
            delay: Suggested retry delay in seconds
            user_action: What user should do to resolve the issue
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.category = category
        self.retryable = retryable
        self.delay = delay
        self.user_action = user_action
        self.cause = cause

    def as_kopf_error(self):
        """Convert to appropriate kopf exception type."""
        if self.retryable:
            return kopf.TemporaryError(str(self), delay=self.delay)
        else:
            return kopf.PermanentError(str(self))

    def __str__(self) -> str:
        """Enhanced string representation with user guidance."""
        base_msg = super().__str__()
        if self.user_action:
            return f"{base_msg}\nAction required: {self.user_action}"
        return base_msg


class BuildError(OperatorError):
    """
    Error detected while building the desired state, before any network call.

    Build errors are never retried: the same input produces the same failure.
    """

    def __init__(
        self,
        message: str,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category="build",
            retryable=False,
            user_action=user_action
            or "Check resource specification and fix validation errors",
            cause=cause,
        )


class InvalidObjectError(BuildError):
    """The instance object is missing a required identifying field."""


class NoNamespaceError(BuildError):
    """The instance object is not namespaced."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Expected Authentik '{name}' to be namespaced",
            user_action="Create the Authentik resource inside a namespace",
        )
        self.name = name


class ManifestBuildError(BuildError):
    """Structural mismatch while assembling a manifest."""


class ExternalServiceError(OperatorError):
    """Error communicating with external services."""

    def __init__(
        self,
        service: str,
        message: str,
        retryable: bool = True,
        delay: int = 60,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        action = user_action or f"Check {service} connectivity and credentials"
        super().__init__(
            message=f"{service} error: {message}",
            category="external",
            retryable=retryable,
            delay=delay,
            user_action=action,
            cause=cause,
        )


class KubernetesAPIError(ExternalServiceError):
    """Error communicating with Kubernetes API."""

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        status: int | None = None,
        retryable: bool = True,
        cause: Exception | None = None,
    ):
        if reason:
            message = f"{message} (reason: {reason})"

        # Some K8s errors are not retryable
        non_retryable_reasons = {"Forbidden", "Unauthorized", "Invalid"}
        if reason in non_retryable_reasons:
            retryable = False

        super().__init__(
            service="Kubernetes API",
            message=message,
            retryable=retryable,
            user_action="Check RBAC permissions and cluster connectivity",
            cause=cause,
        )
        self.reason = reason
        self.status = status


class AuthentikAPIError(ExternalServiceError):
    """Error communicating with the authentik REST API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = True,
        cause: Exception | None = None,
    ):
        if status_code:
            message = f"HTTP {status_code}: {message}"

        # 4xx errors are generally not retryable (client errors)
        if status_code and 400 <= status_code < 500:
            retryable = False

        super().__init__(
            service="authentik API",
            message=message,
            retryable=retryable,
            user_action="Check authentik instance status and API token",
            cause=cause,
        )
        self.status_code = status_code
