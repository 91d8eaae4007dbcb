"""
Errors raised by the authentik API client.

Two layers:
- ``AkApiError`` and subclasses describe transport and decoding failures and
  are the same for every route.
- ``RouteError`` and subclasses are the outcomes a route can report. A
  transport or decoding failure reaches the caller as ``RequestError``
  wrapping the ``AkApiError``.
"""

from ..errors import AuthentikAPIError


class AkApiError(Exception):
    """Base exception for transport and decoding failures."""


class AkApiConnectionError(AkApiError):
    """The request could not be sent: connection refused, timeout, network."""


class AkApiStreamError(AkApiError):
    """The response body could not be read."""


class AkApiSerializeError(AkApiError):
    """The response body is not the expected payload."""


class RouteError(Exception):
    """Base exception for route outcomes other than success."""

    status_code: int | None = None

    def as_operator_error(self) -> AuthentikAPIError:
        """Convert to an operator error for kopf handlers."""
        return AuthentikAPIError(str(self), status_code=self.status_code, cause=self)


class NotFoundError(RouteError):
    """The addressed object does not exist."""

    status_code = 404


class ExistsError(RouteError):
    """The object to create already exists."""

    status_code = 400


class UnknownStatusError(RouteError):
    """The server answered with a status code the route does not expect."""

    def __init__(self, status_code: int):
        super().__init__(f"Invalid status code {status_code}")
        self.status_code = status_code


class RequestError(RouteError):
    """The request failed in transport or its response could not be decoded."""

    def __init__(self, error: AkApiError):
        super().__init__(f"Failed to send HTTP request: {error}")
        self.error = error
