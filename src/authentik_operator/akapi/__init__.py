"""
Client for the authentik REST API.

Each operation is a route class executed against an AkServer:

    async with AkServer("http://authentik-prod.auth.svc:9000") as api:
        await DeleteFlow().send(api, token, "my-flow")
"""

from .errors import (
    AkApiConnectionError,
    AkApiError,
    AkApiSerializeError,
    AkApiStreamError,
    ExistsError,
    NotFoundError,
    RequestError,
    RouteError,
    UnknownStatusError,
)
from .flows import DeleteFlow
from .route import AkApiRoute, DeleteBySlugRoute
from .server import AkServer, encode_segment
from .stages import DeleteStage
from .users import (
    CreateServiceAccount,
    CreateServiceAccountBody,
    CreateServiceAccountResponse,
)

__all__ = [
    "AkServer",
    "AkApiRoute",
    "DeleteBySlugRoute",
    "encode_segment",
    "DeleteFlow",
    "DeleteStage",
    "CreateServiceAccount",
    "CreateServiceAccountBody",
    "CreateServiceAccountResponse",
    "AkApiError",
    "AkApiConnectionError",
    "AkApiStreamError",
    "AkApiSerializeError",
    "RouteError",
    "NotFoundError",
    "ExistsError",
    "UnknownStatusError",
    "RequestError",
]
