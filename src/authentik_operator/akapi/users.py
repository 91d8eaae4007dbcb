"""User routes."""

import httpx
from pydantic import BaseModel

from .errors import AkApiSerializeError, ExistsError
from .route import AkApiRoute
from .server import AkServer


class CreateServiceAccountBody(BaseModel):
    name: str
    create_group: bool


class CreateServiceAccountResponse(BaseModel):
    """Created service account with its API token. Unknown fields are ignored."""

    model_config = {"extra": "ignore"}

    username: str
    user_uid: str
    user_pk: int
    token: str


class CreateServiceAccount(
    AkApiRoute[CreateServiceAccountBody, CreateServiceAccountResponse]
):
    """
    Create a service account.

    authentik answers 400 when the account already exists, which is reported
    as ``ExistsError``.
    """

    method = "POST"

    def path(self, body: CreateServiceAccountBody) -> str:
        return "/api/v3/core/users/service_account/"

    def payload(self, body: CreateServiceAccountBody) -> BaseModel:
        return body

    async def handle(
        self, api: AkServer, response: httpx.Response
    ) -> CreateServiceAccountResponse:
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise ExistsError("The user probably already exists!")
        if not response.is_success:
            raise AkApiSerializeError(
                f"Expected a service account payload, got status {response.status_code}"
            )
        return await api.decode(response, CreateServiceAccountResponse)
