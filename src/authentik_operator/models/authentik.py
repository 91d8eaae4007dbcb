"""
Pydantic models for Authentik instance resources.

This module defines type-safe data models for the Authentik custom resource.
The spec is treated as an immutable snapshot for the duration of a
reconcile pass.
"""

import warnings
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from authentik_operator.constants import (
    DEFAULT_IMAGE_REPOSITORY,
    DEFAULT_POSTGRES_PORT,
    DEFAULT_PULL_POLICY,
    DEFAULT_REDIS_PORT,
    DEFAULT_SMTP_PORT,
    DEFAULT_SMTP_TIMEOUT,
)


def _validate_port(v: int) -> int:
    if v < 1 or v > 65535:
        raise ValueError("Port must be between 1 and 65535")
    return v


class AuthentikImage(BaseModel):
    """Container image used for both server and worker."""

    model_config = {"populate_by_name": True, "frozen": True}

    repository: str = Field(
        DEFAULT_IMAGE_REPOSITORY, description="Image repository"
    )
    tag: str = Field(..., description="Image tag, also used as version label")
    pull_policy: Literal["Always", "IfNotPresent", "Never"] = Field(
        DEFAULT_PULL_POLICY, alias="pullPolicy", description="Image pull policy"
    )

    @property
    def reference(self) -> str:
        return f"{self.repository}:{self.tag}"


class FooterLink(BaseModel):
    """Link shown in the footer of authentik's flow pages."""

    model_config = {"frozen": True}

    name: str
    href: str


class AuthentikPostgres(BaseModel):
    """
    PostgreSQL connection settings.

    The password is taken from ``passwordSecret``/``passwordSecretKey`` when
    both are set, otherwise from the literal ``password`` field.
    """

    model_config = {"populate_by_name": True, "frozen": True}

    host: str = Field(..., description="Database host")
    port: int = Field(DEFAULT_POSTGRES_PORT, description="Database port")
    database: str = Field(..., description="Database name")
    username: str = Field(..., description="Database username")
    password: str = Field("", description="Literal database password")
    password_secret: str | None = Field(
        None,
        alias="passwordSecret",
        description="Name of the secret holding the database password",
    )
    password_secret_key: str | None = Field(
        None,
        alias="passwordSecretKey",
        description="Key within passwordSecret holding the database password",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        return _validate_port(v)

    @property
    def password_secret_ref(self) -> tuple[str, str] | None:
        """Return (secret, key) if the password comes from a secret."""
        secret, key = self.password_secret, self.password_secret_key
        if secret is not None and key is not None:
            return secret, key
        return None

    @model_validator(mode="after")
    def warn_conflicting_password(self) -> "AuthentikPostgres":
        if self.password and self.password_secret_ref is not None:
            warnings.warn(
                "Both a literal password and passwordSecret/passwordSecretKey are "
                "set; the secret reference takes precedence.",
                UserWarning,
                stacklevel=2,
            )
        return self


class AuthentikRedis(BaseModel):
    """Redis connection settings."""

    model_config = {"populate_by_name": True, "frozen": True}

    host: str = Field(..., description="Redis host")
    port: int = Field(DEFAULT_REDIS_PORT, description="Redis port")
    password: str | None = Field(None, description="Redis password")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        return _validate_port(v)


class AuthentikSmtp(BaseModel):
    """Mail relay settings."""

    model_config = {"populate_by_name": True, "frozen": True}

    host: str = Field(..., description="SMTP host")
    port: int = Field(DEFAULT_SMTP_PORT, description="SMTP port")
    from_address: str = Field(..., alias="from", description="Sender address")
    username: str = Field("", description="SMTP username")
    password: str = Field("", description="SMTP password")
    use_tls: bool = Field(False, alias="useTls", description="Use STARTTLS")
    use_ssl: bool = Field(False, alias="useSsl", description="Use implicit TLS")
    timeout: int = Field(
        DEFAULT_SMTP_TIMEOUT, description="Connection timeout in seconds", ge=0
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        return _validate_port(v)


class AuthentikSpec(BaseModel):
    """
    Specification for an authentik instance.

    Defines the image, secret key, UI footer links, logging and the
    connections to PostgreSQL, Redis and optionally a mail relay.
    """

    model_config = {"populate_by_name": True, "frozen": True}

    image: AuthentikImage = Field(..., description="Container image")
    secret_key: str = Field(..., alias="secretKey", description="authentik secret key")
    footer_links: list[FooterLink] = Field(
        default_factory=list, alias="footerLinks", description="Footer links"
    )
    log_level: str | None = Field(None, alias="logLevel", description="Log level")
    postgres: AuthentikPostgres = Field(..., description="Database configuration")
    redis: AuthentikRedis = Field(..., description="Cache configuration")
    smtp: AuthentikSmtp | None = Field(None, description="Mail relay configuration")

