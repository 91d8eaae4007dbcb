"""
Environment assembly for authentik containers.

Maps an AuthentikSpec onto the ordered list of environment variables that
both the server and the worker container receive. Every entry carries
exactly one of a literal value or a secret key reference.
"""

import json

from kubernetes import client

from authentik_operator.constants import (
    ENV_DISABLE_STARTUP_ANALYTICS,
    ENV_EMAIL_FROM,
    ENV_EMAIL_HOST,
    ENV_EMAIL_PASSWORD,
    ENV_EMAIL_PORT,
    ENV_EMAIL_TIMEOUT,
    ENV_EMAIL_USE_SSL,
    ENV_EMAIL_USE_TLS,
    ENV_EMAIL_USERNAME,
    ENV_ERROR_REPORTING,
    ENV_FOOTER_LINKS,
    ENV_LOG_LEVEL,
    ENV_POSTGRES_HOST,
    ENV_POSTGRES_NAME,
    ENV_POSTGRES_PASSWORD,
    ENV_POSTGRES_PORT,
    ENV_POSTGRES_USER,
    ENV_REDIS_HOST,
    ENV_REDIS_PASSWORD,
    ENV_REDIS_PORT,
    ENV_SECRET_KEY,
)
from authentik_operator.errors import ManifestBuildError
from authentik_operator.models.authentik import (
    AuthentikSmtp,
    AuthentikSpec,
    FooterLink,
)


def _render(value: object) -> str:
    # authentik parses lowercase booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def literal_env(name: str, value: object) -> client.V1EnvVar:
    """Build an environment entry with a literal value."""
    return client.V1EnvVar(name=name, value=_render(value))


def secret_env(name: str, secret: str, key: str) -> client.V1EnvVar:
    """Build an environment entry that reads its value from a secret key."""
    return client.V1EnvVar(
        name=name,
        value_from=client.V1EnvVarSource(
            secret_key_ref=client.V1SecretKeySelector(
                name=secret, key=key, optional=False
            )
        ),
    )


def validate_env(env: list[client.V1EnvVar]) -> list[client.V1EnvVar]:
    """
    Check that every entry sets exactly one of value or secret reference.

    Raises:
        ManifestBuildError: If an entry sets both or neither
    """
    for entry in env:
        has_value = entry.value is not None
        has_ref = (
            entry.value_from is not None
            and entry.value_from.secret_key_ref is not None
        )
        if has_value == has_ref:
            raise ManifestBuildError(
                f"Environment variable {entry.name} must set exactly one of "
                "value or secretKeyRef"
            )
    return env


def serialize_footer_links(links: list[FooterLink]) -> str:
    try:
        return json.dumps(
            [link.model_dump() for link in links], separators=(",", ":")
        )
    except (TypeError, ValueError) as e:
        raise AssertionError(f"Footer links are not JSON serializable: {e}") from e


def build_smtp_env(smtp: AuthentikSmtp | None) -> list[client.V1EnvVar]:
    """Build the mail relay block; empty when no relay is configured."""
    if smtp is None:
        return []

    return [
        literal_env(ENV_EMAIL_HOST, smtp.host),
        literal_env(ENV_EMAIL_PORT, smtp.port),
        literal_env(ENV_EMAIL_FROM, smtp.from_address),
        literal_env(ENV_EMAIL_USERNAME, smtp.username),
        literal_env(ENV_EMAIL_PASSWORD, smtp.password),
        literal_env(ENV_EMAIL_USE_TLS, smtp.use_tls),
        literal_env(ENV_EMAIL_USE_SSL, smtp.use_ssl),
        literal_env(ENV_EMAIL_TIMEOUT, smtp.timeout),
    ]


def build_env(spec: AuthentikSpec) -> list[client.V1EnvVar]:
    """
    Assemble the environment for authentik containers.

    Args:
        spec: Authentik specification

    Returns:
        Ordered list of environment variables
    """
    env = [
        literal_env(ENV_SECRET_KEY, spec.secret_key),
        literal_env(ENV_FOOTER_LINKS, serialize_footer_links(spec.footer_links)),
        literal_env(ENV_DISABLE_STARTUP_ANALYTICS, True),
        literal_env(ENV_ERROR_REPORTING, False),
        literal_env(ENV_POSTGRES_HOST, spec.postgres.host),
        literal_env(ENV_POSTGRES_PORT, spec.postgres.port),
        literal_env(ENV_POSTGRES_NAME, spec.postgres.database),
        literal_env(ENV_POSTGRES_USER, spec.postgres.username),
        literal_env(ENV_REDIS_HOST, spec.redis.host),
        literal_env(ENV_REDIS_PORT, spec.redis.port),
    ]

    if spec.log_level is not None:
        env.append(literal_env(ENV_LOG_LEVEL, spec.log_level))

    secret_ref = spec.postgres.password_secret_ref
    if secret_ref is not None:
        secret, key = secret_ref
        env.append(secret_env(ENV_POSTGRES_PASSWORD, secret, key))
    else:
        env.append(literal_env(ENV_POSTGRES_PASSWORD, spec.postgres.password))

    if spec.redis.password is not None:
        env.append(literal_env(ENV_REDIS_PASSWORD, spec.redis.password))

    env.extend(build_smtp_env(spec.smtp))

    return validate_env(env)
