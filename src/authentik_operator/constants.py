"""
Constants used throughout the authentik operator.

This module defines all constant values used by the operator including:
- Custom resource identification
- Resource labels and naming
- Environment variable names understood by authentik
- Status phase and condition constants
"""

# Custom resource identification
API_GROUP = "ak.dany.dev"
API_VERSION = "v1"
KIND = "Authentik"
PLURAL = "authentiks"

# Field manager used for server-side apply
FIELD_MANAGER = "authentik.ak-operator"

# Label constants (app.kubernetes.io recommended labels)
LABEL_NAME = "app.kubernetes.io/name"
LABEL_COMPONENT = "app.kubernetes.io/component"
LABEL_INSTANCE = "app.kubernetes.io/instance"
LABEL_CREATED_BY = "app.kubernetes.io/created-by"
LABEL_VERSION = "app.kubernetes.io/version"

LABEL_NAME_VALUE = "authentik"
LABEL_COMPONENT_VALUE = "server"
LABEL_CREATED_BY_VALUE = "authentik-operator"

# Resource naming patterns
RESOURCE_PREFIX = "authentik-"
SERVER_SUFFIX = "-server"
WORKER_SUFFIX = "-worker"

# Workload defaults
DEFAULT_IMAGE_REPOSITORY = "ghcr.io/goauthentik/server"
DEFAULT_PULL_POLICY = "IfNotPresent"
DEFAULT_REPLICAS = 1
DEFAULT_HTTP_PORT = 9000
DEFAULT_POSTGRES_PORT = 5432
DEFAULT_REDIS_PORT = 6379
DEFAULT_SMTP_PORT = 25
DEFAULT_SMTP_TIMEOUT = 10

# Environment variable names consumed by authentik
ENV_SECRET_KEY = "AUTHENTIK_SECRET_KEY"
ENV_FOOTER_LINKS = "AUTHENTIK_FOOTER_LINKS"
ENV_DISABLE_STARTUP_ANALYTICS = "AUTHENTIK_DISABLE_STARTUP_ANALYTICS"
ENV_ERROR_REPORTING = "AUTHENTIK_ERROR_REPORTING__ENABLED"
ENV_LOG_LEVEL = "AUTHENTIK_LOG_LEVEL"

ENV_POSTGRES_HOST = "AUTHENTIK_POSTGRESQL__HOST"
ENV_POSTGRES_PORT = "AUTHENTIK_POSTGRESQL__PORT"
ENV_POSTGRES_NAME = "AUTHENTIK_POSTGRESQL__NAME"
ENV_POSTGRES_USER = "AUTHENTIK_POSTGRESQL__USER"
ENV_POSTGRES_PASSWORD = "AUTHENTIK_POSTGRESQL__PASSWORD"

ENV_REDIS_HOST = "AUTHENTIK_REDIS__HOST"
ENV_REDIS_PORT = "AUTHENTIK_REDIS__PORT"
ENV_REDIS_PASSWORD = "AUTHENTIK_REDIS__PASSWORD"

ENV_EMAIL_HOST = "AUTHENTIK_EMAIL__HOST"
ENV_EMAIL_PORT = "AUTHENTIK_EMAIL__PORT"
ENV_EMAIL_FROM = "AUTHENTIK_EMAIL__FROM"
ENV_EMAIL_USERNAME = "AUTHENTIK_EMAIL__USERNAME"
ENV_EMAIL_PASSWORD = "AUTHENTIK_EMAIL__PASSWORD"
ENV_EMAIL_USE_TLS = "AUTHENTIK_EMAIL__USE_TLS"
ENV_EMAIL_USE_SSL = "AUTHENTIK_EMAIL__USE_SSL"
ENV_EMAIL_TIMEOUT = "AUTHENTIK_EMAIL__TIMEOUT"

# Status phase constants
PHASE_READY = "Ready"
PHASE_FAILED = "Failed"

# Condition type and status constants (following Kubernetes conventions)
CONDITION_READY = "Ready"
CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
