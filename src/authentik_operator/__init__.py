"""
Authentik Operator - A Kubernetes operator for authentik identity platform instances.

This operator keeps two layers of state in sync:
- The Kubernetes workload that runs authentik, derived from an Authentik resource
- Application-level objects (flows, stages, service accounts) managed through
  authentik's REST API
"""

__version__ = "0.1.0"
