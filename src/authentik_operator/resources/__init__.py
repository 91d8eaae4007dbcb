"""
Resources package - Desired state builders for Kubernetes resources.

Contains:
- environment.py: authentik container environment
- deployment.py: the authentik server/worker Deployment
"""
