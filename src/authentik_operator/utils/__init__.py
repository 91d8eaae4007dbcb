"""
Utils package - Helper modules for authentik operator functionality.

Contains:
- kubernetes.py: Kubernetes client configuration
"""
