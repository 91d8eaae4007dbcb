"""
Handlers package - Contains all Kopf event handlers for authentik resources.

- authentik.py: Authentik instance management
"""
