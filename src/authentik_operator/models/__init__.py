"""
Models package - Pydantic models for type-safe resource handling.

Defines data models for:
- Authentik instance specifications
"""
