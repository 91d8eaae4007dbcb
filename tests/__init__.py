"""
Tests package for the authentik operator.

Contains:
- unit/: Unit tests for manifest building, reconciliation and API routes
"""
