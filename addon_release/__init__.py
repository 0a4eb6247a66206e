"""Promote addon releases into the managed-tenants fleet repositories."""

__version__ = "0.3.0"
