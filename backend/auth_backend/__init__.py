"""Credential-based authentication backend."""
