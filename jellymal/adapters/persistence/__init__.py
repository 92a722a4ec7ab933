"""Persistance locale (jeton OAuth)."""

from jellymal.adapters.persistence.credential_file import JsonCredentialStore

__all__ = ["JsonCredentialStore"]
