"""Credential storage adapter."""

from .store import Argon2CredentialStore, MockCredentialStore

__all__ = ["Argon2CredentialStore", "MockCredentialStore"]
