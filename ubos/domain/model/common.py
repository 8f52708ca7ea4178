"""Shared base for domain entities and the clock they stamp with."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Immutable base for invitations, users, roles and bindings.

    State changes go through ``model_copy(update=...)`` so a repository
    always receives a complete, validated snapshot.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
