"""Base class for domain services."""


class Service:
    """Marker base for stateless domain logic.

    Services hold repositories and collaborators injected by the container,
    never per-request state.
    """
