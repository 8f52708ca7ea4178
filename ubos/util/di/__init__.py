"""Dependency injection wiring.

``PROVIDERS`` lists every provider the app needs. Plain providers are used
as they are. Providers with subclasses are swappable components (SMTP,
PostgreSQL, password storage) whose production or mock variant is picked
by ``get_provider``.
"""

from typing import Type

from ubos.util.di.application import ProdApplicationProvider
from ubos.util.di.base import Component, ProviderBase
from ubos.util.di.core import ProdConfigProvider
from ubos.util.di.domain import ProdDomainProvider
from ubos.util.di.infrastructure import (
    CredentialProvider,
    EmailProvider,
    PersistenceProvider,
    ProdCredentialProvider,
    ProdEmailProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable
    PersistenceProvider,
    EmailProvider,
    CredentialProvider,
]


def is_swappable(base: Type[ProviderBase]) -> bool:
    """Whether ``base`` has production/mock variants to choose from."""
    return bool(base.__subclasses__())


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the ``__is_mock__`` variant of a swappable component

    Returns:
        ``base`` itself when it is not swappable, otherwise the matching variant

    Raises:
        ValueError: If the component has no variant of the requested kind
    """
    if not is_swappable(base):
        return base

    for variant in base.__subclasses__():
        if variant.__is_mock__ == use_mock:
            return variant

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider for {base.__mock_component__ or base.__name__}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "is_swappable",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "CredentialProvider",
    "EmailProvider",
    "PersistenceProvider",
    "ProdCredentialProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
]
