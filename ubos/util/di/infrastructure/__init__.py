"""Infrastructure providers."""

# Import bases
from .credential import CredentialProvider
from .email import EmailProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .credential import ProdCredentialProvider  # noqa: F401
from .email import ProdEmailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CredentialProvider",
    "EmailProvider",
    "PersistenceProvider",
    "ProdCredentialProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
]
