"""Mock providers for testing."""

from .credential import MockCredentialProvider
from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCredentialProvider",
    "MockEmailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
