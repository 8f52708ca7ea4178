"""Provider base class carrying swap metadata."""

from typing import ClassVar, Literal

from dishka import Provider

Component = Literal["persistence", "email", "credential"]


class ProviderBase(Provider):
    """dishka provider that tests can swap for a mock.

    Attributes:
        __mock_component__: Name tests use to ask for the real variant
        __is_mock__: True on the in-memory variant
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[set[Component]] = set()
