"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from ubos.util.di import PROVIDERS, Component, get_provider, is_swappable


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with mocks for every component not in ``unmock``.

    Examples:
        build_test_container()                              # in-memory everything
        build_test_container(unmock={"persistence"})        # real PostgreSQL
        build_test_container(unmock={"persistence", "credential"})

    Raises:
        ValueError: For unknown component names, or when a component is
            unmocked without the components it depends on
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        use_mock = is_swappable(base) and base.__mock_component__ not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    # FastapiProvider lets the same container back a test application
    return make_async_container(*providers, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    swappable = [base for base in PROVIDERS if is_swappable(base)]

    unknown = unmock - {base.__mock_component__ for base in swappable}
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    for base in swappable:
        if base.__mock_component__ not in unmock:
            continue
        # Dependencies are declared on the production variant
        real = get_provider(base, use_mock=False)
        missing = real.__depends_on__ - unmock
        if missing:
            raise ValueError(
                f"Component '{base.__mock_component__}' requires {missing} to be unmocked"
            )
