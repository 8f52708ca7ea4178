"""Unit tests for HTTP error mapping."""

import json

import pytest
from starlette.requests import Request

from ubos.domain.error import (
    CannotResendError,
    ConflictError,
    DomainError,
    InvalidInvitationError,
    InvitationAlreadyAcceptedError,
    InvitationExpiredError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from ubos.interface.error import INTERNAL_ERROR_BODY, domain_error_handler, status_for


@pytest.mark.parametrize(
    "error,expected",
    [
        (ValidationError("bad"), 400),
        (ConflictError("dup"), 409),
        (QuotaExceededError(current=50, requested=1, limit=50), 429),
        (NotFoundError("Invitation", "x"), 404),
        (InvalidInvitationError(), 404),
        (InvitationExpiredError(), 410),
        (InvitationAlreadyAcceptedError(), 410),
        (CannotResendError("accepted"), 400),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


def test_unmapped_domain_error_defaults_to_400():
    class OddError(DomainError):
        code = "odd"

    assert status_for(OddError("odd")) == 400


def test_subclass_inherits_parent_status():
    class TooManyRows(ConflictError):
        pass

    assert status_for(TooManyRows("x")) == 409


def _request(path: str = "/invitations") -> Request:
    return Request({"type": "http", "method": "POST", "path": path, "headers": []})


class TestDomainErrorHandler:
    """Tests for rendering errors handed to the domain handler."""

    @pytest.mark.asyncio
    async def test_renders_domain_error(self):
        response = await domain_error_handler(_request(), ConflictError("dup"))

        assert response.status_code == 409
        assert json.loads(response.body) == {"error": "conflict", "message": "dup"}

    @pytest.mark.asyncio
    async def test_non_domain_error_falls_back_to_500(self):
        """Without a DomainError there is no code to render."""
        response = await domain_error_handler(_request(), RuntimeError("boom"))

        assert response.status_code == 500
        assert json.loads(response.body) == INTERNAL_ERROR_BODY
