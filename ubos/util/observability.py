"""Logfire configuration and library instrumentation.

Application code logs and traces through ``logfire`` directly::

    with logfire.span("invitation_service.create", organization_id=str(org_id)):
        ...
    logfire.info("Invitation created", invitation_id=str(invitation.id))

Invitation tokens are bearer capabilities. They never go into attributes
in full (use ``InvitationToken.masked``), and request paths that embed
one are masked before they are recorded.
"""

import re

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from ubos.config import Settings

# /invitations/<token>/validate and /invitations/<token>/accept
_TOKEN_PATH = re.compile(r"^(/invitations/)[^/]+(/(?:validate|accept))$")


def mask_token_path(path: str) -> str:
    """Replace the token segment of an invitation path with ``***``."""
    return _TOKEN_PATH.sub(r"\1***\2", path)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current environment.

    Telemetry is exported when ``OBSERVABILITY__SEND_TO_LOGFIRE`` says so,
    or, when that is unset, whenever ``OBSERVABILITY__LOGFIRE_TOKEN`` is.
    Otherwise everything stays on the console.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name="ubos-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=["invitation_token"]),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes: dict) -> dict:
    result = {**attributes, "path": mask_token_path(request.url.path)}
    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, without headers since they carry the session cookie."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
