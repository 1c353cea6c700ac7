"""Error taxonomy for the relay endpoints.

Every failure a route can report is a :class:`RelayError` subclass carrying
its HTTP status and the message written to the response body.  Route
handlers raise these and :func:`relay_error_handler` turns them into
plain-text responses, so no failure escapes the boundary as an unhandled
exception.

========================  ======  ==========================================
Error                     Status  Meaning
========================  ======  ==========================================
BadRequest                400     Missing or malformed request body
Unauthorized              401     No verified caller identity
ConfigurationError        500     Provider credential not configured
UpstreamEmpty             500     Provider answered with no usable result
UpstreamOrNetworkFailure  500     Transport failure or provider-side error
InternalError             500     Anything else
========================  ======  ==========================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import PlainTextResponse


class RelayError(Exception):
    """Base class for errors surfaced to the caller with an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(RelayError):
    status_code = 400
    default_message = "Bad request"


class Unauthorized(RelayError):
    status_code = 401
    default_message = "Unauthorized"


class ConfigurationError(RelayError):
    """Operator-fixable; retrying the same request will not help."""

    default_message = "OpenAI API key not configured"


class UpstreamEmpty(RelayError):
    default_message = "No response from OpenAI."


class UpstreamOrNetworkFailure(RelayError):
    """Provider or transport failure.

    The message is generic; the underlying detail is only
    logged server-side.
    """

    default_message = "Failed to reach the completion provider."


class InternalError(RelayError):
    @classmethod
    def from_exception(cls, exc: BaseException) -> InternalError:
        return cls(f"Internal error: {str(exc) or 'Unknown error occurred'}")


async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    """Render a :class:`RelayError` as a plain-text response."""
    return PlainTextResponse(content=exc.message, status_code=exc.status_code)
