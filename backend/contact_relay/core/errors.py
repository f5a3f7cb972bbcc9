# contact_relay/core/errors.py
import logging
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("uvicorn.error")

UNEXPECTED_ERROR = "Unexpected server error."


class ContactRelayError(Exception):
    """Base for errors that map to a sanitised `{ok: false}` response."""

    status_code = 500
    public_message = UNEXPECTED_ERROR

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def body(self) -> Dict:
        return {"ok": False, "error": self.message}


class MalformedRequestError(ContactRelayError):
    status_code = 400
    public_message = "Malformed request body."


class NotFoundError(ContactRelayError):
    status_code = 404
    public_message = "Not found"


class PayloadTooLargeError(ContactRelayError):
    status_code = 413
    public_message = "Request body too large."


class ServerValidationError(ContactRelayError):
    status_code = 422
    public_message = "Validation failed."

    def __init__(self, errors: Dict[str, str]):
        super().__init__()
        self.errors = dict(errors)

    def body(self) -> Dict:
        return {"ok": False, "errors": self.errors}


class UpstreamSendError(ContactRelayError):
    """The mail provider rejected or never answered. `detail` is for logs only."""

    status_code = 502
    public_message = "Unable to send email at this time."

    def __init__(self, detail: str = ""):
        super().__init__()
        self.detail = detail

    def __str__(self) -> str:
        return self.detail or self.message


class ConfigurationError(ContactRelayError):
    status_code = 503
    public_message = (
        "Mailgun configuration missing on the server. Check username/password settings."
    )


async def _contact_relay_error(request: Request, exc: ContactRelayError):
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=NotFoundError().body())
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unexpected_error(request: Request, exc: Exception):
    log.exception(f"[contact] unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"ok": False, "error": UNEXPECTED_ERROR})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContactRelayError, _contact_relay_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)
