# contact_relay/routers/contact.py
import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from starlette.formparsers import FormParser

from contact_relay.core.errors import (
    ConfigurationError,
    MalformedRequestError,
    PayloadTooLargeError,
    ServerValidationError,
    UpstreamSendError,
)
from contact_relay.core.mailer import Mailer
from contact_relay.core.settings import Settings
from contact_relay.dependencies import get_mailer, get_settings
from contact_relay.lib.enquiry_email import build_enquiry_email
from contact_relay.lib.validation import validate_enquiry

router = APIRouter(prefix="/api", tags=["contact"])
log = logging.getLogger("uvicorn.error")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the body chunk by chunk, stopping as soon as it passes the limit."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise PayloadTooLargeError()
    return bytes(received)


async def _parse_form(request: Request, body: bytes) -> Dict[str, Any]:
    async def replay():
        yield body

    form = await FormParser(request.headers, replay()).parse()
    return {key: form.get(key) for key in form.keys()}


async def read_submission(request: Request, limit: int) -> Dict[str, Any]:
    """
    Read the body as JSON or urlencoded form data.
    Other content types yield an empty submission (it then fails validation).
    """
    body = await read_limited_body(request, limit)
    media_type = _media_type(request)

    if media_type == FORM_CONTENT_TYPE:
        return await _parse_form(request, body)

    if media_type == "application/json" or media_type.endswith("+json"):
        if not body.strip():
            return {}
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise MalformedRequestError() from exc
        # strict JSON: only objects and arrays are accepted as a body
        if isinstance(data, dict):
            return data
        if isinstance(data, list):
            return {}
        raise MalformedRequestError()

    return {}


@router.post("/contact")
async def contact(
    request: Request,
    settings: Settings = Depends(get_settings),
    mailer: Optional[Mailer] = Depends(get_mailer),
):
    payload = await read_submission(request, settings.payload_limit)

    if mailer is None:
        raise ConfigurationError()

    result = validate_enquiry(payload)
    if not result.is_valid:
        raise ServerValidationError(result.errors)

    email = build_enquiry_email(result.enquiry, settings)
    try:
        await mailer.send(email)
    except Exception as exc:
        log.exception(f"[contact] Mailgun send failed: {exc}")
        raise UpstreamSendError(str(exc)) from exc

    return {"ok": True}
