# contact_relay/client/submitter.py
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Protocol

import httpx

from contact_relay.client.validators import validate_field

log = logging.getLogger("uvicorn.error")

FORM_ENDPOINT = "/api/contact"

NO_ENDPOINT_MESSAGE = "No contact form endpoint configured."
UNAVAILABLE_MESSAGE = "Contact service is unavailable. Is the server running?"
FALLBACK_MESSAGE = "We could not send your message right now. Please try again shortly."


class FormState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FormControl:
    name: str
    value: str = ""
    disabled: bool = False


@dataclass
class SubmissionOutcome:
    state: FormState
    message: str = ""
    field_errors: Dict[str, str] = field(default_factory=dict)
    status_code: Optional[int] = None


class StatusRenderer(Protocol):
    """Whatever draws the form: a DOM, a terminal, or a recording fake in tests."""

    def clear_status(self) -> None: ...
    def clear_errors(self) -> None: ...
    def show_field_error(self, field_name: str, message: str) -> None: ...
    def show_status(self, kind: str, message: str = "") -> None: ...
    def set_submitting(self, busy: bool) -> None: ...
    def reset_form(self) -> None: ...


def form_to_dict(controls: Iterable[FormControl]) -> Dict[str, str]:
    return {c.name: c.value for c in controls}


def _json_or_empty(resp: httpx.Response) -> Dict[str, Any]:
    try:
        payload = resp.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


class ContactFormSubmitter:
    def __init__(
        self,
        renderer: StatusRenderer,
        endpoint: str = FORM_ENDPOINT,
        base_url: str = "http://localhost:3000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.renderer = renderer
        self.endpoint = endpoint
        self.base_url = base_url
        self._transport = transport
        self.state = FormState.IDLE

    def on_edit(self) -> None:
        if self.state in (FormState.SUCCESS, FormState.ERROR):
            self.state = FormState.IDLE

    def validate(self, controls: List[FormControl]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for control in controls:
            problem = validate_field(control.name, control.value)
            if problem and control.name not in errors:
                errors[control.name] = problem
                self.renderer.show_field_error(control.name, problem)
        return errors

    async def submit(self, controls: Iterable[FormControl]) -> SubmissionOutcome:
        if self.state == FormState.SUBMITTING:
            return SubmissionOutcome(state=FormState.SUBMITTING)

        self.renderer.clear_status()
        self.renderer.clear_errors()
        self.state = FormState.VALIDATING

        named = [c for c in controls if c.name]
        active = [c for c in named if not c.disabled]
        errors = self.validate(active)
        if errors:
            self.state = FormState.IDLE
            return SubmissionOutcome(state=FormState.IDLE, field_errors=errors)

        if not self.endpoint:
            self.renderer.show_status("error", NO_ENDPOINT_MESSAGE)
            self.state = FormState.IDLE
            return SubmissionOutcome(state=FormState.IDLE, message=NO_ENDPOINT_MESSAGE)

        self.state = FormState.SUBMITTING
        self.renderer.set_submitting(True)
        try:
            outcome = await self._post(form_to_dict(active), {c.name for c in named})
        finally:
            self.renderer.set_submitting(False)
            if self.state == FormState.SUBMITTING:
                self.state = FormState.ERROR

        self.state = outcome.state
        return outcome

    async def _post(self, data: Dict[str, str], field_names: set) -> SubmissionOutcome:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
                resp = await client.post(
                    self.endpoint,
                    json=data,
                    headers={"Content-Type": "application/json", "Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            log.warning(f"[client] contact request failed: {exc!r}")
            return self._fail(FALLBACK_MESSAGE)

        payload = _json_or_empty(resp)

        if resp.is_success:
            self.renderer.reset_form()
            self.renderer.show_status("success")
            return SubmissionOutcome(state=FormState.SUCCESS, status_code=resp.status_code)

        errors = payload.get("errors")
        if resp.status_code == 422 and isinstance(errors, dict):
            shown: Dict[str, str] = {}
            for name, message in errors.items():
                if name in field_names:
                    self.renderer.show_field_error(name, str(message))
                    shown[name] = str(message)
            return self._fail(FALLBACK_MESSAGE, resp.status_code, shown)

        if resp.status_code in (404, 405):
            fallback = UNAVAILABLE_MESSAGE
        else:
            fallback = f"Request failed with status {resp.status_code}"
        error = payload.get("error")
        message = error if isinstance(error, str) and error.strip() else fallback
        return self._fail(message, resp.status_code)

    def _fail(
        self,
        message: str,
        status_code: Optional[int] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ) -> SubmissionOutcome:
        self.renderer.show_status("error", message)
        return SubmissionOutcome(
            state=FormState.ERROR,
            message=message,
            field_errors=field_errors or {},
            status_code=status_code,
        )
