# contact_relay/core/mailer.py
import logging
from typing import Optional, Protocol

import httpx

from contact_relay.core.errors import UpstreamSendError
from contact_relay.core.settings import Settings
from contact_relay.lib.enquiry_email import OutboundEmail

log = logging.getLogger("uvicorn.error")


class Mailer(Protocol):
    async def send(self, email: OutboundEmail) -> None: ...


class MailgunMailer:
    def __init__(
        self,
        api_key: str,
        domain: str,
        username: str = "api",
        base_url: str = "https://api.mailgun.net",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.domain = domain
        self.username = username
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/v3/{self.domain}/messages"

    async def send(self, email: OutboundEmail) -> None:
        """
        POST the message to Mailgun's messages endpoint.
        Raises UpstreamSendError on transport errors or non-2xx replies.
        """
        data = {
            "from": email.sender,
            "to": list(email.to),
            "subject": email.subject,
            "text": email.text,
            "html": email.html,
        }
        async with httpx.AsyncClient(
            auth=(self.username, self.api_key),
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post(self.messages_url, data=data)
            except httpx.HTTPError as exc:
                raise UpstreamSendError(f"Mailgun request failed: {exc!r}") from exc

        if resp.status_code >= 400:
            raise UpstreamSendError(
                f"Mailgun responded {resp.status_code}: {resp.text[:300]}"
            )
        log.info(f"[mailer] queued '{email.subject}' for {len(email.to)} recipient(s)")


def build_mailer(settings: Settings) -> Optional[MailgunMailer]:
    missing = settings.missing_mail_settings()
    if missing:
        log.warning(f"[mailer] Mailgun configuration incomplete. Missing: {', '.join(missing)}")
        return None
    return MailgunMailer(
        api_key=settings.mailgun_api_key,
        domain=settings.mailgun_domain,
        username=settings.mailgun_username,
        base_url=settings.mailgun_api_base,
        timeout=settings.mailgun_timeout,
    )
