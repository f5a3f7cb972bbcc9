import base64
from urllib.parse import parse_qs

import httpx
import pytest

from contact_relay.core.errors import UpstreamSendError
from contact_relay.core.mailer import MailgunMailer, build_mailer
from contact_relay.core.settings import Settings
from contact_relay.lib.enquiry_email import OutboundEmail

EMAIL = OutboundEmail(
    sender="Inbuilt Atelier <inbuilt_atelier@mg.example.com>",
    to=["studio@example.com", "owner@example.com"],
    subject="Inbuilt Atelier enquiry from Jo",
    text="plain",
    html="<p>html</p>",
)


def make_mailer(handler):
    return MailgunMailer(
        api_key="key-test",
        domain="mg.example.com",
        base_url="https://api.eu.mailgun.net/",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_send_posts_form_to_messages_endpoint():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"id": "<1@mg>", "message": "Queued. Thank you."})

    await make_mailer(handler).send(EMAIL)

    assert seen["url"] == "https://api.eu.mailgun.net/v3/mg.example.com/messages"
    expected = base64.b64encode(b"api:key-test").decode()
    assert seen["auth"] == f"Basic {expected}"
    assert seen["form"]["to"] == ["studio@example.com", "owner@example.com"]
    assert seen["form"]["subject"] == ["Inbuilt Atelier enquiry from Jo"]
    assert seen["form"]["from"] == [EMAIL.sender]


@pytest.mark.asyncio
async def test_provider_rejection_raises_upstream_error():
    def handler(request):
        return httpx.Response(401, text="Forbidden")

    with pytest.raises(UpstreamSendError) as info:
        await make_mailer(handler).send(EMAIL)

    assert "401" in str(info.value)
    assert info.value.body() == {"ok": False, "error": "Unable to send email at this time."}


@pytest.mark.asyncio
async def test_transport_failure_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamSendError):
        await make_mailer(handler).send(EMAIL)


def test_build_mailer_requires_key_domain_and_recipients():
    assert build_mailer(Settings(_env_file=None, MAILGUN_API_KEY=None, MAILGUN_DOMAIN="d", MAILGUN_TO="a@b.c")) is None

    mailer = build_mailer(
        Settings(
            _env_file=None,
            MAILGUN_API_KEY="key",
            MAILGUN_DOMAIN="mg.example.com",
            MAILGUN_TO="a@b.c",
            MAILGUN_USERNAME="postmaster",
        )
    )
    assert isinstance(mailer, MailgunMailer)
    assert mailer.username == "postmaster"
    assert mailer.messages_url == "https://api.mailgun.net/v3/mg.example.com/messages"
