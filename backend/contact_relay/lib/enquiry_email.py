from dataclasses import dataclass
from html import escape
from typing import List

from contact_relay.core.settings import Settings
from contact_relay.lib.validation import Enquiry


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: List[str]
    subject: str
    text: str
    html: str


def build_subject(site_name: str, name: str) -> str:
    return f"{site_name} enquiry from {name}"


def build_text_body(enquiry: Enquiry) -> str:
    lines = [
        "Website Enquiry Form Submission",
        "---",
        f"Name: {enquiry.name}",
        f"Email: {enquiry.email}",
    ]
    if enquiry.phone:
        lines.append(f"Phone: {enquiry.phone}")
    lines += ["", "Message:", enquiry.message]
    return "\n".join(lines)


def _html_lines(text: str) -> str:
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return "<br>".join(escape(part) for part in normalized.split("\n"))


def build_html_body(enquiry: Enquiry) -> str:
    parts = [
        "<p><strong>Website Enquiry Form Submission</strong></p>",
        '<hr style="border: none; border-top: 1px solid #e5e5e5; margin: 1rem 0;">',
        f"<p><strong>Name:</strong> {escape(enquiry.name)}</p>",
        f"<p><strong>Email:</strong> {escape(enquiry.email)}</p>",
    ]
    if enquiry.phone:
        parts.append(f"<p><strong>Phone:</strong> {escape(enquiry.phone)}</p>")
    parts += [
        "<p><strong>Message:</strong></p>",
        f"<p>{_html_lines(enquiry.message)}</p>",
    ]
    return "\n".join(parts)


def build_enquiry_email(enquiry: Enquiry, settings: Settings) -> OutboundEmail:
    return OutboundEmail(
        sender=settings.sender,
        to=settings.recipients,
        subject=build_subject(settings.site_name, enquiry.name),
        text=build_text_body(enquiry),
        html=build_html_body(enquiry),
    )
