# contact_relay/dependencies.py
from typing import Optional

from fastapi import Request

from contact_relay.core.mailer import Mailer
from contact_relay.core.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mailer(request: Request) -> Optional[Mailer]:
    # None means the mail settings were incomplete at startup
    return request.app.state.mailer
