# contact_relay/core/settings.py
import re
from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SIZE_UNITS = {"b": 1, "kb": 1024, "mb": 1024 ** 2, "gb": 1024 ** 3}
_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?b)?\s*$", re.IGNORECASE)

DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parents[2] / "public"


def parse_byte_size(raw) -> int:
    """Turn '1mb', '512kb', '2048' (bytes) into a byte count."""
    if isinstance(raw, bool):
        raise ValueError(f"invalid size: {raw!r}")
    if isinstance(raw, (int, float)):
        return int(raw)
    match = _SIZE_RE.match(str(raw))
    if not match:
        raise ValueError(f"invalid size: {raw!r}")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[(unit or "b").lower()])


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    api_title: str = Field(default="Inbuilt Atelier Enquiries", alias="API_TITLE")
    site_name: str = Field(default="Inbuilt Atelier", alias="SITE_NAME")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Accepts "1mb", "512kb" or a plain byte count
    payload_limit: int = Field(default=1024 ** 2, alias="PAYLOAD_LIMIT")

    # Static assets + index.html; if unset we use backend/public
    public_dir: Optional[str] = Field(default=None, alias="PUBLIC_DIR")

    mailgun_username: str = Field(
        default="api",
        validation_alias=AliasChoices("MAILGUN_USERNAME", "MAILGUN_USER"),
    )
    mailgun_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MAILGUN_API_KEY", "MAILGUN_PASSWORD"),
    )
    mailgun_domain: Optional[str] = Field(default=None, alias="MAILGUN_DOMAIN")
    mailgun_to: Optional[str] = Field(default=None, alias="MAILGUN_TO")
    mailgun_from: Optional[str] = Field(default=None, alias="MAILGUN_FROM")
    mailgun_api_base: str = Field(default="https://api.mailgun.net", alias="MAILGUN_API_BASE")
    mailgun_timeout: float = Field(default=10.0, alias="MAILGUN_TIMEOUT")

    @field_validator("payload_limit", mode="before")
    @classmethod
    def _parse_payload_limit(cls, value):
        return parse_byte_size(value)

    def missing_mail_settings(self) -> List[str]:
        required = {
            "MAILGUN_API_KEY": self.mailgun_api_key,
            "MAILGUN_DOMAIN": self.mailgun_domain,
            "MAILGUN_TO": self.mailgun_to,
        }
        return [name for name, value in required.items() if not (value or "").strip()]

    @property
    def mail_configured(self) -> bool:
        return not self.missing_mail_settings()

    @property
    def recipients(self) -> List[str]:
        return [a.strip() for a in (self.mailgun_to or "").split(",") if a.strip()]

    @property
    def sender(self) -> str:
        if self.mailgun_from:
            return self.mailgun_from
        return f"{self.site_name} <inbuilt_atelier@{self.mailgun_domain}>"

    @property
    def public_root(self) -> Path:
        return Path(self.public_dir).resolve() if self.public_dir else DEFAULT_PUBLIC_DIR

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def load_settings() -> Settings:
    return Settings()
