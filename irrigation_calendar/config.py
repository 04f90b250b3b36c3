"""Application configuration and settings helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .models import parse_upstream_timestamp

REQUIRED_ENV_VARS = ("PORT", "accountnum", "accountname", "tzoffset")

DEFAULT_UPSTREAM_HOST = "water.gateway.srpnet.com"

# Shape of quickview onDateTime/offDateTime values.
SAMPLE_UPSTREAM_TIMESTAMP = "2024-05-01T06:00:00"


class Settings(BaseModel):
    """Centralized application configuration."""

    port: int = Field(..., description="PORT value")
    account_ids: List[str] = Field(..., description="Comma separated accountnum value")
    account_names: List[str] = Field(..., description="Comma separated accountname value")
    tz_offset: str = Field(..., description="Offset appended verbatim to upstream timestamps")
    host: str = Field(default="0.0.0.0")
    upstream_host: str = Field(default=DEFAULT_UPSTREAM_HOST)
    debug_mode: bool = Field(default=False)
    allowed_hosts: List[str] = Field(default_factory=lambda: ["*"])
    http_proxy: Optional[str] = Field(default=None)
    https_proxy: Optional[str] = Field(default=None)
    no_proxy: Optional[str] = Field(default=None)

    model_config = {"frozen": True}

    @field_validator("account_ids", "account_names")
    @classmethod
    def _ensure_values(cls, value: List[str], info):
        if not value:
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @field_validator("tz_offset")
    @classmethod
    def _ensure_offset(cls, value: str) -> str:
        if not value:
            raise ValueError("tz_offset cannot be empty")
        try:
            parse_upstream_timestamp(SAMPLE_UPSTREAM_TIMESTAMP, value)
        except ValueError as exc:
            raise ValueError(f"tz_offset {value!r} is not a UTC offset such as -07:00") from exc
        return value

    @model_validator(mode="after")
    def _check_accounts(self) -> "Settings":
        if len(self.account_ids) != len(self.account_names):
            raise ValueError(
                f"Mismatch between accountnum and accountname: found {len(self.account_ids)} "
                f"account number(s) but {len(self.account_names)} account name(s)"
            )
        duplicates = sorted({acct for acct in self.account_ids if self.account_ids.count(acct) > 1})
        if duplicates:
            raise ValueError(f"Duplicate account numbers in accountnum: {', '.join(duplicates)}")
        return self

    @property
    def proxies(self) -> dict[str, Optional[str]]:
        return {
            "http": self.http_proxy,
            "https": self.https_proxy,
            "no_proxy": self.no_proxy,
        }

    def quickview_url(self, account_id: str) -> str:
        return f"https://{self.upstream_host}/schedule/account/{account_id}/quickview"


def _split_env_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def describe_validation_error(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", ""))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


@lru_cache()
def get_settings() -> Settings:
    """Load settings from environment variables.

    Raises ConfigError when a required variable is missing or the values do not
    describe a usable account list.
    """

    import os
    from dotenv import load_dotenv

    load_dotenv()

    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    if missing:
        raise ConfigError(
            "Missing required environment variables: " + ", ".join(missing),
            missing=missing,
        )

    try:
        return Settings(
            port=os.getenv("PORT"),
            account_ids=_split_env_list(os.getenv("accountnum")),
            account_names=_split_env_list(os.getenv("accountname")),
            tz_offset=os.getenv("tzoffset", "").strip(),
            host=os.getenv("HOST", "0.0.0.0"),
            upstream_host=os.getenv("UPSTREAM_HOST", DEFAULT_UPSTREAM_HOST),
            debug_mode=os.getenv("DEBUG_MODE", "false").lower() == "true",
            allowed_hosts=_split_env_list(os.getenv("ALLOWED_HOSTS")) or ["*"],
            http_proxy=os.getenv("HTTP_PROXY"),
            https_proxy=os.getenv("HTTPS_PROXY"),
            no_proxy=os.getenv("NO_PROXY"),
        )
    except ValidationError as exc:
        raise ConfigError(describe_validation_error(exc)) from exc
