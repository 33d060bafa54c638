"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "guarantee-quote"
    log_level: str = "INFO"

    # Coupon persistence
    coupon_backend: Literal["json", "sql"] = "json"
    coupon_store_path: str = "coupons.json"
    database_url: str = "sqlite:///./coupons.db"

    # Email dispatch
    email_send_timeout_seconds: float = 10.0


class MailSettings(BaseSettings):
    """
    Outbound mail configuration.

    Built on every send rather than cached, so an operator can fix a missing
    or wrong value between two attempts without restarting the service.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    email_from: str = ""
    email_user: str = ""
    email_pass: str = ""
    email_admin: str = ""

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_socket_timeout_seconds: float = 30.0

    @field_validator("email_from", "email_user", "email_pass", "email_admin", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        if value is None:
            return ""
        return str(value).strip()


def get_mail_settings() -> MailSettings:
    """Read mail settings fresh from the environment"""
    return MailSettings()


settings = Settings()
