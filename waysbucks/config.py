from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load project-root .env early so both pydantic-settings and any direct os.getenv access
# see consistent values, even if the process CWD is not the repo root.
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_IN_TEST = (os.getenv("ENVIRONMENT") or "").lower() == "test" or bool(os.getenv("PYTEST_CURRENT_TEST"))
if _ENV_PATH.exists() and not _IN_TEST:
    load_dotenv(dotenv_path=_ENV_PATH, override=True)


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def _parse_admin_emails(raw: Any) -> list[str]:
    if raw is None:
        return []

    items: list[Any]
    if isinstance(raw, (list, tuple, set)):
        items = list(raw)
    elif isinstance(raw, str):
        s = raw.strip()
        if not s:
            return []

        # Support JSON array string or comma-separated string.
        if s.startswith("["):
            try:
                parsed = json.loads(s)
                items = parsed if isinstance(parsed, list) else [parsed]
            except ValueError:
                items = [p.strip() for p in s.strip("[]").split(",")]
        else:
            items = [p.strip() for p in s.split(",")]
    else:
        items = [raw]

    emails: list[str] = []
    for item in items:
        if item is None:
            continue
        email = _normalize_email(str(item).strip().strip('"'))
        if email:
            emails.append(email)
    return emails


class Settings(BaseSettings):
    app_name: str = Field(default="WaysBucks Backend")
    api_prefix: str = Field(default="/api/v1")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database configuration
    # ORM_DB_URL wins, then DB_URL, then discrete DB_* settings (sqlite in development).
    db_url: str | None = Field(default=None, validation_alias="DB_URL")
    orm_db_url: str | None = Field(default=None, validation_alias="ORM_DB_URL")
    orm_use_mysql: bool = Field(default=False, validation_alias="ORM_USE_MYSQL")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=3306, validation_alias="DB_PORT")
    db_name: str = Field(default="waysbucks", validation_alias="DB_NAME")
    db_user: str = Field(default="root", validation_alias="DB_USER")
    db_password: str = Field(default="password", validation_alias="DB_PASSWORD")
    db_charset: str = Field(default="utf8mb4", validation_alias="DB_CHARSET")

    jwt_secret: str = Field(default="change-me", validation_alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        validation_alias="CORS_ORIGINS",
    )

    # Admin access control
    # - JSON array string: ADMIN_EMAILS=["admin@example.com","ops@example.com"]
    # - Comma-separated:   ADMIN_EMAILS=admin@example.com,ops@example.com
    admin_emails: list[str] = Field(default_factory=list, validation_alias="ADMIN_EMAILS")

    # If true, read ADMIN_EMAILS from the process environment on each check.
    admin_emails_reload: bool = Field(default=False, validation_alias="ADMIN_EMAILS_RELOAD")

    # Cloudinary image upload
    cloud_name: str | None = Field(default=None, validation_alias="CLOUD_NAME")
    api_key: str | None = Field(default=None, validation_alias="API_KEY")
    api_secret: str | None = Field(default=None, validation_alias="API_SECRET")
    upload_folder: str = Field(default="WaysBucks", validation_alias="UPLOAD_FOLDER")
    max_upload_size_mb: int = Field(default=5, validation_alias="MAX_UPLOAD_SIZE_MB")

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _validate_admin_emails(cls, v: Any) -> list[str]:
        return _parse_admin_emails(v)

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def build_sqlalchemy_db_url(settings: Settings) -> str:
    if settings.orm_db_url:
        return settings.orm_db_url

    if settings.db_url:
        return settings.db_url

    # In development, default ORM to sqlite unless explicitly configured.
    if settings.environment.lower() == "development" and not settings.orm_use_mysql:
        return "sqlite:///./dev.db"

    # NOTE: password may include special chars; safest is to rely on DB_URL for complex passwords.
    return (
        f"mysql+pymysql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?charset={settings.db_charset}"
    )


def get_admin_allowlist(*, reload: bool | None = None) -> set[str]:
    do_reload = settings.admin_emails_reload if reload is None else reload
    if do_reload:
        return set(_parse_admin_emails(os.environ.get("ADMIN_EMAILS")))
    return set(_normalize_email(e) for e in (settings.admin_emails or []))


def is_admin_email(email: str) -> bool:
    return _normalize_email(email) in get_admin_allowlist()
