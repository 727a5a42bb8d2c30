from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportSettings(BaseSettings):
    verify: bool | Path = Field(
        default=True,
        description="SSL certificate verification. True (verify), False (no verification), or path to CA bundle.",
    )
    cert: tuple[Path, Path] | Path | None = Field(
        default=None,
        description="SSL client certificate. Single file path or tuple of (cert_path, key_path).",
    )
    proxy: str | None = Field(default=None, description="Proxy URL for all requests.")
    headers: dict[str, str] = Field(default_factory=dict, description="Headers sent with every request.")
    follow_redirects: bool = Field(default=True)
    persist_cookies: bool = Field(default=True, description="Keep cookies set by responses for subsequent requests.")

    model_config = SettingsConfigDict(env_prefix="HTTPCHAIN_POOL_")
