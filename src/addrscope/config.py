"""Runtime settings loaded from the environment."""

import os

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Environment-backed defaults. CLI flags take precedence."""

    resolver: str | None = Field(default_factory=lambda: os.getenv("ADDRSCOPE_RESOLVER") or None)

    # dnspython query limits
    dns_timeout: float = Field(
        default_factory=lambda: float(os.getenv("ADDRSCOPE_DNS_TIMEOUT", "2.0"))
    )
    dns_lifetime: float = Field(
        default_factory=lambda: float(os.getenv("ADDRSCOPE_DNS_LIFETIME", "5.0"))
    )

    # Placeholder service port for the OS lookup
    lookup_port: int = Field(default_factory=lambda: int(os.getenv("ADDRSCOPE_LOOKUP_PORT", "80")))

    log_level: str = Field(
        default_factory=lambda: os.getenv("ADDRSCOPE_LOG_LEVEL", "WARNING").upper()
    )


settings = Settings()


def get_settings() -> Settings:
    return settings
