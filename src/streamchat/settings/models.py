"""Data models for connection settings."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_BASE = "http://localhost:8000"


class Settings(BaseModel):
    """Snapshot of the connection settings."""

    model_config = ConfigDict(frozen=True)

    api_base: str = Field(default="", description="Base URL of the generation endpoint")
    api_token: str = Field(default="", description="Bearer token sent with every request")

    @property
    def is_configured(self) -> bool:
        """True when both the base URL and the token are set."""
        return bool(self.api_base and self.api_token)

    def masked_token(self) -> str:
        """Token with everything but the last four characters hidden."""
        if not self.api_token:
            return ""
        visible = self.api_token[-4:] if len(self.api_token) > 8 else ""
        return "*" * 8 + visible


class SettingsDefaults(BaseModel):
    """Fallback values used when nothing is persisted."""

    model_config = ConfigDict(frozen=True)

    api_base: str = DEFAULT_API_BASE
    api_token: str = ""

    @classmethod
    def from_env(cls) -> "SettingsDefaults":
        """Build defaults from the environment.

        Environment variables:
            STREAMCHAT_API_BASE: Endpoint base URL (default: http://localhost:8000)
            STREAMCHAT_API_TOKEN: Bearer token (default: empty)
        """
        return cls(
            api_base=os.getenv("STREAMCHAT_API_BASE", DEFAULT_API_BASE),
            api_token=os.getenv("STREAMCHAT_API_TOKEN", ""),
        )
