import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env(*names: str, default: Optional[str] = None) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


class Config:
    # Twilio Verify credentials. Any one missing puts both endpoints in development mode.
    PROVIDER_ACCOUNT_ID = _env("PROVIDER_ACCOUNT_ID", "TWILIO_ACCOUNT_SID")
    PROVIDER_AUTH_TOKEN = _env("PROVIDER_AUTH_TOKEN", "TWILIO_AUTH_TOKEN")
    PROVIDER_VERIFY_SERVICE_ID = _env("PROVIDER_VERIFY_SERVICE_ID", "TWILIO_VERIFY_SERVICE_SID")
    PROVIDER_VERIFY_BASE_URL = os.getenv("PROVIDER_VERIFY_BASE_URL", "https://verify.twilio.com/v2")
    PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "10"))

    # Simulated network latency for development mode sends
    FALLBACK_DELAY_SECONDS = float(os.getenv("FALLBACK_DELAY_SECONDS", "1"))

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./leads.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", "8002"))


class ProviderCredentials(BaseModel):
    account_id: Optional[str] = None
    auth_token: Optional[str] = None
    service_id: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_id and self.auth_token and self.service_id)

    @classmethod
    def from_config(cls, config=Config) -> "ProviderCredentials":
        return cls(
            account_id=config.PROVIDER_ACCOUNT_ID,
            auth_token=config.PROVIDER_AUTH_TOKEN,
            service_id=config.PROVIDER_VERIFY_SERVICE_ID,
        )

    def describe(self) -> dict:
        """Presence report safe to log."""
        return {
            "account_id": "PRESENT" if self.account_id else "MISSING",
            "auth_token": "PRESENT" if self.auth_token else "MISSING",
            "service_id": "PRESENT" if self.service_id else "MISSING",
            "has_credentials": self.has_credentials,
        }
