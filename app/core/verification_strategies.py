import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from app.config.config import Config, ProviderCredentials
from app.core.errors import ValidationError
from app.core.twilio_verify_client import APPROVED, TwilioVerifyClient
from app.utils.phone import is_valid_code

logger = logging.getLogger(__name__)

TWILIO_VERIFY = "twilio_verify"
DEVELOPMENT_MODE = "development_mode"

FALLBACK_SID_PREFIX = "dev_simulation_"
FALLBACK_TEST_CODE = "123456"


class StartResult(BaseModel):
    sid: str
    status: str
    message: Optional[str] = None


class CheckResult(BaseModel):
    verified: bool
    status: str
    message: Optional[str] = None


class VerificationStrategy(ABC):
    """Issues and checks one-time codes for a canonical phone number."""

    method: str

    @abstractmethod
    async def start_verification(self, phone_number: str, request_id: str) -> StartResult:
        pass

    @abstractmethod
    async def check_verification(self, phone_number: str, code: str, request_id: str) -> CheckResult:
        pass


class ProviderStrategy(VerificationStrategy):
    method = TWILIO_VERIFY

    def __init__(self, client: TwilioVerifyClient):
        self.client = client

    async def start_verification(self, phone_number: str, request_id: str) -> StartResult:
        data = await self.client.start_verification(phone_number)
        return StartResult(sid=data.get("sid") or "", status=data.get("status") or "pending")

    async def check_verification(self, phone_number: str, code: str, request_id: str) -> CheckResult:
        data = await self.client.check_verification(phone_number, code)
        status = data.get("status") or "unknown"
        # "pending" and anything else that is not "approved" means the code did not match
        return CheckResult(verified=status == APPROVED, status=status)


class FallbackStrategy(VerificationStrategy):
    """
    Development mode used when Twilio credentials are not configured.
    Nothing is sent and any well-formed 6-digit code is accepted.
    """

    method = DEVELOPMENT_MODE

    def __init__(self, delay_seconds: float = Config.FALLBACK_DELAY_SECONDS):
        self.delay_seconds = delay_seconds

    async def start_verification(self, phone_number: str, request_id: str) -> StartResult:
        logger.warning(f"[{request_id}] DEVELOPMENT MODE: simulating SMS send")
        await asyncio.sleep(self.delay_seconds)
        return StartResult(
            sid=f"{FALLBACK_SID_PREFIX}{request_id}",
            status="pending",
            message=f"SMS simulado - use código {FALLBACK_TEST_CODE} para verificar",
        )

    async def check_verification(self, phone_number: str, code: str, request_id: str) -> CheckResult:
        logger.warning(f"[{request_id}] DEVELOPMENT MODE: accepting any 6-digit code")
        if not is_valid_code(code):
            raise ValidationError("Código deve ter 6 dígitos")
        return CheckResult(
            verified=True,
            status=APPROVED,
            message="Código aceito em modo desenvolvimento",
        )


def select_strategy(
    credentials: ProviderCredentials,
    base_url: str = Config.PROVIDER_VERIFY_BASE_URL,
    timeout: float = Config.PROVIDER_TIMEOUT_SECONDS,
    fallback_delay: float = Config.FALLBACK_DELAY_SECONDS,
) -> VerificationStrategy:
    """Twilio when all three credentials are present, development mode otherwise."""
    if credentials.has_credentials:
        return ProviderStrategy(TwilioVerifyClient(credentials, base_url=base_url, timeout=timeout))
    return FallbackStrategy(delay_seconds=fallback_delay)
