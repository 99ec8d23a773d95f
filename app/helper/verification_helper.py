import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Tuple

from pydantic import ValidationError as SchemaValidationError

from app.core.errors import (
    INVALID_OR_EXPIRED_CODE,
    SEND_FAILED,
    VerificationError,
    ValidationError,
)
from app.core.verification_strategies import VerificationStrategy
from app.schemas.verification_schemas import (
    ErrorResponse,
    SendCodeRequest,
    SendCodeResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from app.utils.phone import is_valid_code, mask_phone, normalize_phone

logger = logging.getLogger(__name__)

PHONE_REQUIRED = "Número de telefone é obrigatório"
PHONE_AND_CODE_REQUIRED = "Número de telefone e código são obrigatórios"
CODE_MUST_HAVE_SIX_DIGITS = "Código deve ter exatamente 6 dígitos"
INVALID_PAYLOAD = "Dados da requisição inválidos"


def _request_id() -> str:
    return uuid.uuid4().hex[:8]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _user_message(error: VerificationError, default: str) -> str:
    try:
        return error.user_message(default)
    except Exception:
        logger.exception(f"Could not build a message for {error!r}")
        return default


def _parse(model, payload: Any):
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_PAYLOAD)
    try:
        return model.model_validate(payload)
    except SchemaValidationError as e:
        raise ValidationError(INVALID_PAYLOAD) from e


class VerificationService:
    """
    Send and check handlers for SMS phone verification.

    The strategy (Twilio Verify or development mode) is fixed when the
    service is built, so a single call never mixes the two paths.
    """

    def __init__(self, strategy: VerificationStrategy):
        self.strategy = strategy

    @property
    def method(self) -> str:
        return self.strategy.method

    async def send_code(self, payload: Any, request_id: str = None) -> SendCodeResponse:
        request_id = request_id or _request_id()
        request = _parse(SendCodeRequest, payload)
        if not request.phone_number or not request.phone_number.strip():
            raise ValidationError(PHONE_REQUIRED)

        phone = normalize_phone(request.phone_number)
        logger.info(f"[{request_id}] Sending code to {mask_phone(phone)} via {self.method}")

        result = await self.strategy.start_verification(phone, request_id)
        logger.info(f"[{request_id}] Code sent - SID: {result.sid}")
        return SendCodeResponse(sid=result.sid, method=self.method, phone=phone, message=result.message)

    async def check_code(self, payload: Any, request_id: str = None) -> VerifyCodeResponse:
        request_id = request_id or _request_id()
        request = _parse(VerifyCodeRequest, payload)
        if not request.phone_number or not request.phone_number.strip() or not request.code:
            raise ValidationError(PHONE_AND_CODE_REQUIRED)
        if not is_valid_code(request.code):
            raise ValidationError(CODE_MUST_HAVE_SIX_DIGITS)

        phone = normalize_phone(request.phone_number)
        logger.info(f"[{request_id}] Checking code for {mask_phone(phone)} via {self.method}")

        result = await self.strategy.check_verification(phone, request.code, request_id)
        if not result.verified:
            logger.info(f"[{request_id}] Code rejected: status={result.status}")
            raise VerificationError(INVALID_OR_EXPIRED_CODE)

        logger.info(f"[{request_id}] Code verified for {mask_phone(phone)}")
        return VerifyCodeResponse(method=self.method, phone=phone, message=result.message)

    async def handle_send(self, payload: Any) -> Tuple[int, dict]:
        """Runs send_code and folds every failure into a 400 envelope."""
        request_id = _request_id()
        try:
            response = await self.send_code(payload, request_id)
            return 200, response.model_dump(exclude_none=True)
        except VerificationError as e:
            logger.error(f"[{request_id}] Send failed: {e!r}")
            error = _user_message(e, SEND_FAILED)
        except Exception:
            logger.exception(f"[{request_id}] Unexpected error while sending code")
            error = SEND_FAILED
        return 400, ErrorResponse(error=error, timestamp=_timestamp()).model_dump(exclude_none=True)

    async def handle_verify(self, payload: Any) -> Tuple[int, dict]:
        """Runs check_code and folds every failure into a 400 envelope with verified=false."""
        request_id = _request_id()
        try:
            response = await self.check_code(payload, request_id)
            return 200, response.model_dump(exclude_none=True)
        except VerificationError as e:
            logger.error(f"[{request_id}] Verification failed: {e!r}")
            error = _user_message(e, INVALID_OR_EXPIRED_CODE)
        except Exception:
            logger.exception(f"[{request_id}] Unexpected error while verifying code")
            error = INVALID_OR_EXPIRED_CODE
        return 400, ErrorResponse(verified=False, error=error, timestamp=_timestamp()).model_dump(exclude_none=True)
