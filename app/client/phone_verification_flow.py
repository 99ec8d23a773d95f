"""
State machine behind the phone verification step of the lead form.

    idle -> sending -> coded -> verifying -> success
                         ^          |
                         +----------+  (rejected code, error shown)

The flow talks to the two verification endpoints over HTTP and never raises:
every failure ends up in ``error`` with the flow left in a retryable state.
"""
import enum
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from app.core.verification_strategies import DEVELOPMENT_MODE, FALLBACK_TEST_CODE
from app.utils.phone import is_valid_code, mask_phone

logger = logging.getLogger(__name__)

SEND_PATH = "/send-sms-verification"
VERIFY_PATH = "/verify-sms-code"

SEND_FAILED = "Erro ao enviar SMS. Tente novamente."
UNKNOWN_API_ERROR = "Erro desconhecido na API"
CONNECTION_ERROR = "Erro de conexão. Verifique sua internet e tente novamente."
TIMEOUT_ERROR = "Timeout na conexão. Tente novamente."
BAD_SERVER_RESPONSE = "Erro interno do servidor. Tente novamente em alguns minutos."
INVALID_CODE = "Código inválido ou expirado"

Callback = Callable[..., Union[None, Awaitable[None]]]


class FlowState(str, enum.Enum):
    IDLE = "idle"
    SENDING = "sending"
    CODED = "coded"
    VERIFYING = "verifying"
    SUCCESS = "success"


class _BadResponse(Exception):
    pass


async def _notify(callback: Optional[Callback], *args):
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class PhoneVerificationFlow:
    def __init__(
        self,
        phone_number: str,
        base_url: str = "",
        on_complete: Optional[Callback] = None,
        on_back: Optional[Callback] = None,
        http: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
    ):
        self.phone_number = phone_number
        self.base_url = base_url
        self.on_complete = on_complete
        self.on_back = on_back
        self.http = http
        self.api_key = api_key
        self.timeout = timeout
        self._reset()

    def _reset(self):
        self.state = FlowState.IDLE
        self.code_sent = False
        self.method = ""
        self.sid = None
        self.code = ""
        self.error = ""
        self.verified_phone = None

    @property
    def busy(self) -> bool:
        return self.state in (FlowState.SENDING, FlowState.VERIFYING)

    @property
    def shows_fallback_hint(self) -> bool:
        return self.method == DEVELOPMENT_MODE

    @property
    def fallback_code(self) -> Optional[str]:
        return FALLBACK_TEST_CODE if self.shows_fallback_hint else None

    @property
    def can_submit(self) -> bool:
        return self.state == FlowState.CODED and is_valid_code(self.code)

    async def start(self) -> bool:
        """Called when the verification step is shown; sends the first code."""
        if self.code_sent or self.busy:
            return self.code_sent
        return await self._send()

    async def resend(self) -> bool:
        if self.busy:
            return False
        return await self._send()

    def set_code(self, raw: str):
        # same sanitising as the input box: digits only, at most six
        self.code = "".join(ch for ch in (raw or "") if ch in "0123456789")[:6]

    async def submit_code(self, code: Optional[str] = None) -> bool:
        if code is not None:
            self.set_code(code)
        if not self.can_submit:
            return False

        self.state = FlowState.VERIFYING
        self.error = ""
        try:
            data = await self._post(VERIFY_PATH, {"phoneNumber": self.phone_number, "code": self.code})
        except Exception as e:
            logger.error(f"Verification request failed for {mask_phone(self.phone_number)}: {e!r}")
            self.error = self._transport_message(e, INVALID_CODE)
            self.state = FlowState.CODED
            return False

        if data.get("success") and data.get("verified"):
            logger.info(f"Code verified via {data.get('method', 'unknown')}")
            self.state = FlowState.SUCCESS
            self.verified_phone = data.get("phone")
            await _notify(self.on_complete, True)
            return True

        self.error = data.get("error") or INVALID_CODE
        self.state = FlowState.CODED
        return False

    async def back(self):
        """Abandons the flow. Any pending code simply expires on the provider side."""
        self._reset()
        await _notify(self.on_back)

    async def _send(self) -> bool:
        previous = FlowState.CODED if self.code_sent else FlowState.IDLE
        self.state = FlowState.SENDING
        self.error = ""
        try:
            data = await self._post(SEND_PATH, {"phoneNumber": self.phone_number})
        except Exception as e:
            logger.error(f"Send request failed for {mask_phone(self.phone_number)}: {e!r}")
            self.error = self._transport_message(e, SEND_FAILED)
            self.state = previous
            return False

        if not data.get("success"):
            self.error = data.get("error") or UNKNOWN_API_ERROR
            self.state = previous
            return False

        self.code_sent = True
        self.method = data.get("method") or "unknown"
        self.sid = data.get("sid")
        self.state = FlowState.CODED
        if self.shows_fallback_hint:
            logger.info(f"Development mode active - use code {FALLBACK_TEST_CODE}")
        else:
            logger.info(f"Code sent via {self.method} - SID: {self.sid}")
        return True

    @staticmethod
    def _transport_message(error: Exception, default: str) -> str:
        if isinstance(error, httpx.TimeoutException):
            return TIMEOUT_ERROR
        if isinstance(error, httpx.RequestError):
            return CONNECTION_ERROR
        if isinstance(error, _BadResponse):
            return BAD_SERVER_RESPONSE
        return default

    async def _post(self, path: str, body: dict) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        if self.http is not None:
            response = await self.http.post(f"{self.base_url}{path}", json=body, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.base_url}{path}", json=body, headers=headers)

        try:
            data = response.json()
        except ValueError as e:
            raise _BadResponse(response.text[:100]) from e
        if not isinstance(data, dict):
            raise _BadResponse(response.text[:100])
        return data
