import httpx
import logging
from typing import Any, Dict

from app.config.config import Config, ProviderCredentials
from app.core.errors import ProviderError, TransportError
from app.utils.phone import mask_phone

logger = logging.getLogger(__name__)

APPROVED = "approved"


class TwilioVerifyClient:
    """
    Thin wrapper over the Twilio Verify v2 REST resources.
    One outbound POST per call, no retries.
    """

    def __init__(
        self,
        credentials: ProviderCredentials,
        base_url: str = Config.PROVIDER_VERIFY_BASE_URL,
        timeout: float = Config.PROVIDER_TIMEOUT_SECONDS,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _service_url(self, resource: str) -> str:
        return f"{self.base_url}/Services/{self.credentials.service_id}/{resource}"

    async def start_verification(self, phone_number: str) -> Dict[str, Any]:
        """Asks the Verifications resource to send a code over SMS."""
        return await self._post("Verifications", {"To": phone_number, "Channel": "sms"}, phone_number)

    async def check_verification(self, phone_number: str, code: str) -> Dict[str, Any]:
        """Checks a code against VerificationCheck. Only status == 'approved' is a match."""
        return await self._post("VerificationCheck", {"To": phone_number, "Code": code}, phone_number)

    async def _post(self, resource: str, form: Dict[str, str], phone_number: str) -> Dict[str, Any]:
        auth = httpx.BasicAuth(self.credentials.account_id, self.credentials.auth_token)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self._service_url(resource), data=form, auth=auth)
            except httpx.TimeoutException as e:
                logger.error(f"Twilio {resource} timed out after {self.timeout}s for {mask_phone(phone_number)}")
                raise TransportError(f"Twilio request timed out after {self.timeout}s") from e
            except httpx.RequestError as e:
                logger.error(f"Request error calling Twilio {resource} for {mask_phone(phone_number)}: {e}")
                raise TransportError(f"Twilio connection failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_success:
            logger.info(f"Twilio {resource} for {mask_phone(phone_number)}: status={payload.get('status')}")
            return payload

        code = payload.get("code")
        if not isinstance(code, int) or isinstance(code, bool):
            code = None
        logger.error(
            f"HTTP error from Twilio {resource}: {response.status_code} - "
            f"code={payload.get('code')} message={payload.get('message')}"
        )
        raise ProviderError(
            f"Twilio Error: {payload.get('message') or response.reason_phrase}",
            code=code,
            status_code=response.status_code,
        )
