import logging
from typing import Callable, Dict, Optional

from pydantic import ValidationError as SchemaValidationError

from app.client.phone_verification_flow import PhoneVerificationFlow
from app.schemas.lead_schemas import FIELD_MESSAGES, Lead, LeadCreate, LeadForm
from app.utils.phone import mask_phone, normalize_phone

logger = logging.getLogger(__name__)


def _form_errors(error: SchemaValidationError) -> Dict[str, str]:
    errors = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item.get("loc") else "form"
        if item["type"] == "value_error":
            errors[field] = str(item["ctx"]["error"])
        else:
            errors[field] = FIELD_MESSAGES.get(field, item["msg"])
    return errors


class LeadSubmission:
    """
    Lead form submit handler.

    The lead is written only from the verification flow's completion callback,
    and only when that flow confirmed the same canonical phone the form carries.
    """

    def __init__(
        self,
        pharmacy_id: str,
        store,
        flow_factory: Callable[..., PhoneVerificationFlow] = PhoneVerificationFlow,
        **flow_options,
    ):
        self.pharmacy_id = pharmacy_id
        self.store = store
        self.flow_factory = flow_factory
        self.flow_options = flow_options

        self.form: Optional[LeadForm] = None
        self.verification: Optional[PhoneVerificationFlow] = None
        self.errors: Dict[str, str] = {}
        self.submitting = False
        self.lead: Optional[Lead] = None

    @property
    def completed(self) -> bool:
        return self.lead is not None

    async def submit(self, form_data: dict) -> bool:
        """Validates the form and opens phone verification. Nothing is stored here."""
        self.errors = {}
        try:
            self.form = LeadForm.model_validate(form_data)
        except SchemaValidationError as e:
            self.errors = _form_errors(e)
            return False

        self.verification = self.flow_factory(
            normalize_phone(self.form.phone),
            on_complete=self.on_verification_complete,
            on_back=self.close_verification,
            **self.flow_options,
        )
        await self.verification.start()
        return True

    async def on_verification_complete(self, verified: bool):
        flow = self.verification
        if not verified or flow is None or self.form is None:
            self.close_verification()
            return

        phone = normalize_phone(self.form.phone)
        if flow.verified_phone != phone:
            logger.warning(f"Verified phone does not match form phone {mask_phone(phone)}; lead not saved")
            self.errors = {"submit": "Telefone não verificado. Tente novamente."}
            self.close_verification()
            return

        self.submitting = True
        try:
            lead = LeadCreate(
                **self.form.model_dump(exclude={"phone"}),
                phone=phone,
                phone_verified=True,
                pharmacy_id=self.pharmacy_id,
            )
            self.lead = self.store.create_lead(lead)
            logger.info(f"Lead {self.lead.id} created for pharmacy {self.pharmacy_id}")
        except Exception as e:
            logger.exception("Failed to save lead")
            self.errors = {"submit": f"Erro ao enviar formulário: {e}. Tente novamente."}
        finally:
            self.submitting = False
            self.close_verification()

    def close_verification(self):
        self.verification = None
