from typing import Optional

INVALID_OR_EXPIRED_CODE = "Código inválido ou expirado"
SEND_FAILED = "Erro ao enviar SMS"
CONNECTION_FAILED = "Erro de conexão com o provedor de SMS. Tente novamente."

# Twilio error codes -> messages shown to the person filling the form
PROVIDER_ERROR_MESSAGES = {
    20003: "Número de telefone inválido ou não autorizado.",
    20404: "Verificação não encontrada. Solicite um novo código.",
    21211: "Formato de telefone inválido. Use: (11) 99999-9999",
    21608: "Número de telefone não autorizado para receber SMS.",
    21614: "Este número não pode receber SMS.",
    60200: "Formato de telefone inválido. Use: (11) 99999-9999",
    60202: "Muitas tentativas de verificação. Solicite um novo código.",
    60203: "Muitos códigos solicitados. Aguarde alguns minutos e tente novamente.",
}


class VerificationError(Exception):
    """Base error for the phone verification flow."""

    def user_message(self, default: str) -> str:
        return str(self) or default


class ValidationError(VerificationError):
    """Raised when the request is missing a phone number or carries a malformed code."""


class ProviderError(VerificationError):
    """Raised when Twilio Verify answers with a non-success status."""

    def __init__(self, message: str, code: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code

    def user_message(self, default: str) -> str:
        return PROVIDER_ERROR_MESSAGES.get(self.code, default)


class TransportError(VerificationError):
    """Raised when Twilio Verify could not be reached (DNS, timeout, reset)."""

    def user_message(self, default: str) -> str:
        return CONNECTION_FAILED
