import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_EMAIL = re.compile(r"\S+@\S+\.\S+")

FIELD_MESSAGES = {
    "customer_name": "Nome é obrigatório",
    "email": "Email é obrigatório",
    "phone": "Telefone é obrigatório",
    "age": "Idade deve estar entre 18 e 120 anos",
    "family_members": "Número de familiares é obrigatório",
    "telemedicine_interest": "Selecione uma opção",
    "employee_id": "Selecione um profissional",
}


class LeadForm(BaseModel):
    """Fields the customer fills in before the phone is verified."""

    customer_name: str
    email: str
    phone: str
    age: int = Field(ge=18, le=120)
    family_members: int = Field(ge=0)
    telemedicine_interest: str
    employee_id: str

    @field_validator("customer_name", "telemedicine_interest", "employee_id")
    @classmethod
    def not_blank(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(FIELD_MESSAGES[info.field_name])
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(FIELD_MESSAGES["email"])
        if not _EMAIL.fullmatch(value):
            raise ValueError("Email inválido")
        return value

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, value: str) -> str:
        digits = re.sub(r"\D", "", value)
        if not digits:
            raise ValueError(FIELD_MESSAGES["phone"])
        if not 10 <= len(digits) <= 13:
            raise ValueError("Telefone inválido. Use: (11) 99999-9999")
        return value


class LeadCreate(BaseModel):
    customer_name: str
    email: str
    phone: str
    phone_verified: bool
    age: int
    family_members: int
    telemedicine_interest: str
    pharmacy_id: str
    employee_id: str


class Lead(LeadCreate):
    id: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Pharmacy(BaseModel):
    id: str
    name: str
    address: str
    neighborhood: str
    city: str

    model_config = ConfigDict(from_attributes=True)


class Employee(BaseModel):
    id: str
    name: str
    role: str
    pharmacy_id: str

    model_config = ConfigDict(from_attributes=True)
