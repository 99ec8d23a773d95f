import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from app.utils.db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Pharmacy(Base):
    __tablename__ = "pharmacies"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    neighborhood = Column(String, nullable=False)
    city = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now(), server_default=func.now())


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    pharmacy_id = Column(String(36), ForeignKey("pharmacies.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), server_default=func.now())


class Lead(Base):
    __tablename__ = "leads"

    id = Column(String(36), primary_key=True, default=_uuid)
    customer_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    phone_verified = Column(Boolean, nullable=False, default=False)
    age = Column(Integer, nullable=False)
    family_members = Column(Integer, nullable=False)
    telemedicine_interest = Column(String, nullable=False)
    pharmacy_id = Column(String(36), ForeignKey("pharmacies.id"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), server_default=func.now())
