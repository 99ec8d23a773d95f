from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.lead import Employee, Lead, Pharmacy
from app.utils.db import SessionLocal
from app.schemas.lead_schemas import Employee as EmployeeSchema, Lead as LeadSchema, LeadCreate, Pharmacy as PharmacySchema


def create_pharmacy(db: Session, name: str, address: str, neighborhood: str, city: str) -> Pharmacy:
    db_pharmacy = Pharmacy(name=name, address=address, neighborhood=neighborhood, city=city)
    db.add(db_pharmacy)
    db.commit()
    db.refresh(db_pharmacy)
    return db_pharmacy


def create_employee(db: Session, pharmacy_id: str, name: str, role: str) -> Employee:
    db_employee = Employee(pharmacy_id=pharmacy_id, name=name, role=role)
    db.add(db_employee)
    db.commit()
    db.refresh(db_employee)
    return db_employee


def get_pharmacy(db: Session, pharmacy_id: str) -> Optional[Pharmacy]:
    return db.get(Pharmacy, pharmacy_id)


def get_employees_for_pharmacy(db: Session, pharmacy_id: str) -> List[Employee]:
    return db.query(Employee).filter(Employee.pharmacy_id == pharmacy_id).order_by(Employee.name).all()


def create_lead(db: Session, lead: LeadCreate) -> Lead:
    db_lead = Lead(**lead.model_dump())
    db.add(db_lead)
    db.commit()
    db.refresh(db_lead)
    return db_lead


def get_lead(db: Session, lead_id: str) -> Optional[Lead]:
    return db.get(Lead, lead_id)


class LeadStore:
    """Lead-storage collaborator: one short-lived session per write."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_lead(self, lead: LeadCreate) -> LeadSchema:
        db: Session = self.session_factory()
        try:
            return LeadSchema.model_validate(create_lead(db, lead))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def get_pharmacy(self, pharmacy_id: str) -> Optional[PharmacySchema]:
        db: Session = self.session_factory()
        try:
            pharmacy = get_pharmacy(db, pharmacy_id)
            return PharmacySchema.model_validate(pharmacy) if pharmacy else None
        finally:
            db.close()

    def list_employees(self, pharmacy_id: str) -> List[EmployeeSchema]:
        """Employees offered in the form's "who helped you" select."""
        db: Session = self.session_factory()
        try:
            return [EmployeeSchema.model_validate(e) for e in get_employees_for_pharmacy(db, pharmacy_id)]
        finally:
            db.close()
