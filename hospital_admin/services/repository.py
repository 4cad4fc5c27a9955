from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.security import get_password_hash, verify_password
from ..core.storage import EntityStore
from ..models.appointment import Appointment
from ..models.billing import Billing
from ..models.dashboard import DashboardStats
from ..models.doctor import Doctor
from ..models.medical_record import MedicalRecord
from ..models.patient import Patient
from ..models.resource import HospitalResource
from ..models.user import User
from ..schemas.appointment import AppointmentCreate, AppointmentUpdate
from ..schemas.billing import BillingCreate, BillingUpdate
from ..schemas.doctor import DoctorCreate, DoctorUpdate
from ..schemas.medical_record import MedicalRecordCreate, MedicalRecordUpdate
from ..schemas.patient import PatientCreate, PatientUpdate
from ..schemas.resource import HospitalResourceCreate, HospitalResourceUpdate
from ..schemas.user import UserCreate
from .dashboard import compute_dashboard_stats
from .seed import seed_repository

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)
Payload = Union[BaseModel, Mapping[str, Any]]

def _coerce(schema: Type[SchemaT], data: Payload, label: str) -> SchemaT:
    """Validate a mapping against the payload schema of an entity kind."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(f"Invalid {label} data", exc) from exc

def _changes(schema: Type[SchemaT], data: Payload, label: str) -> Dict[str, Any]:
    # Only the fields the caller actually supplied take part in the merge.
    return _coerce(schema, data, label).model_dump(exclude_unset=True)


class HospitalRepository:
    """In-memory storage for every entity kind of the hospital service.

    Lookups that miss return ``None`` (or ``False`` for deletes); malformed
    input raises ``ValidationError``.
    """

    def __init__(
        self,
        seed: bool = True,
        validate_references: Optional[bool] = None,
        max_key_attempts: Optional[int] = None,
    ):
        if validate_references is None:
            validate_references = settings.VALIDATE_REFERENCES
        if max_key_attempts is None:
            max_key_attempts = settings.BUSINESS_KEY_MAX_ATTEMPTS
        self.validate_references = validate_references

        self.users: EntityStore[User] = EntityStore(
            User, label="user", key_field="username", timestamp_field=None
        )
        self.patients: EntityStore[Patient] = EntityStore(
            Patient, label="patient", key_field="patient_id", key_prefix="PT",
            max_key_attempts=max_key_attempts,
        )
        self.doctors: EntityStore[Doctor] = EntityStore(
            Doctor, label="doctor", key_field="doctor_id", key_prefix="DR",
            max_key_attempts=max_key_attempts,
        )
        self.appointments: EntityStore[Appointment] = EntityStore(
            Appointment, label="appointment", key_field="appointment_id", key_prefix="AP",
            max_key_attempts=max_key_attempts,
        )
        self.medical_records: EntityStore[MedicalRecord] = EntityStore(
            MedicalRecord, label="medical record", key_field="record_id", key_prefix="MR",
            max_key_attempts=max_key_attempts,
        )
        self.billings: EntityStore[Billing] = EntityStore(
            Billing, label="billing", key_field="billing_id", key_prefix="BL",
            max_key_attempts=max_key_attempts,
        )
        self.hospital_resources: EntityStore[HospitalResource] = EntityStore(
            HospitalResource, label="resource", timestamp_field="last_updated",
            touch_on_update=True,
        )

        if seed:
            seed_repository(self)

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.users.get_by_key(username)

    def create_user(self, user_data: Payload) -> User:
        """Create a user, storing a hash of the password."""
        data = _coerce(UserCreate, user_data, "user").model_dump()
        data["password_hash"] = get_password_hash(data.pop("password"))
        user = self.users.create(data)
        logger.info(f"Created user {user.username} with role {user.role.value}")
        return user

    def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, None otherwise."""
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    # Patients
    def get_all_patients(self) -> List[Patient]:
        return self.patients.list_all()

    def get_patient(self, patient_id: int) -> Optional[Patient]:
        return self.patients.get(patient_id)

    def get_patient_by_patient_id(self, patient_id: str) -> Optional[Patient]:
        return self.patients.get_by_key(patient_id)

    def search_patients(self, term: str) -> List[Patient]:
        """Case-insensitive match on name or patient id."""
        needle = term.strip().lower()
        return self.patients.filter(
            lambda patient: needle in patient.name.lower() or needle in patient.patient_id.lower()
        )

    def create_patient(self, patient_data: Payload) -> Patient:
        data = _coerce(PatientCreate, patient_data, "patient")
        return self.patients.create(data.model_dump())

    def update_patient(self, patient_id: str, patient_data: Payload) -> Optional[Patient]:
        return self.patients.update(patient_id, _changes(PatientUpdate, patient_data, "patient"))

    def delete_patient(self, patient_id: str) -> bool:
        return self.patients.delete(patient_id)

    # Doctors
    def get_all_doctors(self) -> List[Doctor]:
        return self.doctors.list_all()

    def get_doctor(self, doctor_id: int) -> Optional[Doctor]:
        return self.doctors.get(doctor_id)

    def get_doctor_by_doctor_id(self, doctor_id: str) -> Optional[Doctor]:
        return self.doctors.get_by_key(doctor_id)

    def get_doctors_by_specialization(self, specialization: str) -> List[Doctor]:
        wanted = specialization.strip().lower()
        return self.doctors.filter(lambda doctor: doctor.specialization.lower() == wanted)

    def create_doctor(self, doctor_data: Payload) -> Doctor:
        data = _coerce(DoctorCreate, doctor_data, "doctor")
        return self.doctors.create(data.model_dump())

    def update_doctor(self, doctor_id: str, doctor_data: Payload) -> Optional[Doctor]:
        return self.doctors.update(doctor_id, _changes(DoctorUpdate, doctor_data, "doctor"))

    def delete_doctor(self, doctor_id: str) -> bool:
        return self.doctors.delete(doctor_id)

    # Appointments
    def get_all_appointments(self) -> List[Appointment]:
        return self.appointments.list_all()

    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        return self.appointments.get(appointment_id)

    def get_appointment_by_appointment_id(self, appointment_id: str) -> Optional[Appointment]:
        return self.appointments.get_by_key(appointment_id)

    def get_appointments_by_patient_id(self, patient_id: str) -> List[Appointment]:
        return self.appointments.filter(lambda appointment: appointment.patient_id == patient_id)

    def get_appointments_by_doctor_id(self, doctor_id: str) -> List[Appointment]:
        return self.appointments.filter(lambda appointment: appointment.doctor_id == doctor_id)

    def get_appointments_by_date(self, appointment_date: str) -> List[Appointment]:
        return self.appointments.filter(lambda appointment: appointment.date == appointment_date)

    def create_appointment(self, appointment_data: Payload) -> Appointment:
        data = _coerce(AppointmentCreate, appointment_data, "appointment").model_dump()
        self._check_references(data, "appointment")
        return self.appointments.create(data)

    def update_appointment(self, appointment_id: str, appointment_data: Payload) -> Optional[Appointment]:
        changes = _changes(AppointmentUpdate, appointment_data, "appointment")
        if self.appointments.get_by_key(appointment_id) is None:
            return None
        self._check_references(changes, "appointment")
        return self.appointments.update(appointment_id, changes)

    def delete_appointment(self, appointment_id: str) -> bool:
        return self.appointments.delete(appointment_id)

    # Medical records
    def get_all_medical_records(self) -> List[MedicalRecord]:
        return self.medical_records.list_all()

    def get_medical_record(self, record_id: int) -> Optional[MedicalRecord]:
        return self.medical_records.get(record_id)

    def get_medical_record_by_record_id(self, record_id: str) -> Optional[MedicalRecord]:
        return self.medical_records.get_by_key(record_id)

    def get_medical_records_by_patient_id(self, patient_id: str) -> List[MedicalRecord]:
        return self.medical_records.filter(lambda record: record.patient_id == patient_id)

    def create_medical_record(self, record_data: Payload) -> MedicalRecord:
        data = _coerce(MedicalRecordCreate, record_data, "medical record").model_dump()
        self._check_references(data, "medical record")
        return self.medical_records.create(data)

    def update_medical_record(self, record_id: str, record_data: Payload) -> Optional[MedicalRecord]:
        changes = _changes(MedicalRecordUpdate, record_data, "medical record")
        if self.medical_records.get_by_key(record_id) is None:
            return None
        self._check_references(changes, "medical record")
        return self.medical_records.update(record_id, changes)

    def delete_medical_record(self, record_id: str) -> bool:
        return self.medical_records.delete(record_id)

    # Billings
    def get_all_billings(self) -> List[Billing]:
        return self.billings.list_all()

    def get_billing(self, billing_id: int) -> Optional[Billing]:
        return self.billings.get(billing_id)

    def get_billing_by_billing_id(self, billing_id: str) -> Optional[Billing]:
        return self.billings.get_by_key(billing_id)

    def get_billings_by_patient_id(self, patient_id: str) -> List[Billing]:
        return self.billings.filter(lambda billing: billing.patient_id == patient_id)

    def create_billing(self, billing_data: Payload) -> Billing:
        data = _coerce(BillingCreate, billing_data, "billing").model_dump()
        self._check_references(data, "billing")
        return self.billings.create(data)

    def update_billing(self, billing_id: str, billing_data: Payload) -> Optional[Billing]:
        changes = _changes(BillingUpdate, billing_data, "billing")
        if self.billings.get_by_key(billing_id) is None:
            return None
        self._check_references(changes, "billing")
        return self.billings.update(billing_id, changes)

    def delete_billing(self, billing_id: str) -> bool:
        return self.billings.delete(billing_id)

    # Hospital resources
    def get_all_hospital_resources(self) -> List[HospitalResource]:
        return self.hospital_resources.list_all()

    def get_hospital_resource(self, resource_id: int) -> Optional[HospitalResource]:
        return self.hospital_resources.get(resource_id)

    def get_hospital_resource_by_name(self, resource_name: str) -> Optional[HospitalResource]:
        return self.hospital_resources.find_first(lambda resource: resource.resource_name == resource_name)

    def create_hospital_resource(self, resource_data: Payload) -> HospitalResource:
        data = _coerce(HospitalResourceCreate, resource_data, "resource")
        return self.hospital_resources.create(data.model_dump())

    def update_hospital_resource(self, resource_id: int, resource_data: Payload) -> Optional[HospitalResource]:
        changes = _changes(HospitalResourceUpdate, resource_data, "resource")
        return self.hospital_resources.update_by_id(resource_id, changes)

    def delete_hospital_resource(self, resource_id: int) -> bool:
        return self.hospital_resources.delete_by_id(resource_id)

    # Dashboard
    def get_dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        return compute_dashboard_stats(self, today=today)

    def _check_references(self, data: Mapping[str, Any], label: str):
        """Reject unknown patient/doctor keys when reference checking is on."""
        if not self.validate_references:
            return

        errors = []
        patient_id = data.get("patient_id")
        if patient_id is not None and self.patients.get_by_key(patient_id) is None:
            errors.append({"loc": ["patientId"], "msg": f"Patient {patient_id} does not exist", "type": "missing_reference"})
        doctor_id = data.get("doctor_id")
        if doctor_id is not None and self.doctors.get_by_key(doctor_id) is None:
            errors.append({"loc": ["doctorId"], "msg": f"Doctor {doctor_id} does not exist", "type": "missing_reference"})

        if errors:
            raise ValidationError(f"Invalid {label} data", errors=errors)
