"""
Demo dataset loaded into a fresh repository.

Entities are created in a fixed order and every seeded appointment, record
and billing points at a seeded patient/doctor key.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional
import logging

if TYPE_CHECKING:
    from .repository import HospitalRepository

logger = logging.getLogger(__name__)

USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "role": "admin",
        "name": "System Administrator",
        "email": "admin@medicare.com",
    },
    {
        "username": "drjohnson",
        "password": "doctor123",
        "role": "doctor",
        "name": "Dr. Sarah Johnson",
        "email": "sarah.johnson@medicare.com",
        "avatar": "https://images.unsplash.com/photo-1559839734-2b71ea197ec2?ixlib=rb-1.2.1&auto=format&fit=crop&w=256&q=80",
    },
]

RESOURCES = [
    {"resource_name": "beds", "total_count": 160, "used_count": 137},
    {"resource_name": "icu", "total_count": 20, "used_count": 16},
    {"resource_name": "operating-rooms", "total_count": 6, "used_count": 3},
    {"resource_name": "ventilators", "total_count": 30, "used_count": 12},
]

DOCTORS = [
    {"doctor_id": "DR1001", "name": "Dr. Michael Brown", "specialization": "Cardiology",
     "email": "michael.brown@medicare.com", "phone": "555-123-4567", "department": "Cardiology"},
    {"doctor_id": "DR1002", "name": "Dr. Sarah Johnson", "specialization": "General Medicine",
     "email": "sarah.johnson@medicare.com", "phone": "555-123-4568", "department": "General"},
    {"doctor_id": "DR1003", "name": "Dr. Amanda Rodriguez", "specialization": "Orthopedics",
     "email": "amanda.rodriguez@medicare.com", "phone": "555-123-4569", "department": "Orthopedics"},
    {"doctor_id": "DR1004", "name": "Dr. James Wilson", "specialization": "Neurology",
     "email": "james.wilson@medicare.com", "phone": "555-123-4570", "department": "Neurology"},
]

PATIENTS = [
    {"patient_id": "PT10834", "name": "Emma Wilson", "email": "emma.wilson@example.com",
     "phone": "555-234-5678", "date_of_birth": "1985-06-15", "gender": "Female", "blood_type": "A+"},
    {"patient_id": "PT10567", "name": "Robert Martinez", "email": "robert.martinez@example.com",
     "phone": "555-234-5679", "date_of_birth": "1978-12-03", "gender": "Male", "blood_type": "O-"},
    {"patient_id": "PT10982", "name": "David Lee", "email": "david.lee@example.com",
     "phone": "555-234-5680", "date_of_birth": "1990-04-22", "gender": "Male", "blood_type": "B+"},
    {"patient_id": "PT10742", "name": "Maria Garcia", "email": "maria.garcia@example.com",
     "phone": "555-234-5681", "date_of_birth": "1983-09-28", "gender": "Female", "blood_type": "AB-"},
    {"patient_id": "PT10456", "name": "Jennifer Anderson", "email": "jennifer.anderson@example.com",
     "phone": "555-234-5682", "date_of_birth": "1975-05-10", "gender": "Female", "blood_type": "O+"},
    {"patient_id": "PT10789", "name": "Thomas Wright", "email": "thomas.wright@example.com",
     "phone": "555-234-5683", "date_of_birth": "1992-11-18", "gender": "Male", "blood_type": "A-"},
    {"patient_id": "PT10654", "name": "Sophia Kim", "email": "sophia.kim@example.com",
     "phone": "555-234-5684", "date_of_birth": "1988-07-31", "gender": "Female", "blood_type": "B-"},
    {"patient_id": "PT10321", "name": "Alice Chen", "email": "alice.chen@example.com",
     "phone": "555-234-5685", "date_of_birth": "1995-02-14", "gender": "Female", "blood_type": "AB+"},
]

# Appointments are booked for the day the repository is seeded.
APPOINTMENTS = [
    {"appointment_id": "AP1001", "patient_id": "PT10834", "doctor_id": "DR1001",
     "time": "10:30", "status": "confirmed", "notes": "Regular checkup"},
    {"appointment_id": "AP1002", "patient_id": "PT10567", "doctor_id": "DR1002",
     "time": "11:15", "status": "waiting", "notes": "Follow-up consultation"},
    {"appointment_id": "AP1003", "patient_id": "PT10982", "doctor_id": "DR1003",
     "time": "13:00", "status": "in-progress", "notes": "Post-surgery checkup"},
    {"appointment_id": "AP1004", "patient_id": "PT10742", "doctor_id": "DR1004",
     "time": "14:30", "status": "confirmed", "notes": "Neurological assessment"},
]

MEDICAL_RECORDS = [
    {"record_id": "MR1001", "patient_id": "PT10834", "doctor_id": "DR1001", "date": "2023-10-01",
     "diagnosis": "Hypertension", "treatment": "Prescribed lisinopril 10mg daily",
     "medications": "Lisinopril 10mg", "notes": "Patient reported occasional headaches"},
    {"record_id": "MR1002", "patient_id": "PT10567", "doctor_id": "DR1002", "date": "2023-10-05",
     "diagnosis": "Upper respiratory infection", "treatment": "Prescribed antibiotics for 7 days",
     "medications": "Amoxicillin 500mg", "notes": "Follow up if symptoms persist"},
]

BILLINGS = [
    {"billing_id": "BL1001", "patient_id": "PT10834", "date": "2023-10-16",
     "description": "Insurance claim processed", "amount": "1850.00", "status": "paid",
     "payment_method": "Insurance", "insurance_info": "BlueCross #12345"},
    {"billing_id": "BL1002", "patient_id": "PT10982", "date": "2023-10-15",
     "description": "Payment pending", "amount": "732.50", "status": "pending",
     "payment_method": "Credit Card", "insurance_info": "Aetna #54321"},
    {"billing_id": "BL1003", "patient_id": "PT10789", "date": "2023-10-15",
     "description": "Claim rejected", "amount": "1245.00", "status": "pending",
     "payment_method": "Insurance", "insurance_info": "United #67890"},
    {"billing_id": "BL1004", "patient_id": "PT10321", "date": "2023-10-14",
     "description": "Invoice generated", "amount": "578.25", "status": "pending",
     "payment_method": "Cash", "insurance_info": ""},
]

def seed_repository(repository: "HospitalRepository", today: Optional[date] = None):
    """Populate an empty repository with the demo dataset."""
    today_str = (today or date.today()).isoformat()

    for user in USERS:
        repository.create_user(user)
    for resource in RESOURCES:
        repository.create_hospital_resource(resource)
    for doctor in DOCTORS:
        repository.create_doctor(doctor)
    for patient in PATIENTS:
        repository.create_patient(patient)
    for appointment in APPOINTMENTS:
        repository.create_appointment({**appointment, "date": today_str})
    for record in MEDICAL_RECORDS:
        repository.create_medical_record(record)
    for billing in BILLINGS:
        repository.create_billing(billing)

    logger.info(
        f"Seeded repository: {len(USERS)} users, {len(DOCTORS)} doctors, "
        f"{len(PATIENTS)} patients, {len(APPOINTMENTS)} appointments"
    )
