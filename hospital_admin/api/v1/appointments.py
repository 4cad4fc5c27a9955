from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.appointment import Appointment
from ...schemas.appointment import AppointmentCreate, AppointmentUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.get("", response_model=List[Appointment])
async def list_appointments(
    date: Optional[str] = None,
    patient_id: Optional[str] = Query(None, alias="patientId"),
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    repository: HospitalRepository = Depends(get_repository)
):
    """List appointments.

    A single filter applies, checked in this order: ``date``,
    ``patientId``, ``doctorId``.
    """
    if date:
        return repository.get_appointments_by_date(date)
    if patient_id:
        return repository.get_appointments_by_patient_id(patient_id)
    if doctor_id:
        return repository.get_appointments_by_doctor_id(doctor_id)
    return repository.get_all_appointments()

@router.get("/{appointment_id}", response_model=Appointment)
async def get_appointment(
    appointment_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    appointment = repository.get_appointment_by_appointment_id(appointment_id)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    return appointment

@router.post("", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment_data: AppointmentCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_appointment(appointment_data)

@router.put("/{appointment_id}", response_model=Appointment)
async def update_appointment(
    appointment_id: str,
    appointment_data: AppointmentUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    appointment = repository.update_appointment(appointment_id, appointment_data)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    return appointment

@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_appointment(appointment_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
