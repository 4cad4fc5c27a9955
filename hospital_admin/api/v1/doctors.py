from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.doctor import Doctor
from ...schemas.doctor import DoctorCreate, DoctorUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/doctors", tags=["Doctors"])

@router.get("", response_model=List[Doctor])
async def list_doctors(
    specialization: Optional[str] = None,
    repository: HospitalRepository = Depends(get_repository)
):
    if specialization:
        return repository.get_doctors_by_specialization(specialization)
    return repository.get_all_doctors()

@router.get("/{doctor_id}", response_model=Doctor)
async def get_doctor(
    doctor_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    doctor = repository.get_doctor_by_doctor_id(doctor_id)
    if not doctor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Doctor not found"
        )
    return doctor

@router.post("", response_model=Doctor, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_doctor(doctor_data)

@router.put("/{doctor_id}", response_model=Doctor)
async def update_doctor(
    doctor_id: str,
    doctor_data: DoctorUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    doctor = repository.update_doctor(doctor_id, doctor_data)
    if not doctor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Doctor not found"
        )
    return doctor

@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    doctor_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_doctor(doctor_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Doctor not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
