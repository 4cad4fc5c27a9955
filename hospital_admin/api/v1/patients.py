from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.patient import Patient
from ...schemas.patient import PatientCreate, PatientUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/patients", tags=["Patients"])

@router.get("", response_model=List[Patient])
async def list_patients(
    search: Optional[str] = None,
    repository: HospitalRepository = Depends(get_repository)
):
    """List patients, optionally filtered by name or patient id."""
    if search:
        return repository.search_patients(search)
    return repository.get_all_patients()

@router.get("/{patient_id}", response_model=Patient)
async def get_patient(
    patient_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    patient = repository.get_patient_by_patient_id(patient_id)
    if not patient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found"
        )
    return patient

@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: PatientCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_patient(patient_data)

@router.put("/{patient_id}", response_model=Patient)
async def update_patient(
    patient_id: str,
    patient_data: PatientUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    """Update only the fields present in the request body."""
    patient = repository.update_patient(patient_id, patient_data)
    if not patient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found"
        )
    return patient

@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_patient(patient_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
