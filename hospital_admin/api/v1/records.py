from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.medical_record import MedicalRecord
from ...schemas.medical_record import MedicalRecordCreate, MedicalRecordUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/records", tags=["Medical Records"])

@router.get("", response_model=List[MedicalRecord])
async def list_medical_records(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    repository: HospitalRepository = Depends(get_repository)
):
    if patient_id:
        return repository.get_medical_records_by_patient_id(patient_id)
    return repository.get_all_medical_records()

@router.get("/{record_id}", response_model=MedicalRecord)
async def get_medical_record(
    record_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    record = repository.get_medical_record_by_record_id(record_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Medical record not found"
        )
    return record

@router.post("", response_model=MedicalRecord, status_code=status.HTTP_201_CREATED)
async def create_medical_record(
    record_data: MedicalRecordCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_medical_record(record_data)

@router.put("/{record_id}", response_model=MedicalRecord)
async def update_medical_record(
    record_id: str,
    record_data: MedicalRecordUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    record = repository.update_medical_record(record_id, record_data)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Medical record not found"
        )
    return record

@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medical_record(
    record_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_medical_record(record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Medical record not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
