from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.billing import Billing
from ...schemas.billing import BillingCreate, BillingUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/billings", tags=["Billing"])

@router.get("", response_model=List[Billing])
async def list_billings(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    repository: HospitalRepository = Depends(get_repository)
):
    if patient_id:
        return repository.get_billings_by_patient_id(patient_id)
    return repository.get_all_billings()

@router.get("/{billing_id}", response_model=Billing)
async def get_billing(
    billing_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    billing = repository.get_billing_by_billing_id(billing_id)
    if not billing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Billing not found"
        )
    return billing

@router.post("", response_model=Billing, status_code=status.HTTP_201_CREATED)
async def create_billing(
    billing_data: BillingCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_billing(billing_data)

@router.put("/{billing_id}", response_model=Billing)
async def update_billing(
    billing_id: str,
    billing_data: BillingUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    billing = repository.update_billing(billing_id, billing_data)
    if not billing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Billing not found"
        )
    return billing

@router.delete("/{billing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_billing(
    billing_id: str,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_billing(billing_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Billing not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
