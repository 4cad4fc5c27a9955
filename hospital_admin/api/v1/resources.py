from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List, Optional

from ...api.deps import get_repository
from ...models.resource import HospitalResource
from ...schemas.resource import HospitalResourceCreate, HospitalResourceUpdate
from ...services.repository import HospitalRepository

router = APIRouter(prefix="/resources", tags=["Hospital Resources"])

@router.get("", response_model=List[HospitalResource])
async def list_resources(
    name: Optional[str] = None,
    repository: HospitalRepository = Depends(get_repository)
):
    """List hospital resources; ``name`` returns the first resource with that name."""
    if name:
        resource = repository.get_hospital_resource_by_name(name)
        return [resource] if resource else []
    return repository.get_all_hospital_resources()

@router.get("/{resource_id}", response_model=HospitalResource)
async def get_resource(
    resource_id: int,
    repository: HospitalRepository = Depends(get_repository)
):
    resource = repository.get_hospital_resource(resource_id)
    if not resource:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found"
        )
    return resource

@router.post("", response_model=HospitalResource, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_data: HospitalResourceCreate,
    repository: HospitalRepository = Depends(get_repository)
):
    return repository.create_hospital_resource(resource_data)

@router.put("/{resource_id}", response_model=HospitalResource)
async def update_resource(
    resource_id: int,
    resource_data: HospitalResourceUpdate,
    repository: HospitalRepository = Depends(get_repository)
):
    resource = repository.update_hospital_resource(resource_id, resource_data)
    if not resource:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found"
        )
    return resource

@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: int,
    repository: HospitalRepository = Depends(get_repository)
):
    if not repository.delete_hospital_resource(resource_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resource not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
