from fastapi import Request

from ..services.repository import HospitalRepository

def get_repository(request: Request) -> HospitalRepository:
    """Get the repository created at application start-up."""
    return request.app.state.repository
