from fastapi import APIRouter

from ..schemas.task import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse()
