from fastapi import APIRouter, Request

from files_api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness check. Reports the bucket this instance writes to without calling S3."""
    settings = request.app.state.settings
    return HealthResponse(status="ok", bucket=settings.s3_bucket_name)
