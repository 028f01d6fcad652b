"""Router for healthcheck endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/healthcheck", tags=["healthcheck"])


@router.get("/", status_code=status.HTTP_200_OK)
async def get_healthcheck() -> JSONResponse:
    """Report that the service is up and serving requests."""
    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})
