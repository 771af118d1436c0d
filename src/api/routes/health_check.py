from typing import List

from fastapi import APIRouter, status
from pydantic import BaseModel

from config import ApplicationConfig
from src.app.use_cases.common import CamelModel

router = APIRouter()


class ApiInfoResponse(CamelModel):
    """GET / response payload"""

    name: str
    version: str
    description: str
    available_versions: List[str]
    docs_url: str


class HealthResponse(BaseModel):
    status: str


@router.get("/", status_code=status.HTTP_200_OK, response_model=ApiInfoResponse)
async def api_info():
    """API information: name, version, available API versions and docs location"""
    return ApiInfoResponse(
        name=ApplicationConfig.APP_NAME,
        version=ApplicationConfig.APP_VERSION,
        description=(
            "Welcome to the Cinema Ticketing API! "
            "Please refer to the documentation for usage details at /docs."
        ),
        available_versions=[ApplicationConfig.API_PREFIX.strip("/")],
        docs_url="/docs",
    )


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok")
