"""Service banner and health check — no rate limit."""

from __future__ import annotations

from fastapi import APIRouter

from scanner.api.schemas import HealthResponse, ServiceInfo, health, service_info

router = APIRouter(tags=["health"])


@router.get("/", response_model=ServiceInfo)
async def root() -> ServiceInfo:
    return service_info()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return health()
