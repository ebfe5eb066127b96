"""GPU API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from shared.models import APIResponse
from shared.observability import get_logger

from ..collectors.presentation import MemoryUnit, convert_gpu_metrics, convert_gpu_processes
from ..services.gpu_service import GPUService
from ..services.query_executor import QueryBatchError

logger = get_logger(__name__)

router = APIRouter()


def error_response(status_code: int, error: str) -> JSONResponse:
    """Build a failure envelope."""
    body = APIResponse(success=False, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def get_gpu_service(request: Request) -> GPUService:
    return request.app.state.gpu_service


@router.get(
    "/gpu/metrics",
    response_model=APIResponse,
    response_model_exclude_none=True,
    summary="Get GPU metrics",
    description="Per-GPU memory, utilization and temperature joined with node CPU/memory usage.",
)
async def get_gpu_metrics(
    request: Request,
    unit: MemoryUnit = MemoryUnit.BYTES,
):
    """Get GPU metrics for every GPU, sorted by node and GPU index."""
    service = get_gpu_service(request)

    try:
        metrics = await service.get_gpu_metrics()
    except QueryBatchError as e:
        logger.error("Get GPU metrics failed", error=str(e))
        return error_response(500, "Failed to retrieve GPU metrics")

    return APIResponse(
        success=True,
        data=convert_gpu_metrics(metrics, unit),
        message="GPU metrics retrieved successfully",
    )


@router.get(
    "/gpu/processes",
    response_model=APIResponse,
    response_model_exclude_none=True,
    summary="List GPU processes",
    description="Processes holding GPU memory, sorted by node, GPU index and pid.",
)
async def get_gpu_processes(
    request: Request,
    unit: MemoryUnit = MemoryUnit.BYTES,
):
    """List GPU processes."""
    service = get_gpu_service(request)

    try:
        processes = await service.get_gpu_processes()
    except QueryBatchError as e:
        logger.error("Get GPU processes failed", error=str(e))
        return error_response(500, "Failed to retrieve GPU processes")

    return APIResponse(
        success=True,
        data=convert_gpu_processes(processes, unit),
        message="GPU processes retrieved successfully",
    )
