from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from eb_course.dependencies import get_worker_context
from eb_course.schemas import HealthReport
from eb_course.utils.clock import to_iso
from eb_course.worker.context import WorkerContext
from eb_course.worker.health import run_health_checks

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthReport,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthReport}},
)
async def health_check(context: WorkerContext = Depends(get_worker_context)) -> JSONResponse:
    """
    Health check endpoint for the load balancer and the worker daemon.

    Returns 200 when every check passes and 503 otherwise, with the result of
    each check in ``checks``.
    """
    checks = await run_in_threadpool(run_health_checks, context)
    healthy = all(checks.values())
    report = HealthReport(
        status="healthy" if healthy else "unhealthy",
        checks=checks,
        timestamp=to_iso(),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=report.model_dump(),
    )
