"""The landing page and the container app's hello endpoints."""
import socket
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse

from eb_course.dependencies import get_app_settings
from eb_course.schemas import AppInfo
from eb_course.settings import Settings
from eb_course.utils.clock import to_iso

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()


@router.get("/", response_class=FileResponse, include_in_schema=False)
def index() -> FileResponse:
    """Serve the static landing page."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@router.get("/hello", response_class=PlainTextResponse)
def hello(settings: Settings = Depends(get_app_settings)) -> str:
    return f"Hello from {settings.app_name} running in {settings.environment_name}!"


@router.get("/api/info")
def app_info(settings: Settings = Depends(get_app_settings)) -> AppInfo:
    """Describe the running instance."""
    return AppInfo(
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment_name,
        deployment_mode=settings.deployment_mode,
        region=settings.aws_region,
        hostname=socket.gethostname(),
        timestamp=to_iso(),
    )
