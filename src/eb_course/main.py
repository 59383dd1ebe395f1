from textwrap import dedent
import logging

import pydantic
from fastapi import FastAPI
from fastapi.routing import APIRoute

from eb_course.aws.clients import AWSClients
from eb_course.errors import (
    CourseAppError,
    handle_broad_exceptions,
    handle_course_app_errors,
    handle_pydantic_validation_errors,
)
from eb_course.logging_config import configure_logging
from eb_course.routers.health import router as health_router
from eb_course.routers.pages import router as pages_router
from eb_course.routers.signup import router as signup_router
from eb_course.routers.worker import router as worker_router
from eb_course.settings import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="Elastic Beanstalk Course Apps",
        summary="Sample applications deployed throughout the course",
        version=settings.app_version,
        description=dedent(
            """\
        | Module | Endpoints |
        | --- | --- |
        | 1. Introduction | `GET /`, `GET /api/info` |
        | 2. Signup form | `POST /signup`, `GET /signup/{email}` |
        | 3. Containers | `GET /hello` |
        | 4. Worker environments | `POST /worker`, `POST /scheduled-task`, `GET /health` |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.state.settings = settings
    app.state.aws = AWSClients(settings)
    logger.info(f"Creating app {settings.app_name} in {settings.deployment_mode} mode")

    app.include_router(pages_router, tags=["pages"])
    app.include_router(signup_router, tags=["signup"])
    app.include_router(worker_router, tags=["worker"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=CourseAppError,
        handler=handle_course_app_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
