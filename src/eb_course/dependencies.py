"""FastAPI dependencies that pull shared services off ``app.state``."""
from fastapi import Request

from eb_course.aws.signups import SignupStore
from eb_course.settings import Settings
from eb_course.worker.context import WorkerContext


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_worker_context(request: Request) -> WorkerContext:
    """Worker context built once per app from its AWS clients."""
    context = getattr(request.app.state, "worker_context", None)
    if context is None:
        context = WorkerContext.from_clients(request.app.state.aws)
        request.app.state.worker_context = context
    return context


def get_signup_store(request: Request) -> SignupStore:
    return get_worker_context(request).signups
