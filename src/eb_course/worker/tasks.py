"""
Periodic tasks.

The worker environment fires these from its ``cron.yaml``: each entry POSTs
to ``/scheduled-task`` with the task name in the ``X-Aws-Sqsd-Taskname``
header. Tasks register themselves by name with :func:`scheduled_task`.
"""
import logging
from datetime import timedelta
from typing import Any, Callable, Dict, Optional

from eb_course.utils.clock import to_iso, utc_now
from eb_course.utils.decorators import log_execution_time
from eb_course.worker.context import WorkerContext

logger = logging.getLogger(__name__)

TaskHandler = Callable[[WorkerContext], Dict[str, Any]]

TASK_HANDLERS: Dict[str, TaskHandler] = {}


def scheduled_task(name: str):
    """Register a periodic task under ``name``."""
    def decorator(func: TaskHandler) -> TaskHandler:
        TASK_HANDLERS[name] = func
        return func
    return decorator


def run_task(name: str, context: WorkerContext) -> Optional[Dict[str, Any]]:
    """Run the task registered as ``name``.

    Returns:
        The task's result, or None when no task has that name.
    """
    handler = TASK_HANDLERS.get(name)
    if handler is None:
        return None
    return handler(context)


@scheduled_task("cleanup")
@log_execution_time
def cleanup_old_signups(context: WorkerContext) -> Dict[str, Any]:
    """Delete signups older than the configured retention period."""
    cutoff = utc_now() - timedelta(days=context.settings.signup_retention_days)
    deleted = context.signups.delete_older_than(cutoff)
    return {"deleted": deleted, "cutoff": to_iso(cutoff)}


@scheduled_task("report")
@log_execution_time
def report_signup_count(context: WorkerContext) -> Dict[str, Any]:
    """Publish the current number of signups as a gauge."""
    total = context.signups.count()
    published = context.metrics.put_metric("SignupCount", total, unit="Count")
    logger.info(f"Signup count: {total}")
    return {"signups": total, "published": published}


@scheduled_task("heartbeat")
def heartbeat(context: WorkerContext) -> Dict[str, Any]:
    return {"timestamp": to_iso()}
