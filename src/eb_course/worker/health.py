"""Health checks behind `GET /health`.

The load balancer (or the worker daemon) treats anything but 200 as an
unhealthy instance, so a check that raises counts as failed rather than
turning into a 500.
"""
import logging
import shutil
from typing import Callable, Dict, List, Tuple

from eb_course.worker.context import WorkerContext

logger = logging.getLogger(__name__)

HealthCheck = Callable[[WorkerContext], bool]


def check_app(context: WorkerContext) -> bool:
    return True


def check_disk(context: WorkerContext, path: str = "/") -> bool:
    usage = shutil.disk_usage(path)
    free_ratio = usage.free / usage.total if usage.total else 0.0
    return free_ratio >= context.settings.health_min_free_disk_ratio


def check_dynamodb(context: WorkerContext) -> bool:
    return context.signups.table_available()


def enabled_checks(context: WorkerContext) -> List[Tuple[str, HealthCheck]]:
    checks: List[Tuple[str, HealthCheck]] = [
        ("app", check_app),
        ("disk", check_disk),
    ]
    if context.settings.health_check_dynamodb:
        checks.append(("dynamodb", check_dynamodb))
    return checks


def run_health_checks(context: WorkerContext) -> Dict[str, bool]:
    """Run every enabled check and return name -> passed."""
    results: Dict[str, bool] = {}
    for name, check in enabled_checks(context):
        try:
            results[name] = bool(check(context))
        except Exception as e:
            logger.error(f"Health check '{name}' raised: {e}")
            results[name] = False
        if not results[name]:
            logger.warning(f"Health check '{name}' failed")
    return results
