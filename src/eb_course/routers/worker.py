"""
Endpoints called by the worker environment's queue daemon.

Any non-200 response tells the daemon the message failed: it is retried after
the visibility timeout and eventually moved to the dead-letter queue. Messages
that can never succeed (malformed, unknown type) are answered accordingly.
"""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from eb_course.dependencies import get_worker_context
from eb_course.errors import InvalidMessageError
from eb_course.schemas import ScheduledTaskResponse, WorkerMessageResponse
from eb_course.worker.context import WorkerContext
from eb_course.worker.messages import dispatch_message, validate_message
from eb_course.worker.tasks import run_task

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/worker",
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "The message is not a JSON object with a `type`."},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": WorkerMessageResponse},
    },
)
async def process_message(
    request: Request,
    context: WorkerContext = Depends(get_worker_context),
    message_id: Optional[str] = Header(None, alias="X-Aws-Sqsd-Msgid"),
    receive_count: Optional[str] = Header(None, alias="X-Aws-Sqsd-Receive-Count"),
    queue_name: Optional[str] = Header(None, alias="X-Aws-Sqsd-Queue"),
) -> WorkerMessageResponse:
    """Process one queue message."""
    raw_body = await request.body()
    try:
        message = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidMessageError(f"Message body is not valid JSON: {e}") from e

    message_type = validate_message(message)
    logger.info(
        f"Received message type={message_type} id={message_id} "
        f"queue={queue_name} receive_count={receive_count}"
    )

    try:
        result = await run_in_threadpool(dispatch_message, message, context)
    except InvalidMessageError:
        raise
    except Exception as e:
        logger.exception(f"Error processing message {message_id} of type {message_type}")
        await run_in_threadpool(
            context.metrics.try_put_metric, "MessagesFailed", 1, dimensions={"MessageType": message_type}
        )
        body = WorkerMessageResponse(status="error", type=message_type, message_id=message_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(exclude_none=True),
        )

    if result is None:
        logger.warning(f"Ignoring message {message_id} with unknown type: {message_type}")
        return WorkerMessageResponse(status="ignored", type=message_type, message_id=message_id)

    await run_in_threadpool(
        context.metrics.try_put_metric, "MessagesProcessed", 1, dimensions={"MessageType": message_type}
    )
    return WorkerMessageResponse(status="processed", type=message_type, message_id=message_id, result=result)


@router.post(
    "/scheduled-task",
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "No task name was given."},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ScheduledTaskResponse},
    },
)
async def process_scheduled_task(
    context: WorkerContext = Depends(get_worker_context),
    task_header: Optional[str] = Header(None, alias="X-Aws-Sqsd-Taskname"),
    scheduled_at: Optional[str] = Header(None, alias="X-Aws-Sqsd-Scheduled-At"),
    task_query: Optional[str] = Query(None, alias="task"),
) -> ScheduledTaskResponse:
    """Run the periodic task named by the worker daemon."""
    task_name = (task_header or task_query or "").strip()
    if not task_name:
        raise InvalidMessageError("No task name given in X-Aws-Sqsd-Taskname or ?task=")

    logger.info(f"Running scheduled task {task_name} (scheduled at {scheduled_at})")

    try:
        result = await run_in_threadpool(run_task, task_name, context)
    except Exception as e:
        logger.exception(f"Scheduled task {task_name} failed")
        body = ScheduledTaskResponse(status="error", task=task_name, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(exclude_none=True),
        )

    if result is None:
        logger.warning(f"Ignoring unknown scheduled task: {task_name}")
        return ScheduledTaskResponse(status="ignored", task=task_name)

    return ScheduledTaskResponse(status="completed", task=task_name, result=result)
