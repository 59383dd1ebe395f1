"""
Queue message handlers for the worker environment.

The worker environment's daemon pulls each queue message and POSTs its body
to the app. Every message is a JSON object with a ``type`` field; the rest of
the object is the payload for that type. Handlers are registered by type with
:func:`message_handler` and looked up by :func:`dispatch_message`.
"""
import logging
import math
from typing import Any, Callable, Dict, Optional

import pydantic

from eb_course.aws.metrics import VALID_UNITS
from eb_course.errors import InvalidMessageError, SignupExistsError
from eb_course.schemas import SignupRequest
from eb_course.utils.decorators import log_execution_time
from eb_course.worker.context import WorkerContext

logger = logging.getLogger(__name__)

MessageHandler = Callable[[Dict[str, Any], WorkerContext], Dict[str, Any]]

MESSAGE_HANDLERS: Dict[str, MessageHandler] = {}


def message_handler(message_type: str):
    """Register a handler for one message type."""
    def decorator(func: MessageHandler) -> MessageHandler:
        MESSAGE_HANDLERS[message_type] = func
        return func
    return decorator


def validate_message(message: Any) -> str:
    """Return the message type, or raise if the message cannot be processed at all."""
    if not isinstance(message, dict):
        raise InvalidMessageError("Message body must be a JSON object")
    message_type = message.get("type")
    if not isinstance(message_type, str) or not message_type.strip():
        raise InvalidMessageError("Message is missing a 'type' field")
    return message_type


def dispatch_message(message: Dict[str, Any], context: WorkerContext) -> Optional[Dict[str, Any]]:
    """Run the handler registered for the message's type.

    Returns:
        The handler's result, or None when no handler knows this type.
    """
    message_type = validate_message(message)
    handler = MESSAGE_HANDLERS.get(message_type)
    if handler is None:
        return None
    payload = {key: value for key, value in message.items() if key != "type"}
    return handler(payload, context)


@message_handler("signup")
@log_execution_time
def handle_signup(payload: Dict[str, Any], context: WorkerContext) -> Dict[str, Any]:
    """Store a signup that arrived through the queue instead of the form."""
    try:
        request = SignupRequest(**payload)
    except (pydantic.ValidationError, TypeError) as e:
        raise InvalidMessageError(f"Invalid signup payload: {e}") from e

    try:
        record = context.signups.put_signup(name=request.name, email=request.email)
    except SignupExistsError:
        logger.info(f"Skipping duplicate signup for {request.email}")
        return {"stored": False, "email": request.email, "reason": "duplicate"}

    return {"stored": True, "email": record.email, "timestamp": record.timestamp}


@message_handler("metric")
@log_execution_time
def handle_metric(payload: Dict[str, Any], context: WorkerContext) -> Dict[str, Any]:
    """Publish a custom metric carried by the message."""
    name = payload.get("name")
    value = payload.get("value")
    unit = payload.get("unit", "Count")

    if not isinstance(name, str) or not name:
        raise InvalidMessageError("Metric message needs a 'name'")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMessageError("Metric message needs a numeric 'value'")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    # json.loads accepts NaN/Infinity, which CloudWatch rejects
    if not finite:
        raise InvalidMessageError(f"Metric value must be finite, got {value}")
    if unit not in VALID_UNITS:
        raise InvalidMessageError(f"Invalid metric unit: {unit}")

    published = context.metrics.put_metric(name, value, unit=unit)
    return {"published": published, "name": name, "value": value, "unit": unit}


@message_handler("log")
def handle_log(payload: Dict[str, Any], context: WorkerContext) -> Dict[str, Any]:
    logger.info(f"Worker log message: {payload}")
    return {"logged": True}
