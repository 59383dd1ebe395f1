####################################
# --- Request/response schemas --- #
####################################

from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)

MAX_NAME_LENGTH = 100

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Validate an email address and lower-case it so it can be used as a key.

    Raises:
        pydantic.ValidationError: if the address is not valid.
    """
    return _email_adapter.validate_python(value.strip()).lower()


class SignupRequest(BaseModel):
    """Body of `POST /signup`."""
    name: str = Field(
        description="Name entered in the signup form.",
        json_schema_extra={"example": "Ada Lovelace"},
    )
    email: EmailStr = Field(
        description="Email address; used as the record key.",
        json_schema_extra={"example": "ada@example.com"},
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"must be at most {MAX_NAME_LENGTH} characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after")
    @classmethod
    def lower_case_email(cls, v: str) -> str:
        return v.lower()


class SignupRecord(BaseModel):
    """A stored signup item."""
    email: str
    name: str
    timestamp: str = Field(description="UTC ISO-8601 time the signup was stored.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ada@example.com",
                "name": "Ada Lovelace",
                "timestamp": "2026-10-17T09:30:00+00:00",
            }
        }
    )


class WorkerMessageResponse(BaseModel):
    """Response model for `POST /worker`."""
    status: str = Field(description="`processed`, `ignored` or `error`.")
    type: Optional[str] = None
    message_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class ScheduledTaskResponse(BaseModel):
    """Response model for `POST /scheduled-task`."""
    status: str = Field(description="`completed`, `ignored` or `error`.")
    task: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class HealthReport(BaseModel):
    """Response model for `GET /health`."""
    status: str = Field(description="`healthy` when every check passed, otherwise `unhealthy`.")
    checks: Dict[str, bool]
    timestamp: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "checks": {"app": True, "disk": True, "dynamodb": True},
                "timestamp": "2026-10-17T09:30:00+00:00",
            }
        }
    )


class AppInfo(BaseModel):
    """Response model for `GET /api/info`."""
    app_name: str
    version: str
    environment: str
    deployment_mode: str
    region: str
    hostname: str
    timestamp: str
