"""
Writing Submissions Backend — Pydantic Response Schemas
========================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI serializes route return values through these models and
       generates the OpenAPI documentation from them.

Serialization:
    Python attributes are snake_case; the wire format is camelCase
    (createdAt, promptText, ...) to match the web client. Route responses are
    serialized by alias, which FastAPI does by default.

    The submission projection is explicit: only the eight fields below exist
    on SubmissionView, so internal columns such as user_id cannot leak.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SubmissionView(BaseModel):
    """
    What:  Client-facing projection of a writing submission.
    Who:   Items of GET /api/writing/submissions and body of GET /api/writing/{id}.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Opaque submission identifier")
    created_at: datetime = Field(description="When the submission was stored (ISO 8601)")
    difficulty: str = Field(description="Difficulty label, e.g. B1_BASIC")
    topic: Optional[str] = Field(default=None, description="Subject of the writing prompt")
    prompt_text: str = Field(description="Prompt shown to the user")
    user_text: str = Field(description="Text written by the user")
    word_count: int = Field(description="Number of words in userText")
    evaluation: Optional[Any] = Field(
        default=None,
        description="Evaluation result; structure owned by the evaluation subsystem",
    )


class SubmissionListResponse(BaseModel):
    """
    What:  Wrapper for the submission history.
    Who:   Returned by GET /api/writing/submissions.

    The list is complete and newest first. An empty list is a normal result.
    """
    submissions: List[SubmissionView] = Field(description="Submissions, newest first")


class SubmissionDetailResponse(BaseModel):
    """Returned by GET /api/writing/{id}."""
    submission: SubmissionView


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.

    Example:
        {"error": "Failed to fetch submissions"}

    Correlation happens through the X-Request-ID response header, so the
    body carries nothing beyond the client-safe message.
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
