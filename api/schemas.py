"""
Pydantic schemas for API request/response models.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None


class IntakeRequest(BaseModel):
    """Client -> Server: the selected mode and the latest intake snapshot."""
    mode: str = Field(description="Intake mode tag, e.g. divorce_with_children")
    snapshot: dict[str, Any] = Field(default_factory=dict, description="Nested intake data as last saved")


class ModeInfo(BaseModel):
    mode: str
    first_step: str
    steps: list[str]
