"""
Response envelopes shared by the gateway and the subtitle service.
"""

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Plain acknowledgement returned by service endpoints."""

    success: bool = Field(default=True, description="Whether the operation was successful")
    message: str = Field(default="OK", description="Response message")


class HealthResponse(BaseModel):
    """Gateway health report."""

    status: str = Field(..., description="healthy or degraded")
    services: dict[str, str] = Field(default_factory=dict, description="Component status by name")
