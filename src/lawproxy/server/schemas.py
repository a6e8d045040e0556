"""
Response schemas for the Law Proxy API.

Successful proxy calls relay the upstream payload untouched, so only the
health and error envelopes are modelled here.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str = Field(..., description="Service status")
    oc: Literal["set", "not set"] = Field(..., description="Whether the OC credential is configured")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """
    Response schema for error responses.

    Never carries the credential value, only whether it is configured.
    """

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    oc_key: Literal["present", "missing"] = Field(..., description="Whether the OC credential is configured")
    reason: Optional[str] = Field(None, description="Failure reason code")
    details: Optional[str] = Field(None, description="Truncated upstream excerpt (at most 200 chars)")
    outbound_address: Optional[str] = Field(None, description="Public address the upstream saw, if known")
    upstream_status: Optional[int] = Field(None, description="Upstream HTTP status, for transport failures")
    attempts: Optional[int] = Field(None, description="Upstream attempts made, for transport failures")
