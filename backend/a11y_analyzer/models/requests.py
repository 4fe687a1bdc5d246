"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional


class AnalyzeRequest(BaseModel):
    """Request to analyze embedded scan data."""

    prompt: Optional[str] = Field(
        default=None,
        description="Analysis prompt carrying 'Accessibility scan data for <url>:' and a violations JSON array",
    )


class CreateReportRequest(BaseModel):
    """Request a full scan + analysis report for one page."""

    url: str = Field(
        ...,
        max_length=2048,
        description="Page URL (must start with http:// or https://)",
        examples=["https://example.com"],
    )
