"""Inquiry API request/response schemas"""

from datetime import datetime

from pydantic import BaseModel, Field


class InquiryRequest(BaseModel):
    """A document request or question for the data room owner"""
    text: str = Field(..., min_length=1, max_length=10000, description="Free-text inquiry")


class InquiryResponse(BaseModel):
    text: str
    created_at: datetime
