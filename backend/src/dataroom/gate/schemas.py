"""Gate API request/response schemas"""

from typing import Optional

from pydantic import BaseModel, Field

from ..documents.schemas import CatalogResponse
from ..domain.gate.access_gate import GateState


class UnlockRequest(BaseModel):
    """Shared data room credentials"""
    username: str = Field(..., min_length=1, description="Shared username")
    password: str = Field(..., min_length=1, description="Shared password")


class UnlockResponse(BaseModel):
    """Session token issued on unlock, plus the first catalog fetch"""
    access_token: str = Field(..., description="Bearer token for this session")
    token_type: str = Field("bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    state: GateState = Field(..., description="Gate state (always UNLOCKED)")
    catalog: CatalogResponse = Field(..., description="Catalog after the initial listing")
    catalog_error: Optional[str] = Field(
        None, description="Why the initial listing failed, if it did; refresh manually"
    )


class GateStateResponse(BaseModel):
    state: GateState
