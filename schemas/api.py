"""
Pydantic schemas for API request/response models
"""

from pydantic import AliasChoices, BaseModel, Field, validator
from typing import Any, Dict, List
from datetime import datetime
from models.base import UpsertAction


# ============================================================================
# Login Schemas
# ============================================================================

class LoginRequest(BaseModel):
    """Login body; accepts the legacy field names and the descriptive ones"""
    identity: str = Field(..., validation_alias=AliasChoices("userid", "identity"))
    password: str = Field(..., validation_alias=AliasChoices("password", "plaintextCredential"))

    @validator("identity", pre=True)
    def clean_identity(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if v == "" or v is None:
            return None
        return v

    @validator("password", pre=True)
    def reject_blank_password(cls, v):
        # Passwords are not stripped; only an empty value counts as missing
        if v == "":
            return None
        return v

    class Config:
        coerce_numbers_to_str = True
        extra = "ignore"


class LoginResponse(BaseModel):
    """Profile row with every credential field removed"""
    user: Dict[str, Any]


# ============================================================================
# Write Schemas
# ============================================================================

class WriteResponse(BaseModel):
    """Result of an upsert endpoint"""
    status: str = "success"
    message: str
    action: UpsertAction
    data: List[Any] = Field(default_factory=list)

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "status": "success",
                "message": "Daily Excavation Plan data submitted successfully!",
                "action": "created",
                "data": [{"result": "inserted"}]
            }
        }


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="healthy or unhealthy")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database_connected: bool
    upsert_strategy: str


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Invalid credentials!"
            }
        }
