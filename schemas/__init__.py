"""
Pydantic schemas for request validation and response serialization.

Schemas:
    api: Login, write-result, health and error response models
    operations: Request bodies for the operational and KPI write endpoints

Usage:
    from schemas.api import LoginRequest, WriteResponse
    from schemas.operations import DailyExcavationRequest

Example:
    body = DailyExcavationRequest.model_validate({
        "Prod_date": "2024-03-05",
        "Shift": "A",
        "Loc_id": "12",
        "Face_Desc": "North bench",
        "ORE_QTY": "450",
        "userId": "1001",
    })
    assert body.ORE_QTY == 450.0

Validation:
    - Natural-key fields are required
    - Blank form values count as missing
    - Numeric identifiers are coerced to strings
"""

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "WriteResponse",
    "HealthCheckResponse",
    "ErrorResponse",
    "DailyExcavationRequest",
    "GeologicalSampleRequest",
    "ProductionDispatchRequest",
    "EquipmentEngagementRequest",
    "FuelIssueRequest",
    "KPIDailyActualRequest",
    "KPIQueryRequest",
]
