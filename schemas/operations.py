"""
Pydantic request schemas for the operational write endpoints.

Key fields are required; everything else is optional. Form posts send
every value as a string, so blank strings are treated as missing.
"""

from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date as Date


class WriteRequest(BaseModel):
    """
    Base for every write body.

    userId is taken from the body as-is; nothing authenticates it.
    """
    userId: str = Field(..., min_length=1, max_length=50)

    @validator("*", pre=True)
    def blank_to_none(cls, v):
        """Strip strings and treat blanks as missing"""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    class Config:
        coerce_numbers_to_str = True
        extra = "ignore"


# ============================================================================
# Mines operations
# ============================================================================

class DailyExcavationRequest(WriteRequest):
    Prod_date: Date
    Shift: str = Field(..., max_length=10)
    Loc_id: str = Field(..., max_length=50)
    Face_Desc: str = Field(..., max_length=200)

    OB_QTY_Cum: Optional[float] = Field(None, ge=0)
    ORE_QTY: Optional[float] = Field(None, ge=0)
    HG_QTY: Optional[float] = Field(None, ge=0)
    MG_QTY: Optional[float] = Field(None, ge=0)
    LG_QTY: Optional[float] = Field(None, ge=0)


class GeologicalSampleRequest(WriteRequest):
    Sample_date: Date
    Shift: str = Field(..., max_length=10)
    Loc_id: str = Field(..., max_length=50)
    Sample_no: str = Field(..., max_length=50)

    Fe_pct: Optional[float] = Field(None, ge=0, le=100)
    SiO2_pct: Optional[float] = Field(None, ge=0, le=100)
    Al2O3_pct: Optional[float] = Field(None, ge=0, le=100)
    Mn_pct: Optional[float] = Field(None, ge=0, le=100)
    Moisture_pct: Optional[float] = Field(None, ge=0, le=100)
    Remarks: Optional[str] = None


class ProductionDispatchRequest(WriteRequest):
    Prod_date: Date
    Shift: str = Field(..., max_length=10)
    Loc_id: str = Field(..., max_length=50)
    Destination: str = Field(..., max_length=100)
    Material_type: str = Field(..., max_length=50)

    Trips: Optional[int] = Field(None, ge=0)
    Qty_MT: Optional[float] = Field(None, ge=0)


class EquipmentEngagementRequest(WriteRequest):
    Eng_date: Date
    Shift: str = Field(..., max_length=10)
    Equipment_id: str = Field(..., max_length=50)

    Loc_id: Optional[str] = Field(None, max_length=50)
    Working_hrs: Optional[float] = Field(None, ge=0, le=24)
    Idle_hrs: Optional[float] = Field(None, ge=0, le=24)
    Breakdown_hrs: Optional[float] = Field(None, ge=0, le=24)
    Status: Optional[str] = Field(None, max_length=30)
    Remarks: Optional[str] = None


class FuelIssueRequest(WriteRequest):
    Issue_date: Date
    Shift: str = Field(..., max_length=10)
    Equipment_id: str = Field(..., max_length=50)

    Fuel_qty_ltr: Optional[float] = Field(None, ge=0)
    HMR_reading: Optional[float] = Field(None, ge=0)
    Issued_by: Optional[str] = Field(None, max_length=100)


# ============================================================================
# KPI dashboards
# ============================================================================

class KPIDailyActualRequest(WriteRequest):
    date: Date
    plant_id: str = Field(..., max_length=50)
    func_id: str = Field(..., max_length=50)
    kpi_code: str = Field(..., max_length=50)

    uom: Optional[str] = Field(None, max_length=30)
    hr_target: Optional[float] = None
    actual_data: Optional[float] = None


class KPIQueryRequest(BaseModel):
    userId: str = Field(..., min_length=1, max_length=50)

    @validator("userId", pre=True)
    def strip_user_id(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    class Config:
        coerce_numbers_to_str = True
        extra = "ignore"
