"""
Catalog of stored procedures exposed by the operations database.

Every procedure has a fixed positional signature. The parameter names are
the request field names, so a validated payload can be bound directly.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple


class StoredProcedure:
    """A named stored procedure with a fixed positional arity"""

    def __init__(self, name: str, params: Sequence[str] = (), schema: Optional[str] = None):
        self.name = name
        self.params: Tuple[str, ...] = tuple(params)
        self.schema = schema

    @property
    def arity(self) -> int:
        return len(self.params)

    def qualified_name(self, default_schema: Optional[str] = None) -> str:
        schema = self.schema or default_schema
        return f"{schema}.{self.name}" if schema else self.name

    def bind(self, values: Mapping[str, Any]) -> List[Any]:
        """Order a payload mapping into the positional parameter list"""
        return [values.get(p) for p in self.params]

    def __repr__(self):
        return f"StoredProcedure({self.name}/{self.arity})"


# ============================================================================
# Users & masters
# ============================================================================

ADMIN_USER_GET = StoredProcedure("SP_MINES_ADMIN_USER_GET", ["userid", "password_hash"])
LOCATION_SHOW = StoredProcedure("SP_MINES_LOCATION_SHOW")
EQUIPMENT_SHOW = StoredProcedure("SP_MINES_EQUIPMENT_SHOW")


# ============================================================================
# Daily excavation plan
# ============================================================================

_EXCAVATION_PARAMS = [
    "Prod_date", "Shift", "Loc_id", "Face_Desc",
    "OB_QTY_Cum", "ORE_QTY", "HG_QTY", "MG_QTY", "LG_QTY",
    "userId",
]

EXCAVATION_PLAN_INSERT = StoredProcedure("SP_MINES_DAILY_EXCAVATION_PLAN_INSERT", _EXCAVATION_PARAMS)
EXCAVATION_PLAN_UPDATE = StoredProcedure("SP_MINES_DAILY_EXCAVATION_PLAN_UPDATE", _EXCAVATION_PARAMS)
EXCAVATION_PLAN_SHOW = StoredProcedure("SP_MINES_DAILY_EXCAVATION_PLAN_SHOW")


# ============================================================================
# Geological sampling
# ============================================================================

_GEOLOGICAL_SAMPLE_PARAMS = [
    "Sample_date", "Shift", "Loc_id", "Sample_no",
    "Fe_pct", "SiO2_pct", "Al2O3_pct", "Mn_pct", "Moisture_pct", "Remarks",
    "userId",
]

GEOLOGICAL_SAMPLE_INSERT = StoredProcedure("SP_MINES_GEOLOGICAL_SAMPLE_INSERT", _GEOLOGICAL_SAMPLE_PARAMS)
GEOLOGICAL_SAMPLE_UPDATE = StoredProcedure("SP_MINES_GEOLOGICAL_SAMPLE_UPDATE", _GEOLOGICAL_SAMPLE_PARAMS)
GEOLOGICAL_SAMPLE_SHOW = StoredProcedure("SP_MINES_GEOLOGICAL_SAMPLE_SHOW")


# ============================================================================
# Production / dispatch
# ============================================================================

_PRODUCTION_DISPATCH_PARAMS = [
    "Prod_date", "Shift", "Loc_id", "Destination", "Material_type",
    "Trips", "Qty_MT",
    "userId",
]

PRODUCTION_DISPATCH_INSERT = StoredProcedure("SP_MINES_PRODUCTION_DISPATCH_INSERT", _PRODUCTION_DISPATCH_PARAMS)
PRODUCTION_DISPATCH_UPDATE = StoredProcedure("SP_MINES_PRODUCTION_DISPATCH_UPDATE", _PRODUCTION_DISPATCH_PARAMS)
PRODUCTION_DISPATCH_SHOW = StoredProcedure("SP_MINES_PRODUCTION_DISPATCH_SHOW")


# ============================================================================
# Equipment engagement / status
# ============================================================================

_EQUIPMENT_ENGAGEMENT_PARAMS = [
    "Eng_date", "Shift", "Equipment_id",
    "Loc_id", "Working_hrs", "Idle_hrs", "Breakdown_hrs", "Status", "Remarks",
    "userId",
]

EQUIPMENT_ENGAGEMENT_INSERT = StoredProcedure("SP_MINES_EQUIPMENT_ENGAGEMENT_INSERT", _EQUIPMENT_ENGAGEMENT_PARAMS)
EQUIPMENT_ENGAGEMENT_UPDATE = StoredProcedure("SP_MINES_EQUIPMENT_ENGAGEMENT_UPDATE", _EQUIPMENT_ENGAGEMENT_PARAMS)
EQUIPMENT_ENGAGEMENT_SHOW = StoredProcedure("SP_MINES_EQUIPMENT_ENGAGEMENT_SHOW")


# ============================================================================
# Fuel issuance
# ============================================================================

_FUEL_ISSUE_PARAMS = [
    "Issue_date", "Shift", "Equipment_id",
    "Fuel_qty_ltr", "HMR_reading", "Issued_by",
    "userId",
]

FUEL_ISSUE_INSERT = StoredProcedure("SP_MINES_FUEL_ISSUE_INSERT", _FUEL_ISSUE_PARAMS)
FUEL_ISSUE_UPDATE = StoredProcedure("SP_MINES_FUEL_ISSUE_UPDATE", _FUEL_ISSUE_PARAMS)
FUEL_ISSUE_SHOW = StoredProcedure("SP_MINES_FUEL_ISSUE_SHOW")


# ============================================================================
# KPI dashboards (HR, Finance, Environment share one table)
# ============================================================================

# Performs its own insert-or-update on (date, plant_id, func_id, kpi_code)
KPI_DAILY_ACTUAL_INSERT = StoredProcedure(
    "SP_KPI_DAILY_ACTUAL_INSERT",
    ["date", "plant_id", "func_id", "kpi_code", "uom", "hr_target", "actual_data", "userId"],
)
KPI_DAILY_ACTUAL_SHOW = StoredProcedure("SP_KPI_DAILY_ACTUAL_SHOW", ["userId"])
