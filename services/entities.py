"""
Catalog of writable entities.

An EntitySpec ties together everything a write endpoint needs: the request
schema, the natural key, the lookup table for the existence check, the
insert / update / show procedures, and the ORM model for the atomic path.
"""

from typing import Optional, Tuple, Type
from pydantic import BaseModel
from models.base import Base
from models.equipment import EquipmentEngagement, FuelIssue
from models.excavation import DailyExcavationPlan
from models.geology import GeologicalSample
from models.kpi import KPIDailyActual
from models.production import ProductionDispatch
from schemas.operations import (
    DailyExcavationRequest,
    EquipmentEngagementRequest,
    FuelIssueRequest,
    GeologicalSampleRequest,
    KPIDailyActualRequest,
    ProductionDispatchRequest,
)
from store import procedures
from store.procedures import StoredProcedure


class EntitySpec:
    """
    Attributes:
        name: Short entity name used in logs
        label: Human name used in response messages
        request_schema: Pydantic model validating the request body
        key_fields: Natural key, in procedure parameter order
        insert_procedure: Called when no row matches the key
        update_procedure: Called when a row matches; None means
            insert_procedure performs its own insert-or-update
        show_procedure: Read-only listing procedure
        model: ORM model with a unique index on key_fields
        date_fields: Fields reformatted to YYYY-MM-DD on output
    """

    def __init__(
        self,
        name: str,
        label: str,
        request_schema: Type[BaseModel],
        key_fields: Tuple[str, ...],
        insert_procedure: StoredProcedure,
        model: Type[Base],
        update_procedure: Optional[StoredProcedure] = None,
        show_procedure: Optional[StoredProcedure] = None,
        date_fields: Tuple[str, ...] = (),
    ):
        self.name = name
        self.label = label
        self.request_schema = request_schema
        self.key_fields = tuple(key_fields)
        self.insert_procedure = insert_procedure
        self.update_procedure = update_procedure
        self.show_procedure = show_procedure
        self.model = model
        self.date_fields = tuple(date_fields)

        missing = [f for f in self.key_fields if f not in insert_procedure.params]
        if missing:
            raise ValueError(f"{name}: key fields {missing} are not parameters of {insert_procedure.name}")

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    @property
    def combined_write(self) -> bool:
        return self.update_procedure is None

    def __repr__(self):
        return f"EntitySpec({self.name})"


DAILY_EXCAVATION = EntitySpec(
    name="daily_excavation",
    label="Daily Excavation Plan",
    request_schema=DailyExcavationRequest,
    key_fields=("Prod_date", "Shift", "Loc_id", "Face_Desc"),
    insert_procedure=procedures.EXCAVATION_PLAN_INSERT,
    update_procedure=procedures.EXCAVATION_PLAN_UPDATE,
    show_procedure=procedures.EXCAVATION_PLAN_SHOW,
    model=DailyExcavationPlan,
    date_fields=("Prod_date",),
)

GEOLOGICAL_SAMPLE = EntitySpec(
    name="geological_sample",
    label="Geological Sample",
    request_schema=GeologicalSampleRequest,
    key_fields=("Sample_date", "Shift", "Loc_id", "Sample_no"),
    insert_procedure=procedures.GEOLOGICAL_SAMPLE_INSERT,
    update_procedure=procedures.GEOLOGICAL_SAMPLE_UPDATE,
    show_procedure=procedures.GEOLOGICAL_SAMPLE_SHOW,
    model=GeologicalSample,
    date_fields=("Sample_date",),
)

PRODUCTION_DISPATCH = EntitySpec(
    name="production_dispatch",
    label="Production Dispatch",
    request_schema=ProductionDispatchRequest,
    key_fields=("Prod_date", "Shift", "Loc_id", "Destination", "Material_type"),
    insert_procedure=procedures.PRODUCTION_DISPATCH_INSERT,
    update_procedure=procedures.PRODUCTION_DISPATCH_UPDATE,
    show_procedure=procedures.PRODUCTION_DISPATCH_SHOW,
    model=ProductionDispatch,
    date_fields=("Prod_date",),
)

EQUIPMENT_ENGAGEMENT = EntitySpec(
    name="equipment_engagement",
    label="Equipment Engagement",
    request_schema=EquipmentEngagementRequest,
    key_fields=("Eng_date", "Shift", "Equipment_id"),
    insert_procedure=procedures.EQUIPMENT_ENGAGEMENT_INSERT,
    update_procedure=procedures.EQUIPMENT_ENGAGEMENT_UPDATE,
    show_procedure=procedures.EQUIPMENT_ENGAGEMENT_SHOW,
    model=EquipmentEngagement,
    date_fields=("Eng_date",),
)

FUEL_ISSUE = EntitySpec(
    name="fuel_issue",
    label="Fuel Issue",
    request_schema=FuelIssueRequest,
    key_fields=("Issue_date", "Shift", "Equipment_id"),
    insert_procedure=procedures.FUEL_ISSUE_INSERT,
    update_procedure=procedures.FUEL_ISSUE_UPDATE,
    show_procedure=procedures.FUEL_ISSUE_SHOW,
    model=FuelIssue,
    date_fields=("Issue_date",),
)

KPI_DAILY_ACTUAL = EntitySpec(
    name="kpi_daily_actual",
    label="KPI",
    request_schema=KPIDailyActualRequest,
    key_fields=("date", "plant_id", "func_id", "kpi_code"),
    insert_procedure=procedures.KPI_DAILY_ACTUAL_INSERT,
    model=KPIDailyActual,
    date_fields=("date",),
)
