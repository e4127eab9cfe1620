"""
Mines operations endpoints: daily excavation plan, geological sampling,
production/dispatch, equipment engagement and fuel issuance.

Every POST goes through the upsert coordinator; every show* GET returns
the normalized rows of the entity's listing procedure.
"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Request
from api.dependencies import get_gateway, parse_payload, read_payload
from schemas.api import WriteResponse
from services import entities
from services.entities import EntitySpec
from services.normalizer import RowNormalizer
from services.upsert import UpsertCoordinator
from store.gateway import StoreGateway
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["Operations"])


async def submit_entity(
    request: Request,
    gateway: StoreGateway,
    entity: EntitySpec,
    subject: Optional[str] = None
) -> WriteResponse:
    """
    Validate the body, upsert it, and report which branch ran.

    The success message names `subject`, defaulting to "<entity label> data".
    """
    request_id = getattr(request.state, "request_id", "-")
    payload = await read_payload(request)
    body = parse_payload(entity.request_schema, payload)

    outcome = await UpsertCoordinator(gateway).upsert(entity, body.model_dump())

    logger.info(f"[{request_id}] {entity.name} {outcome.action.value} by userId={body.userId}")

    normalizer = RowNormalizer(date_fields=entity.date_fields)
    return WriteResponse(
        message=f"{subject or entity.label + ' data'} submitted successfully!",
        action=outcome.action,
        data=normalizer.normalize(outcome.rows),
    )


async def show_entity(gateway: StoreGateway, entity: EntitySpec) -> List[Dict[str, Any]]:
    row_set = await gateway.call(entity.show_procedure)
    return RowNormalizer(date_fields=entity.date_fields).normalize(row_set)


# ============================================================================
# Daily excavation plan
# ============================================================================

@router.post("/daily-excavation", response_model=WriteResponse)
async def submit_daily_excavation(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, entities.DAILY_EXCAVATION)


@router.get("/showDailyExcavation")
async def show_daily_excavation(gateway: StoreGateway = Depends(get_gateway)):
    return await show_entity(gateway, entities.DAILY_EXCAVATION)


# ============================================================================
# Geological sampling
# ============================================================================

@router.post("/geological-sample", response_model=WriteResponse)
async def submit_geological_sample(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, entities.GEOLOGICAL_SAMPLE)


@router.get("/showGeologicalSample")
async def show_geological_sample(gateway: StoreGateway = Depends(get_gateway)):
    return await show_entity(gateway, entities.GEOLOGICAL_SAMPLE)


# ============================================================================
# Production / dispatch
# ============================================================================

@router.post("/production-dispatch", response_model=WriteResponse)
async def submit_production_dispatch(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, entities.PRODUCTION_DISPATCH)


@router.get("/showProductionDispatch")
async def show_production_dispatch(gateway: StoreGateway = Depends(get_gateway)):
    return await show_entity(gateway, entities.PRODUCTION_DISPATCH)


# ============================================================================
# Equipment engagement / status
# ============================================================================

@router.post("/equipment-engagement", response_model=WriteResponse)
async def submit_equipment_engagement(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, entities.EQUIPMENT_ENGAGEMENT)


@router.get("/showEquipmentEngagement")
async def show_equipment_engagement(gateway: StoreGateway = Depends(get_gateway)):
    return await show_entity(gateway, entities.EQUIPMENT_ENGAGEMENT)


# ============================================================================
# Fuel issuance
# ============================================================================

@router.post("/fuel-issue", response_model=WriteResponse)
async def submit_fuel_issue(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, entities.FUEL_ISSUE)


@router.get("/showFuelIssue")
async def show_fuel_issue(gateway: StoreGateway = Depends(get_gateway)):
    return await show_entity(gateway, entities.FUEL_ISSUE)
