"""
KPI dashboard endpoints (HR, Finance, Environment).

The three dashboards share one table and one pair of procedures; they
differ only in the func_id the client sends.
"""

from fastapi import APIRouter, Depends, Request
from api.dependencies import get_gateway, parse_payload, read_payload
from api.routes.operations import submit_entity
from schemas.api import WriteResponse
from schemas.operations import KPIQueryRequest
from services.entities import KPI_DAILY_ACTUAL
from services.normalizer import RowNormalizer
from store import procedures
from store.gateway import StoreGateway
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["KPI"])

kpi_normalizer = RowNormalizer(date_fields=KPI_DAILY_ACTUAL.date_fields)


async def _fetch_kpis(request: Request, gateway: StoreGateway):
    body = parse_payload(KPIQueryRequest, await read_payload(request))
    row_set = await gateway.call(procedures.KPI_DAILY_ACTUAL_SHOW, [body.userId])
    return kpi_normalizer.normalize(row_set)


@router.post("/hr-dashboard", response_model=WriteResponse)
async def submit_hr_dashboard(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, KPI_DAILY_ACTUAL, "HR KPI")


@router.post("/get-kpi")
async def get_hr_kpis(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await _fetch_kpis(request, gateway)


@router.post("/finance-dashboard", response_model=WriteResponse)
async def submit_finance_dashboard(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, KPI_DAILY_ACTUAL, "Finance KPI")


@router.post("/get-kpiFinance")
async def get_finance_kpis(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await _fetch_kpis(request, gateway)


@router.post("/environment-dashboard", response_model=WriteResponse)
async def submit_environment_dashboard(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await submit_entity(request, gateway, KPI_DAILY_ACTUAL, "Environment KPI")


@router.post("/get-kpiEnvironment")
async def get_environment_kpis(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    return await _fetch_kpis(request, gateway)
