"""
User listing, login and master-data endpoints
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import literal_column, select, table
from pydantic import ValidationError as PydanticValidationError
from api.dependencies import get_gateway, read_payload
from schemas.api import LoginRequest, LoginResponse
from services.credentials import MINES_USERS
from services.login import ACCESS_REALM, INTRANET_REALM, MINES_ADMIN_REALM, LoginRealm, LoginService
from services.normalizer import SENSITIVE_FIELDS, RowNormalizer
from store import procedures
from store.gateway import StoreGateway
from core.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["Users"])

user_normalizer = RowNormalizer(sensitive_fields=SENSITIVE_FIELDS | set(MINES_USERS.digest_aliases))
master_normalizer = RowNormalizer()


@router.get("/")
async def list_users(gateway: StoreGateway = Depends(get_gateway)):
    """All mines users, without credential digests"""
    users = table(MINES_USERS.name, schema=gateway.schema)
    row_set = await gateway.fetch(
        select(literal_column("*")).select_from(users),
        operation=f"{MINES_USERS.name}.list",
    )
    return user_normalizer.normalize(row_set)


async def _login(request: Request, gateway: StoreGateway, realm: LoginRealm) -> LoginResponse:
    payload = await read_payload(request)
    try:
        body = LoginRequest.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("userid and password are required!")

    logger.info(f"[{getattr(request.state, 'request_id', '-')}] Login attempt in realm {realm.name}")
    user = await LoginService(gateway, realm).login(body.identity, body.password)
    return LoginResponse(user=user)


@router.post("/adminlogin", response_model=LoginResponse)
async def admin_login(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    """Mines admin login against mines_users"""
    return await _login(request, gateway, MINES_ADMIN_REALM)


@router.post("/intranetlogin", response_model=LoginResponse)
async def intranet_login(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    """Intranet login against intranet_login"""
    return await _login(request, gateway, INTRANET_REALM)


@router.post("/accesslogin", response_model=LoginResponse)
async def access_login(request: Request, gateway: StoreGateway = Depends(get_gateway)):
    """Access-table login against user_access"""
    return await _login(request, gateway, ACCESS_REALM)


@router.get("/showLocation")
async def show_location(gateway: StoreGateway = Depends(get_gateway)):
    """All mine locations"""
    row_set = await gateway.call(procedures.LOCATION_SHOW)
    return master_normalizer.normalize(row_set)


@router.get("/showEquipment")
async def show_equipment(gateway: StoreGateway = Depends(get_gateway)):
    """Equipment master with current status"""
    row_set = await gateway.call(procedures.EQUIPMENT_SHOW)
    return master_normalizer.normalize(row_set)
