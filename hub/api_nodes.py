from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
import httpx
from typing import Optional
from wigle_hub.config import get_settings
from wigle_hub.logs import setup_logger
from wigle_nodes.registry import list_nodes, install_nodes, get_node, builtin_credentials
from wigle_nodes.schema import NodeSpec
from wigle_nodes.runtime import run_node, test_credentials, Context, ExecutionError, NodeOperationError


router = APIRouter(prefix="/api/nodes")


class InstallIn(BaseModel):
    specs: list[dict]


@router.get("")
def api_list_nodes(category: Optional[str] = None):
    return list_nodes(category)


@router.get("/credentials")
def api_list_credentials():
    return builtin_credentials()


@router.post("/install")
def api_install_nodes(body: InstallIn):
    try:
        install_nodes(body.specs)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"ok": True, "count": len(body.specs)}


class RunIn(BaseModel):
    name: str
    version: Optional[str] = None
    params: dict = {}
    inputs: dict = {}
    credential_id: Optional[str] = None


class CredentialTestIn(BaseModel):
    name: str
    version: Optional[str] = None
    credentials: dict = {}


async def default_cred_resolver(provider: Optional[str], credential_id: Optional[str]):
    # Single-tenant: the WiGLE key comes from the environment
    if (provider or "").lower() == "wigle":
        key = get_settings().wigle_api_key
        return {"api_key": key} if key else {}
    return {}


def _load_spec(name: str, version: Optional[str]) -> NodeSpec:
    spec_json = get_node(name, version)
    if not spec_json:
        raise HTTPException(404, f"node {name} not found")
    return NodeSpec(**spec_json)


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=get_settings().http_timeout)


def _context(http: httpx.AsyncClient) -> Context:
    settings = get_settings()
    logger = setup_logger("wigle_nodes", settings.log_file, settings.log_level)
    return Context(http=http, logger=logger, cred_resolver=default_cred_resolver)


@router.post("/run")
async def api_run_node(body: RunIn):
    spec = _load_spec(body.name, body.version)

    async with _http_client() as http:
        try:
            out = await run_node(spec, {**body.params, "credential_id": body.credential_id}, body.inputs, _context(http))
        except NodeOperationError as e:
            raise HTTPException(422, {"message": e.message, "item_index": e.item_index, "status_code": e.status_code})
        except ExecutionError as e:
            raise HTTPException(400, str(e))
        return {"outputs": out}


@router.post("/credentials/test")
async def api_test_credentials(body: CredentialTestIn):
    spec = _load_spec(body.name, body.version)

    async with _http_client() as http:
        try:
            result = await test_credentials(spec, body.credentials, _context(http))
        except ExecutionError as e:
            raise HTTPException(400, str(e))
        return result.model_dump()
