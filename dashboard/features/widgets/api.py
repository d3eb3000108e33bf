from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from dashboard.features.gateway import AgentConfig, DashboardGateway, UploadPart

from .service import (
    load_agent_control,
    load_collections_list,
    submit_agent_config,
    submit_document_upload,
    submit_probe,
    submit_start_agent,
    submit_stop_agent,
)
from .types import (
    DEFAULT_AGENT_CONFIG,
    AgentControlState,
    CollectionsListState,
    StartAgentForm,
    WidgetResult,
)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_gateway(request: Request) -> DashboardGateway:
    return request.app.state.gateway


def _origin(request: Request) -> str:
    return request.headers.get("origin") or str(request.base_url).rstrip("/")


async def _read_upload(file: UploadFile) -> UploadPart:
    content = await file.read()
    return UploadPart(
        filename=file.filename or "",
        content=content,
        content_type=file.content_type or "application/octet-stream",
    )


@router.post("/users/{user_id}/documents", response_model=WidgetResult)
async def upload_documents_route(
    user_id: str,
    request: Request,
    files: list[UploadFile] | None = File(default=None),
    collection_name: str | None = Form(default=None),
    gateway: DashboardGateway = Depends(get_gateway),
) -> WidgetResult:
    # An empty file input still posts one nameless part.
    parts = [await _read_upload(file) for file in files or [] if file.filename]
    return await submit_document_upload(
        gateway,
        user_id,
        parts,
        collection_name,
        origin=_origin(request),
    )


@router.get("/users/{user_id}/config/defaults", response_model=AgentConfig)
async def get_agent_config_defaults(user_id: str) -> AgentConfig:
    return DEFAULT_AGENT_CONFIG


@router.post("/users/{user_id}/config", response_model=WidgetResult)
async def configure_agent_route(
    user_id: str,
    payload: AgentConfig,
    request: Request,
    gateway: DashboardGateway = Depends(get_gateway),
) -> WidgetResult:
    return await submit_agent_config(gateway, user_id, payload, origin=_origin(request))


@router.get("/users/{user_id}/collections", response_model=CollectionsListState)
async def list_collections_route(
    user_id: str,
    gateway: DashboardGateway = Depends(get_gateway),
) -> CollectionsListState:
    return await load_collections_list(gateway, user_id)


@router.get("/users/{user_id}/agent", response_model=AgentControlState)
async def get_agent_control_route(
    user_id: str,
    gateway: DashboardGateway = Depends(get_gateway),
) -> AgentControlState:
    return await load_agent_control(gateway, user_id)


@router.post("/users/{user_id}/agent/start", response_model=WidgetResult)
async def start_agent_route(
    user_id: str,
    payload: StartAgentForm,
    request: Request,
    gateway: DashboardGateway = Depends(get_gateway),
) -> WidgetResult:
    return await submit_start_agent(gateway, user_id, payload, origin=_origin(request))


@router.post("/users/{user_id}/agent/stop", response_model=WidgetResult)
async def stop_agent_route(
    user_id: str,
    request: Request,
    gateway: DashboardGateway = Depends(get_gateway),
) -> WidgetResult:
    return await submit_stop_agent(gateway, user_id, origin=_origin(request))


@router.post("/users/{user_id}/agent/probe", response_model=WidgetResult)
async def probe_agent_route(
    user_id: str,
    request: Request,
    gateway: DashboardGateway = Depends(get_gateway),
) -> WidgetResult:
    return await submit_probe(gateway, user_id, origin=_origin(request))
