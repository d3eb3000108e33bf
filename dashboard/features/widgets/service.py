from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import PurePath

from dashboard.features.gateway import (
    AgentConfig,
    Collection,
    DashboardGateway,
    GatewayError,
    ServerError,
    UploadPart,
    is_agent_running,
)

from .error_panel import build_error_panel
from .errors import WidgetValidationError
from .types import (
    ACCEPTED_EXTENSIONS,
    AgentControlState,
    CollectionsListState,
    StartAgentForm,
    WidgetResult,
)

logger = logging.getLogger(__name__)

EMPTY_SELECTION_MESSAGE = "Please select at least one document to upload"
EMPTY_PROMPT_MESSAGE = "System prompt is required"


def _failure_message(error: GatewayError, fallback: str) -> str:
    if isinstance(error, ServerError) and error.detail not in (None, ""):
        detail = error.detail
        return detail if isinstance(detail, str) else json.dumps(detail, indent=2, default=str)
    return error.message or fallback


def _failed(
    error: GatewayError,
    *,
    message: str,
    context: str,
    origin: str | None,
) -> WidgetResult:
    return WidgetResult(
        success=False,
        message=message,
        error=build_error_panel(error, context=context, origin=origin),
    )


def validate_upload_selection(files: Sequence[UploadPart]) -> None:
    if not files:
        raise WidgetValidationError(EMPTY_SELECTION_MESSAGE)
    rejected = [
        part.filename
        for part in files
        if PurePath(part.filename).suffix.lower() not in ACCEPTED_EXTENSIONS
    ]
    if rejected:
        raise WidgetValidationError(
            f"Unsupported file type: {', '.join(rejected)}. "
            "Accepted file types: PDF, DOC, DOCX, TXT, MD"
        )


async def submit_document_upload(
    gateway: DashboardGateway,
    user_id: str,
    files: Sequence[UploadPart],
    collection_name: str | None = None,
    *,
    origin: str | None = None,
) -> WidgetResult:
    try:
        validate_upload_selection(files)
    except WidgetValidationError as exc:
        return WidgetResult(success=False, message=str(exc))

    try:
        result = await gateway.upload_documents(
            user_id,
            list(files),
            (collection_name or "").strip() or None,
        )
    except GatewayError as exc:
        return _failed(
            exc,
            message=_failure_message(exc, "Upload failed"),
            context="Upload Error",
            origin=origin,
        )
    return WidgetResult(success=True, message=result.message, data=result.model_dump())


async def submit_agent_config(
    gateway: DashboardGateway,
    user_id: str,
    config: AgentConfig,
    *,
    origin: str | None = None,
) -> WidgetResult:
    if not config.system_prompt.strip():
        return WidgetResult(success=False, message=EMPTY_PROMPT_MESSAGE)

    try:
        result = await gateway.configure_agent(user_id, config)
    except GatewayError as exc:
        return _failed(
            exc,
            message=_failure_message(exc, "Failed to save configuration"),
            context="Configuration Error",
            origin=origin,
        )
    return WidgetResult(success=True, message=result.message, data=result.model_dump())


async def load_agent_control(gateway: DashboardGateway, user_id: str) -> AgentControlState:
    """Initial state of the start/stop widget.

    A failed lookup still renders the widget, with no collections and the
    agent shown as stopped.
    """
    collections: list[Collection] = []
    agent_running = False
    try:
        collections = (await gateway.list_collections(user_id)).collections
        agents = (await gateway.list_agents()).agents
        agent_running = is_agent_running(agents, user_id)
    except GatewayError:
        logger.warning("Failed to load agent control state for user %r.", user_id, exc_info=True)
    return AgentControlState(collections=collections, agent_running=agent_running)


async def submit_start_agent(
    gateway: DashboardGateway,
    user_id: str,
    form: StartAgentForm,
    *,
    origin: str | None = None,
) -> WidgetResult:
    try:
        result = await gateway.start_agent(
            user_id,
            form.collection_name or None,
            form.phone_number or None,
            form.agent_type,
        )
    except GatewayError as exc:
        return _failed(exc, message="Error starting agent", context="Agent Start Error", origin=origin)

    message = "Agent is already running" if result.already_running else "Agent started successfully"
    return WidgetResult(success=True, message=message, data=result.model_dump())


async def submit_stop_agent(
    gateway: DashboardGateway,
    user_id: str,
    *,
    origin: str | None = None,
) -> WidgetResult:
    try:
        result = await gateway.stop_agent(user_id)
    except GatewayError as exc:
        return _failed(
            exc,
            message=_failure_message(exc, "Failed to stop agent"),
            context="Agent Stop Error",
            origin=origin,
        )
    return WidgetResult(success=True, message="Agent stopped successfully", data=result.model_dump())


async def submit_probe(
    gateway: DashboardGateway,
    user_id: str,
    *,
    origin: str | None = None,
) -> WidgetResult:
    try:
        body = await gateway.probe_start_agent(user_id)
    except GatewayError as exc:
        return _failed(exc, message="API test failed", context="API Test Error", origin=origin)
    return WidgetResult(success=True, message="API test successful", data=body)


async def load_collections_list(gateway: DashboardGateway, user_id: str) -> CollectionsListState:
    if not user_id:
        return CollectionsListState(collections=[])
    try:
        response = await gateway.list_collections(user_id)
    except GatewayError:
        logger.warning("Failed to load collections for user %r.", user_id, exc_info=True)
        return CollectionsListState(collections=[], error="Failed to load collections")
    return CollectionsListState(collections=response.collections)
