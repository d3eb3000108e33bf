from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from .clients import build_service_client
from .diagnostics import format_diagnostic
from .errors import EnvironmentSnapshot, GatewayError, RequestContext, ServerError
from .failures import classify_failure, response_body
from .mock import MockAgentStore, mock_collections
from .payloads import (
    build_config_payload,
    build_probe_payload,
    build_start_agent_payload,
    build_upload_form,
    describe_upload,
)
from .types import (
    AgentConfig,
    AgentDescriptor,
    AgentResponse,
    AgentsListResponse,
    AgentType,
    CollectionsResponse,
    ConfigResponse,
    DocumentUploadResponse,
    GatewayConfig,
    UploadPart,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Anything else raised while sending is a bug and propagates unchanged.
_CLASSIFIED_ERRORS = (httpx.HTTPError, httpx.InvalidURL, GatewayError, TypeError, ValueError)


def is_agent_running(agents: Iterable[AgentDescriptor], user_id: str) -> bool:
    return any(agent.user_id == user_id for agent in agents)


def _endpoint(client: httpx.AsyncClient, method: str, path: str) -> str:
    try:
        return str(client.build_request(method, path).url)
    except httpx.InvalidURL:
        return str(client.base_url).rstrip("/") + path


class DashboardGateway:
    """Single entry point from the dashboard to the two backend services.

    Every operation does one round trip and re-raises failures as a
    ``GatewayError`` subclass. With ``use_mock_data`` enabled nothing is
    sent; results are fabricated and started agents live in ``mock_store``.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        document_client: httpx.AsyncClient | None = None,
        agent_client: httpx.AsyncClient | None = None,
        mock_store: MockAgentStore | None = None,
    ) -> None:
        self.config = config
        self.document_client = document_client or build_service_client(
            config.document_api_url,
            mock_mode=config.use_mock_data,
            timeout=config.timeout_seconds,
        )
        self.agent_client = agent_client or build_service_client(
            config.agent_manager_api_url,
            mock_mode=config.use_mock_data,
            timeout=config.timeout_seconds,
        )
        self.mock_store = mock_store if mock_store is not None else MockAgentStore()
        self.environment = EnvironmentSnapshot(
            environment=config.environment,
            document_api_url=config.document_api_url,
            agent_manager_api_url=config.agent_manager_api_url,
            use_mock_data=config.use_mock_data,
        )

    @property
    def mock_mode(self) -> bool:
        return self.config.use_mock_data

    async def __aenter__(self) -> DashboardGateway:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.document_client.aclose()
        await self.agent_client.aclose()

    async def _send(
        self,
        client: httpx.AsyncClient,
        *,
        operation: str,
        method: str,
        path: str,
        payload_echo: Any = None,
        response_model: type[ModelT] | None = None,
        **request_kwargs: Any,
    ) -> Any:
        context = RequestContext(
            operation=operation,
            method=method,
            url=_endpoint(client, method, path),
            payload=payload_echo,
        )
        logger.info(
            "Gateway %s: %s %s payload=%s",
            operation,
            method,
            context.url,
            payload_echo,
        )
        try:
            response = await client.request(method, path, **request_kwargs)
            response.raise_for_status()
        except _CLASSIFIED_ERRORS as exc:
            error = classify_failure(exc, context=context, environment=self.environment)
            self._log_failure(error)
            raise error from exc

        try:
            body = response.json()
            return response_model.model_validate(body) if response_model else body
        except ValueError as exc:
            error = ServerError(
                f"Server returned an unexpected body: {exc}",
                status=response.status_code,
                status_text=response.reason_phrase,
                body=response_body(response),
                context=context,
                environment=self.environment,
            )
            self._log_failure(error)
            raise error from exc

    def _log_failure(self, error: GatewayError) -> None:
        if isinstance(error, ServerError) and error.status == 422:
            logger.error(
                "Validation error details for %s: %s",
                error.context.operation if error.context else "request",
                error.detail if error.detail is not None else "No detail provided",
            )
        logger.warning("%s", format_diagnostic(error))

    async def upload_documents(
        self,
        user_id: str,
        files: Sequence[UploadPart],
        collection_name: str | None = None,
    ) -> DocumentUploadResponse:
        if not files:
            raise ValueError("upload_documents requires at least one file")

        if self.mock_mode:
            return DocumentUploadResponse(
                status="success",
                message="Documents uploaded and processed successfully",
                document_count=len(files),
                index_id=f"{user_id}_index_123",
            )

        multipart, data = build_upload_form(files, collection_name)
        return await self._send(
            self.document_client,
            operation="upload_documents",
            method="POST",
            path=f"/upload/{user_id}",
            payload_echo=describe_upload(files, collection_name),
            files=multipart,
            data=data,
            response_model=DocumentUploadResponse,
        )

    async def configure_agent(self, user_id: str, config: AgentConfig) -> ConfigResponse:
        if self.mock_mode:
            return ConfigResponse(
                status="success",
                message="Agent configuration updated successfully",
            )

        payload = build_config_payload(config)
        return await self._send(
            self.document_client,
            operation="configure_agent",
            method="POST",
            path=f"/config/{user_id}",
            payload_echo=payload,
            json=payload,
            response_model=ConfigResponse,
        )

    async def list_collections(self, user_id: str) -> CollectionsResponse:
        if self.mock_mode:
            return CollectionsResponse(collections=mock_collections())

        return await self._send(
            self.document_client,
            operation="list_collections",
            method="GET",
            path=f"/collections/{user_id}",
            response_model=CollectionsResponse,
        )

    async def start_agent(
        self,
        user_id: str,
        collection_name: str | None = None,
        phone_number: str | None = None,
        agent_type: AgentType = "voice",
    ) -> AgentResponse:
        if self.mock_mode:
            self.mock_store.start(user_id, agent_type)
            return AgentResponse(
                status="success",
                user_id=user_id,
                container_id=f"container_{user_id}_{int(time.time() * 1000)}",
            )

        payload = build_start_agent_payload(
            user_id,
            collection_name=collection_name,
            phone_number=phone_number,
            agent_type=agent_type,
        )
        return await self._send(
            self.agent_client,
            operation="start_agent",
            method="POST",
            path="/start-agent",
            payload_echo=payload,
            json=payload,
            response_model=AgentResponse,
        )

    async def stop_agent(self, user_id: str) -> AgentResponse:
        if self.mock_mode:
            self.mock_store.stop(user_id)
            return AgentResponse(status="success", user_id=user_id)

        return await self._send(
            self.agent_client,
            operation="stop_agent",
            method="POST",
            path=f"/stop-agent/{user_id}",
            response_model=AgentResponse,
        )

    async def list_agents(self) -> AgentsListResponse:
        if self.mock_mode:
            return AgentsListResponse(agents=self.mock_store.list())

        return await self._send(
            self.agent_client,
            operation="list_agents",
            method="GET",
            path="/agents",
            response_model=AgentsListResponse,
        )

    async def probe_start_agent(self, user_id: str) -> dict[str, Any]:
        """Send the smallest payload ``/start-agent`` accepts and return the raw reply."""
        if self.mock_mode:
            return {"status": "success", "user_id": user_id, "probe": True}

        payload = build_probe_payload(user_id)
        body = await self._send(
            self.agent_client,
            operation="probe_start_agent",
            method="POST",
            path="/start-agent",
            payload_echo=payload,
            json=payload,
        )
        return body if isinstance(body, dict) else {"body": body}
