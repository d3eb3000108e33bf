from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from dashboard.core.config import Settings

AgentType = Literal["voice", "web"]
Voice = Literal["alloy", "echo", "fable", "nova", "shimmer"]
AgentModel = Literal["gpt-4o-mini", "gpt-4o"]


@dataclass(frozen=True)
class GatewayConfig:
    document_api_url: str
    agent_manager_api_url: str
    use_mock_data: bool
    timeout_seconds: float | None = None
    environment: str = "development"

    @classmethod
    def from_settings(cls, settings: Settings) -> GatewayConfig:
        return cls(
            document_api_url=settings.document_api_url.rstrip("/"),
            agent_manager_api_url=settings.agent_manager_api_url.rstrip("/"),
            use_mock_data=settings.use_mock_data,
            timeout_seconds=settings.gateway_timeout_seconds,
            environment=settings.environment,
        )


@dataclass(frozen=True)
class UploadPart:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class Collection(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    path: str
    is_default: bool = False


class AgentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    system_prompt: str
    voice: Voice
    model: AgentModel
    agent_name: str


class AgentDescriptor(BaseModel):
    model_config = ConfigDict(extra="allow")

    user_id: str
    agent_type: AgentType
    running_time: float = 0


class StartAgentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str
    collection_name: str | None = None
    phone_number: str | None = None
    agent_type: AgentType = "voice"


class DocumentUploadResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    message: str
    document_count: int | None = None
    index_id: str | None = None


class ConfigResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    message: str


class CollectionsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    collections: list[Collection] = Field(default_factory=list)


class AgentResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    user_id: str
    container_id: str | None = None

    @property
    def already_running(self) -> bool:
        return self.status == "already_running"


class AgentsListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    agents: list[AgentDescriptor] = Field(default_factory=list)
