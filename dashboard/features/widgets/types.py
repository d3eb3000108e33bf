from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from dashboard.features.gateway import AgentConfig, AgentType, Collection

PanelKind = Literal["cors", "network", "server", "request_setup"]

ACCEPTED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt", ".md")

DEFAULT_AGENT_CONFIG = AgentConfig(
    system_prompt=(
        "You are a helpful assistant. Provide accurate and concise information "
        "based on the documents provided."
    ),
    voice="alloy",
    model="gpt-4o-mini",
    agent_name="Assistant",
)


class PanelSection(BaseModel):
    title: str
    body: str


class ErrorPanel(BaseModel):
    kind: PanelKind
    title: str
    headline: str
    help: list[str] = Field(default_factory=list)
    sections: list[PanelSection] = Field(default_factory=list)
    full_text: str


class WidgetResult(BaseModel):
    success: bool
    message: str
    error: ErrorPanel | None = None
    data: dict[str, Any] | None = None


class StartAgentForm(BaseModel):
    model_config = ConfigDict(extra="forbid")

    collection_name: str | None = None
    phone_number: str | None = None
    agent_type: AgentType = "voice"


class AgentControlState(BaseModel):
    collections: list[Collection]
    agent_running: bool


class CollectionsListState(BaseModel):
    collections: list[Collection]
    error: str | None = None
