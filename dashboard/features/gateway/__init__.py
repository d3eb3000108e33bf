from .clients import MOCK_MODE_REJECTION, build_service_client
from .diagnostics import CORS_MARKER, diagnostic_sections, format_diagnostic, headline
from .errors import (
    CorsAssessment,
    EnvironmentSnapshot,
    GatewayError,
    NetworkError,
    RequestContext,
    RequestSetupError,
    ServerError,
    assess_cors,
)
from .failures import classify_failure
from .mock import MOCK_COLLECTIONS, MockAgentStore
from .payloads import build_start_agent_payload, build_upload_form
from .service import DashboardGateway, is_agent_running
from .types import (
    AgentConfig,
    AgentDescriptor,
    AgentResponse,
    AgentsListResponse,
    AgentType,
    Collection,
    CollectionsResponse,
    ConfigResponse,
    DocumentUploadResponse,
    GatewayConfig,
    StartAgentRequest,
    UploadPart,
)

__all__ = [
    "AgentConfig",
    "AgentDescriptor",
    "AgentResponse",
    "AgentType",
    "AgentsListResponse",
    "CORS_MARKER",
    "Collection",
    "CollectionsResponse",
    "ConfigResponse",
    "CorsAssessment",
    "DashboardGateway",
    "DocumentUploadResponse",
    "EnvironmentSnapshot",
    "GatewayConfig",
    "GatewayError",
    "MOCK_COLLECTIONS",
    "MOCK_MODE_REJECTION",
    "MockAgentStore",
    "NetworkError",
    "RequestContext",
    "RequestSetupError",
    "ServerError",
    "StartAgentRequest",
    "UploadPart",
    "assess_cors",
    "build_service_client",
    "build_start_agent_payload",
    "build_upload_form",
    "classify_failure",
    "diagnostic_sections",
    "format_diagnostic",
    "headline",
    "is_agent_running",
]
