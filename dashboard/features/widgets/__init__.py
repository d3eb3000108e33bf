from .error_panel import build_error_panel
from .errors import WidgetValidationError
from .page import render_dashboard_page
from .service import (
    EMPTY_PROMPT_MESSAGE,
    EMPTY_SELECTION_MESSAGE,
    load_agent_control,
    load_collections_list,
    submit_agent_config,
    submit_document_upload,
    submit_probe,
    submit_start_agent,
    submit_stop_agent,
    validate_upload_selection,
)
from .types import (
    DEFAULT_AGENT_CONFIG,
    AgentControlState,
    CollectionsListState,
    ErrorPanel,
    StartAgentForm,
    WidgetResult,
)

__all__ = [
    "AgentControlState",
    "CollectionsListState",
    "DEFAULT_AGENT_CONFIG",
    "EMPTY_PROMPT_MESSAGE",
    "EMPTY_SELECTION_MESSAGE",
    "ErrorPanel",
    "StartAgentForm",
    "WidgetResult",
    "WidgetValidationError",
    "build_error_panel",
    "load_agent_control",
    "load_collections_list",
    "render_dashboard_page",
    "submit_agent_config",
    "submit_document_upload",
    "submit_probe",
    "submit_start_agent",
    "submit_stop_agent",
    "validate_upload_selection",
]
