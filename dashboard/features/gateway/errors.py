from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal

ErrorKind = Literal["server", "network", "request_setup"]
CorsAssessment = Literal["not_indicated", "ambiguous", "suspected"]

_CORS_HINTS = ("cors", "cross-origin", "cross origin", "access-control-allow-origin")


@dataclass(frozen=True)
class RequestContext:
    operation: str
    method: str
    url: str
    payload: Any = None


@dataclass(frozen=True)
class EnvironmentSnapshot:
    environment: str
    document_api_url: str
    agent_manager_api_url: str
    use_mock_data: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "environment": self.environment,
            "document_api_url": self.document_api_url,
            "agent_manager_api_url": self.agent_manager_api_url,
            "use_mock_data": self.use_mock_data,
        }


class GatewayError(Exception):
    """Base exception for failed calls to the document or agent-manager service."""

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        *,
        context: RequestContext | None = None,
        environment: EnvironmentSnapshot | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context
        self.environment = environment

    def bind(
        self,
        *,
        context: RequestContext,
        environment: EnvironmentSnapshot | None,
    ) -> GatewayError:
        if self.context is None:
            self.context = context
        if self.environment is None:
            self.environment = environment
        return self


class ServerError(GatewayError):
    kind: ClassVar[ErrorKind] = "server"

    def __init__(
        self,
        message: str,
        *,
        status: int,
        status_text: str = "",
        body: Any = None,
        context: RequestContext | None = None,
        environment: EnvironmentSnapshot | None = None,
    ) -> None:
        super().__init__(message, context=context, environment=environment)
        self.status = status
        self.status_text = status_text
        self.body = body
        self.cors: CorsAssessment = assess_cors(status=status, texts=(message, body_text(body)))

    @property
    def cors_suspected(self) -> bool:
        return self.cors != "not_indicated"

    @property
    def detail(self) -> Any:
        if isinstance(self.body, dict) and "detail" in self.body:
            return self.body["detail"]
        return self.body


class NetworkError(GatewayError):
    kind: ClassVar[ErrorKind] = "network"


class RequestSetupError(GatewayError):
    kind: ClassVar[ErrorKind] = "request_setup"


def _mentions_cors(texts: tuple[str, ...]) -> bool:
    lowered = [text.lower() for text in texts if text]
    return any(hint in text for text in lowered for hint in _CORS_HINTS)


def body_text(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    return str(body)


def assess_cors(*, status: int, texts: tuple[str, ...] = ()) -> CorsAssessment:
    """Guess whether a failed response was a cross-origin policy rejection.

    A 403 on its own is reported as ambiguous because it is just as likely
    to be an authorization failure.
    """
    if status == 0 or _mentions_cors(texts):
        return "suspected"
    if status == 403:
        return "ambiguous"
    return "not_indicated"
