from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .types import AgentConfig, AgentType, StartAgentRequest, UploadPart

UPLOAD_FILES_FIELD = "files"
UPLOAD_COLLECTION_FIELD = "collection_name"


def build_start_agent_payload(
    user_id: str,
    *,
    collection_name: str | None = None,
    phone_number: str | None = None,
    agent_type: AgentType = "voice",
) -> dict[str, Any]:
    """Serialize a start request for ``POST /start-agent``.

    The agent manager rejects ``null`` for its optional fields, so absent
    values are left out of the body entirely:

    ================  ========================  =====================
    field             sent when                 omitted when
    ================  ========================  =====================
    user_id           always (verbatim)         never
    collection_name   non-empty string          ``None`` or ``""``
    phone_number      non-empty string          ``None`` or ``""``
    agent_type        always                    never
    ================  ========================  =====================
    """
    request = StartAgentRequest(
        user_id=user_id,
        collection_name=collection_name or None,
        phone_number=phone_number or None,
        agent_type=agent_type,
    )
    payload: dict[str, Any] = {"user_id": request.user_id}
    if request.collection_name:
        payload["collection_name"] = request.collection_name
    if request.phone_number:
        payload["phone_number"] = request.phone_number
    payload["agent_type"] = request.agent_type
    return payload


def build_probe_payload(user_id: str) -> dict[str, Any]:
    return {"user_id": user_id, "agent_type": "voice"}


def build_config_payload(config: AgentConfig) -> dict[str, Any]:
    return config.model_dump(mode="json")


def build_upload_form(
    files: Sequence[UploadPart],
    collection_name: str | None = None,
) -> tuple[list[tuple[str, tuple[str, bytes, str]]], dict[str, str]]:
    """Return ``(files, data)`` ready for an httpx multipart request.

    Every blob is sent under the repeated ``files`` field in the given
    order; ``collection_name`` is only included when non-empty.
    """
    multipart = [
        (UPLOAD_FILES_FIELD, (part.filename, part.content, part.content_type))
        for part in files
    ]
    data: dict[str, str] = {}
    if collection_name:
        data[UPLOAD_COLLECTION_FIELD] = collection_name
    return multipart, data


def describe_upload(
    files: Sequence[UploadPart],
    collection_name: str | None = None,
) -> dict[str, Any]:
    """Payload echo for logs and diagnostics; file contents are never included."""
    description: dict[str, Any] = {
        UPLOAD_FILES_FIELD: [
            {"filename": part.filename, "size_bytes": part.size_bytes, "content_type": part.content_type}
            for part in files
        ]
    }
    if collection_name:
        description[UPLOAD_COLLECTION_FIELD] = collection_name
    return description
