from __future__ import annotations

import pytest

from dashboard.features.gateway import UploadPart, build_start_agent_payload, build_upload_form
from dashboard.features.gateway.payloads import build_config_payload, describe_upload
from dashboard.features.gateway.types import AgentConfig


@pytest.mark.parametrize(
    ("collection_name", "phone_number", "expected_keys"),
    [
        (None, None, ["user_id", "agent_type"]),
        ("", "", ["user_id", "agent_type"]),
        ("docs", None, ["user_id", "collection_name", "agent_type"]),
        (None, "+1234567890", ["user_id", "phone_number", "agent_type"]),
        ("docs", "+1234567890", ["user_id", "collection_name", "phone_number", "agent_type"]),
    ],
)
def test_start_agent_payload_omits_absent_optional_fields(collection_name, phone_number, expected_keys):
    payload = build_start_agent_payload(
        "user-1",
        collection_name=collection_name,
        phone_number=phone_number,
    )

    assert list(payload) == expected_keys
    assert None not in payload.values()
    assert "" not in payload.values()


def test_start_agent_payload_keeps_user_id_verbatim_and_agent_type():
    payload = build_start_agent_payload("", agent_type="web")

    assert payload == {"user_id": "", "agent_type": "web"}


def test_start_agent_payload_rejects_unknown_agent_type():
    with pytest.raises(ValueError):
        build_start_agent_payload("user-1", agent_type="phone")


def test_config_payload_is_the_submitted_object():
    config = AgentConfig(
        system_prompt="Be brief.",
        voice="nova",
        model="gpt-4o",
        agent_name="Helper",
    )

    assert build_config_payload(config) == {
        "system_prompt": "Be brief.",
        "voice": "nova",
        "model": "gpt-4o",
        "agent_name": "Helper",
    }


def test_upload_form_repeats_files_field_in_order():
    parts = [
        UploadPart(filename="a.pdf", content=b"%PDF", content_type="application/pdf"),
        UploadPart(filename="b.txt", content=b"hello", content_type="text/plain"),
    ]

    multipart, data = build_upload_form(parts, "Product Documentation")

    assert [name for name, _ in multipart] == ["files", "files"]
    assert [item[0] for _, item in multipart] == ["a.pdf", "b.txt"]
    assert data == {"collection_name": "Product Documentation"}


def test_upload_form_omits_blank_collection_name():
    _, data = build_upload_form([UploadPart(filename="a.txt", content=b"x")], "")

    assert data == {}


def test_describe_upload_never_echoes_file_contents():
    description = describe_upload([UploadPart(filename="a.txt", content=b"secret")])

    assert description == {
        "files": [{"filename": "a.txt", "size_bytes": 6, "content_type": "application/octet-stream"}]
    }
