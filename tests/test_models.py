import json

import pytest

from jira_version.core.models import VersionCreateRequest, VersionRecord


def test_payload_uses_wire_names():
    req = VersionCreateRequest(name="v1.2.0", project_key="REL", description="Spring", released=True)

    assert req.to_payload() == {
        "name": "v1.2.0",
        "description": "Spring",
        "project": "REL",
        "released": True,
    }
    assert json.loads(req.to_json()) == req.to_payload()


def test_payload_defaults():
    payload = VersionCreateRequest(name="v1", project_key="REL").to_payload()
    assert payload["description"] == ""
    assert payload["released"] is False


@pytest.mark.parametrize("name,key", [("", "REL"), ("   ", "REL"), ("v1", "")])
def test_request_rejects_empty_fields(name, key):
    with pytest.raises(ValueError):
        VersionCreateRequest(name=name, project_key=key)


def test_request_is_immutable():
    req = VersionCreateRequest(name="v1", project_key="REL")
    with pytest.raises(Exception):
        req.name = "v2"


def test_record_keeps_unknown_fields():
    record = VersionRecord.from_api({
        "id": 10001,
        "self": "https://x/rest/api/3/version/10001",
        "name": "v1",
        "archived": False,
        "projectId": 42,
    })

    assert record.id == "10001"
    assert record.self_url == "https://x/rest/api/3/version/10001"
    assert record.name == "v1"
    assert record.extra == {"archived": False, "projectId": 42}


@pytest.mark.parametrize("data", [[], "v1", None, 3])
def test_record_requires_object(data):
    with pytest.raises(ValueError):
        VersionRecord.from_api(data)
