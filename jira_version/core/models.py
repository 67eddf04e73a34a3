import json
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class VersionCreateRequest:
    name: str
    project_key: str
    description: str = ""
    released: bool = False

    def __post_init__(self):
        if not (self.name or "").strip():
            raise ValueError("Version name must not be empty")
        if not (self.project_key or "").strip():
            raise ValueError("Project key must not be empty")

    def to_payload(self) -> Dict[str, Any]:
        """Body of POST /rest/api/3/version"""
        return {
            "name": self.name,
            "description": self.description,
            "project": self.project_key,
            "released": self.released,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload())


@dataclass(frozen=True)
class VersionRecord:
    """A Jira version as returned by the API. Fields we do not read stay in `extra`."""

    id: str
    self_url: str
    name: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Any) -> "VersionRecord":
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        extra = {k: v for k, v in data.items() if k not in ("id", "self", "name")}
        raw_id = data.get("id")
        return cls(
            id="" if raw_id is None else str(raw_id),
            self_url=data.get("self") or "",
            name=data.get("name") or "",
            extra=extra,
        )
