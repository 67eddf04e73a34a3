import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from jira_version.core.models import VersionCreateRequest
from jira_version.core.utils import (
    actions_env_name,
    coalesce,
    load_optional_yaml,
    plain_env_name,
)

DEFAULT_CONFIG_PATH = "config.yml"

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


class InputError(ValueError):
    pass


def parse_bool_input(name: str, value: Optional[str]) -> bool:
    """YAML 1.2 core schema booleans, same as @actions/core getBooleanInput"""
    if value is None or value == "":
        return False
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise InputError(
        f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


class InputResolver:
    """
    Looks an input up in order:
      1) explicit CLI value
      2) INPUT_<NAME> set by the Actions runner
      3) <NAME> plain env var (.env included)
      4) `inputs:` section of the YAML config
    """

    def __init__(
        self,
        cli_values: Optional[Mapping[str, Optional[str]]] = None,
        env: Optional[Mapping[str, str]] = None,
        config_path: Optional[str] = None,
    ) -> None:
        self.cli_values = dict(cli_values or {})
        self.env = os.environ if env is None else env
        explicit = config_path or self.env.get("JIRA_VERSION_CONFIG")
        if explicit and not os.path.exists(explicit):
            raise InputError(f"Config file not found: {explicit}")
        path = explicit or DEFAULT_CONFIG_PATH
        cfg = load_optional_yaml(path)
        self.file_values: Dict = cfg.get("inputs") or {}

    def get(self, name: str, required: bool = False) -> str:
        file_value = self.file_values.get(name)
        value = coalesce(
            self.cli_values.get(name),
            self.env.get(actions_env_name(name)),
            self.env.get(plain_env_name(name)),
            None if file_value is None else str(file_value),
        )
        value = (value or "").strip()
        if required and not value:
            raise InputError(f"Input required and not supplied: {name}")
        return value

    def get_bool(self, name: str) -> bool:
        file_value = self.file_values.get(name)
        if isinstance(file_value, bool):
            # yaml already parsed it
            file_value = "true" if file_value else "false"
        elif file_value is not None:
            file_value = str(file_value)
        value = coalesce(
            self.cli_values.get(name),
            self.env.get(actions_env_name(name)),
            self.env.get(plain_env_name(name)),
            file_value,
        )
        return parse_bool_input(name, (value or "").strip())


@dataclass(frozen=True)
class ActionInputs:
    base_url: str
    project_key: str
    user_email: str
    api_token: str
    version_name: str
    version_description: str = ""
    released: bool = False
    check_if_exists: bool = False

    def __repr__(self) -> str:
        return (
            f"ActionInputs(base_url={self.base_url!r}, project_key={self.project_key!r}, "
            f"version_name={self.version_name!r}, released={self.released}, "
            f"check_if_exists={self.check_if_exists})"
        )

    @classmethod
    def resolve(cls, resolver: InputResolver) -> "ActionInputs":
        return cls(
            base_url=resolver.get("jira-base-url", required=True),
            project_key=resolver.get("jira-project-key", required=True),
            user_email=resolver.get("jira-user-email", required=True),
            api_token=resolver.get("jira-api-token", required=True),
            version_name=resolver.get("version-name", required=True),
            version_description=resolver.get("version-description"),
            released=resolver.get_bool("released"),
            check_if_exists=resolver.get_bool("check-if-exists"),
        )

    def to_request(self) -> VersionCreateRequest:
        return VersionCreateRequest(
            name=self.version_name,
            project_key=self.project_key,
            description=self.version_description,
            released=self.released,
        )
