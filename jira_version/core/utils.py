import os
import yaml


def load_yaml(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_optional_yaml(path: str | None) -> dict:
    if not path or not os.path.exists(path):
        return {}
    data = load_yaml(path)
    return data if isinstance(data, dict) else {}


def coalesce(*args):
    for a in args:
        if a is not None and a != "":
            return a
    return None


def actions_env_name(name: str) -> str:
    """jira-base-url -> INPUT_JIRA-BASE-URL (what the Actions runner exports)"""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def plain_env_name(name: str) -> str:
    """jira-base-url -> JIRA_BASE_URL"""
    return name.replace("-", "_").replace(" ", "_").upper()
