import json
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
)

from jira_version.clients.jira import JiraClient
from jira_version.core.models import VersionCreateRequest, VersionRecord

RATE_LIMITED = 429


class VersionCreationError(RuntimeError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Version creation failed with HTTP {status}")
        self.status = status
        self.body = body


class ResponseParseError(RuntimeError):
    pass


@dataclass(frozen=True)
class RetryPolicy:
    """Retry only on HTTP 429, waiting multiplier * 2^(attempt-1) seconds (2s, 4s, 8s)."""

    max_retries: int = 3
    multiplier: float = 2
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, attempt: int) -> float:
        return self.multiplier * 2 ** (attempt - 1)


@dataclass(frozen=True)
class WorkflowResult:
    record: VersionRecord
    created: bool


def find_existing_version(
    client: JiraClient, project_key: str, name: str, reporter
) -> Optional[VersionRecord]:
    status, body = client.list_versions(project_key)
    if status != 200:
        # not fatal: fall through to creation
        reporter.warning(
            f"Could not list versions of project \"{project_key}\" (HTTP {status}), "
            f"proceeding to create \"{name}\""
        )
        return None
    try:
        versions = json.loads(body)
    except ValueError:
        versions = None
    if not isinstance(versions, list):
        reporter.warning(f"Unexpected versions listing for project \"{project_key}\", proceeding to create")
        return None
    for v in versions:
        if isinstance(v, dict) and v.get("name") == name:
            return VersionRecord.from_api(v)
    return None


def post_with_retry(
    client: JiraClient,
    url: str,
    body: str,
    policy: RetryPolicy,
    reporter,
) -> Tuple[int, str]:
    def log_retry(retry_state: RetryCallState) -> None:
        wait_ms = int(retry_state.next_action.sleep * 1000)
        reporter.warning(
            f"Rate limit exceeded, retrying in {wait_ms}ms "
            f"({retry_state.attempt_number}/{policy.max_retries})"
        )

    retrying = Retrying(
        retry=retry_if_result(lambda res: res[0] == RATE_LIMITED),
        stop=stop_after_attempt(policy.max_attempts),
        wait=lambda retry_state: policy.backoff(retry_state.attempt_number),
        sleep=policy.sleep,
        before_sleep=log_retry,
        # budget exhausted: hand back the last 429 instead of raising RetryError
        retry_error_callback=lambda retry_state: retry_state.outcome.result(),
    )
    return retrying(client.post_json, url, body)


def classify_response(status: int, body: str, reporter) -> VersionRecord:
    if status < 200 or status >= 300:
        reporter.error("Failed to create Jira version:")
        reporter.error(f"- Status: HTTP {status}")
        try:
            parsed = json.loads(body)
            reporter.error("- Error details:")
            reporter.error(json.dumps(parsed, indent=2))
        except ValueError:
            reporter.error("- Raw response:")
            reporter.error(body)
        raise VersionCreationError(status, body)

    try:
        return VersionRecord.from_api(json.loads(body))
    except ValueError as e:
        raise ResponseParseError("Failed to parse Jira response as JSON.") from e


def run_version_workflow(
    client: JiraClient,
    request: VersionCreateRequest,
    check_if_exists: bool,
    reporter,
    policy: Optional[RetryPolicy] = None,
) -> WorkflowResult:
    policy = policy or RetryPolicy()

    if check_if_exists:
        existing = find_existing_version(client, request.project_key, request.name, reporter)
        if existing is not None:
            reporter.info(f"Version \"{request.name}\" already exists in project \"{request.project_key}\"")
            return WorkflowResult(record=existing, created=False)

    reporter.info(f"Creating version \"{request.name}\" in project \"{request.project_key}\"...")
    status, body = post_with_retry(client, client.version_url(), request.to_json(), policy, reporter)
    record = classify_response(status, body, reporter)
    reporter.info(f"Version \"{record.name}\" created successfully")
    return WorkflowResult(record=record, created=True)
