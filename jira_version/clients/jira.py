from typing import Optional, Tuple
from urllib.parse import quote
import base64
import requests

USER_AGENT = "jira-version-action"


class JiraClient:
    """Jira REST v3 calls returning (status, text).

    `timeout` (seconds) is passed to every request; requests itself has no default timeout.
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ) -> None:
        self.base = base_url.rstrip("/")
        self.api = f"{self.base}/rest/api/3"
        self.timeout = timeout
        self.session = session or requests.Session()
        auth = base64.b64encode(f"{email}:{api_token}".encode("utf-8")).decode("ascii")
        self.session.headers.update({
            "Authorization": f"Basic {auth}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        })

    def __repr__(self) -> str:
        return f"JiraClient(base={self.base!r})"

    def versions_url(self, project_key: str) -> str:
        return f"{self.api}/project/{quote(project_key, safe='')}/versions"

    def version_url(self) -> str:
        return f"{self.api}/version"

    def list_versions(self, project_key: str) -> Tuple[int, str]:
        """GET /project/{key}/versions -> (status_code, text)"""
        r = self.session.get(self.versions_url(project_key), timeout=self.timeout)
        return r.status_code, r.text

    def post_json(self, url: str, body: str) -> Tuple[int, str]:
        """POST an already serialized body -> (status_code, text); HTTP errors are not raised"""
        r = self.session.post(url, data=body.encode("utf-8"), timeout=self.timeout)
        return r.status_code, r.text
