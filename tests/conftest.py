import json
from unittest.mock import MagicMock

import pytest

from jira_version.clients.jira import JiraClient
from jira_version.core.workflow import RetryPolicy

BASE_URL = "https://acme.atlassian.net"
EMAIL = "release-bot@acme.io"
TOKEN = "s3cr3t-t0ken"


def make_response(status_code, body=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = body if isinstance(body, str) else json.dumps(body)
    return resp


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return JiraClient(base_url=BASE_URL, email=EMAIL, api_token=TOKEN, session=session)


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def policy(sleep):
    return RetryPolicy(sleep=sleep)


@pytest.fixture
def reporter():
    return MagicMock()
