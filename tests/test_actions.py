import io

import pytest
from rich.console import Console

from jira_version.core.actions import ActionsReporter


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def make_reporter(out):
    def _make(env=None):
        console = Console(file=out, soft_wrap=True, highlight=False, emoji=False)
        return ActionsReporter(console=console, env=env or {})
    return _make


def lines(out):
    return out.getvalue().splitlines()


def test_levels_use_workflow_commands(make_reporter, out):
    r = make_reporter()
    r.debug("dbg")
    r.info("Creating version [v1] ...")
    r.warning("Rate limit exceeded")
    r.error("boom")

    assert lines(out) == [
        "::debug::dbg",
        "Creating version [v1] ...",
        "::warning::Rate limit exceeded",
        "::error::boom",
    ]


def test_command_data_is_escaped(make_reporter, out):
    make_reporter().error("100%\nsecond line\r")

    assert lines(out) == ["::error::100%25%0Asecond line%0D"]


def test_secrets_are_masked_and_redacted(make_reporter, out):
    r = make_reporter()
    r.set_secret("s3cr3t")
    r.set_secret("")
    r.error("server said: bad token s3cr3t")
    r.info("s3cr3t")

    assert lines(out) == ["::add-mask::s3cr3t", "::error::server said: bad token ***", "***"]


def test_set_output_writes_github_output_file(make_reporter, out, tmp_path):
    path = tmp_path / "output"
    r = make_reporter(env={"GITHUB_OUTPUT": str(path)})
    r.set_output("version-id", "123")
    r.set_output("version-url", "https://x/y/123")

    content = path.read_text(encoding="utf-8").splitlines()
    assert content[0].startswith("version-id<<ghadelimiter_")
    assert content[1] == "123"
    assert content[2] == content[0].split("<<", 1)[1]
    assert content[3].startswith("version-url<<")
    assert content[4] == "https://x/y/123"
    assert out.getvalue() == ""


def test_set_output_without_runner_prints(make_reporter, out):
    make_reporter().set_output("version-id", "123")

    assert lines(out) == ["version-id=123"]


def test_set_failed_records_exit_code(make_reporter, out):
    r = make_reporter()
    assert r.exit_code == 0

    r.set_failed("Version creation failed with HTTP 500")

    assert r.exit_code == 1
    assert lines(out) == ["::error::Version creation failed with HTTP 500"]
