import os
import uuid
from typing import List, Mapping, Optional
from rich.console import Console


def _escape_data(s: str) -> str:
    return s.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    """GitHub Actions workflow commands (log levels, masking, outputs) printed on a rich console."""

    def __init__(self, console: Optional[Console] = None, env: Optional[Mapping[str, str]] = None) -> None:
        self.console = console or Console(soft_wrap=True, highlight=False, emoji=False)
        self.env = os.environ if env is None else env
        self.secrets: List[str] = []
        self.exit_code = 0

    def _redact(self, s: str) -> str:
        # longest first so a secret containing another one is masked whole
        for secret in sorted(self.secrets, key=len, reverse=True):
            s = s.replace(secret, "***")
        return s

    def _emit(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, emoji=False)

    def _command(self, command: str, message: str) -> None:
        self._emit(f"::{command}::{_escape_data(self._redact(str(message)))}")

    def set_secret(self, value: str) -> None:
        if not value:
            return
        self._emit(f"::add-mask::{_escape_data(value)}")
        self.secrets.append(value)

    def debug(self, message: str) -> None:
        self._command("debug", message)

    def info(self, message: str) -> None:
        self._emit(self._redact(str(message)))

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_output(self, name: str, value: str) -> None:
        value = "" if value is None else str(value)
        path = self.env.get("GITHUB_OUTPUT")
        if not path:
            self.info(f"{name}={value}")
            return
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.error(message)
