from __future__ import annotations

from pathlib import Path


class ReportError(RuntimeError):
    """Base class for failures that abort report generation."""


class NotARepository(ReportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not in a git repository: {path}")


class BranchNotFound(ReportError):
    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Branch '{ref}' does not exist")


class ExternalCommandFailed(ReportError):
    def __init__(self, command: list[str], exit_code: int, stderr: str = "") -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"{' '.join(self.command)} failed with exit code {exit_code}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class ConfigError(ReportError):
    pass
