"""Errors that abort a scaffold run.

Every failure is fatal: the runner stops at the failing step, commits
made by earlier steps stay in place, and the operator re-runs once the
cause is fixed.
"""


class ScaffoldError(Exception):
    """Base class for failures that abort a scaffold run."""


class ProcessFailure(ScaffoldError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, cmd, returncode, reason=None):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.reason = reason
        detail = reason or f"exit={returncode}"
        super().__init__(f"Command failed ({detail}): {' '.join(self.cmd)}")


class ProjectFileNotFound(ScaffoldError, FileNotFoundError):
    """The file a text mutation targets does not exist."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"File not found: {self.path}")

    def __str__(self):
        return f"File not found: {self.path}"


class NetworkFailure(ScaffoldError):
    """A remote fetch failed or returned a non-200 status."""

    def __init__(self, url, reason):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
