"""GitCheckpoint: wraps GitPython Repo for stage-all and commit operations.

Provides an injectable interface so the runner can be tested against a
real temporary repository without patching git itself.
"""

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from kickstart.scaffold.errors import ScaffoldError


class GitCheckpoint:
    """Records each scaffold step as a commit in the project repository.

    Args:
        repo: A GitPython Repo instance.
    """

    def __init__(self, repo):
        self._repo = repo

    @classmethod
    def open(cls, project_dir):
        """Create a checkpoint for the repository at *project_dir*.

        Raises:
            ScaffoldError: If *project_dir* is not a git repository.
        """
        try:
            return cls(Repo(project_dir))
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise ScaffoldError(f"Not a git repository: {project_dir}")

    @property
    def working_tree_dir(self):
        return self._repo.working_tree_dir

    @property
    def head_sha(self):
        if not self._repo.head.is_valid():
            return None
        return self._repo.head.commit.hexsha

    def has_changes(self):
        """Return True if there is anything to stage or commit."""
        if not self._repo.head.is_valid():
            return bool(self._repo.index.entries) or bool(self._repo.untracked_files)
        return self._repo.is_dirty(untracked_files=True)

    def stage_all(self):
        try:
            self._repo.git.add(A=True)
        except GitCommandError as e:
            raise ScaffoldError(f"git failed: {e.stderr.strip()}") from e

    def commit(self, message):
        """Commit the staged changes without running hooks.

        Returns:
            The SHA of the new commit.

        Raises:
            ScaffoldError: If git refuses the commit.
        """
        try:
            self._repo.git.commit("-n", "-m", message)
        except GitCommandError as e:
            raise ScaffoldError(f"git failed: {e.stderr.strip()}") from e
        return self._repo.head.commit.hexsha

    def commit_messages(self):
        """Return commit subjects reachable from HEAD, newest first."""
        if not self._repo.head.is_valid():
            return []
        return [c.summary for c in self._repo.iter_commits("HEAD")]
