"""Step: one ordered unit of scaffold work."""

from dataclasses import dataclass
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class Step:
    """A named action, optionally gated by a guard and checkpointed as a commit.

    Attributes:
        name: Label printed when the step runs.
        action: Zero-argument callable performing the work.
        guard: Zero-argument predicate evaluated when the step is reached;
            the step is skipped entirely when it returns False.
        commit_message: When set, all changes are committed after the action.
            May be a zero-argument callable when the message depends on
            answers collected by the guard.
        skip_formatting: Commit without running the auto-formatter first.
    """

    name: str
    action: Callable[[], None]
    guard: Optional[Callable[[], bool]] = None
    commit_message: Union[str, Callable[[], str], None] = None
    skip_formatting: bool = False

    def should_run(self) -> bool:
        if self.guard is None:
            return True
        return bool(self.guard())

    def resolve_commit_message(self) -> Optional[str]:
        if callable(self.commit_message):
            return self.commit_message()
        return self.commit_message
