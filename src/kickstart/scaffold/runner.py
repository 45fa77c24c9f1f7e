"""ScaffoldRunner: executes steps in order and checkpoints each as a commit."""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import click

from kickstart.scaffold.errors import ScaffoldError


@dataclass
class RunReport:
    """What a run did, in order."""

    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    commits: List[str] = field(default_factory=list)


class StepFailed(ScaffoldError):
    """A step raised; wraps the original error with the step name."""

    def __init__(self, step_name, cause):
        self.step_name = step_name
        self.cause = cause
        super().__init__(f"Step '{step_name}' failed: {cause}")


class ScaffoldRunner:
    """Runs a fixed list of steps against one project.

    Args:
        checkpoint: GitCheckpoint (stage_all, commit, has_changes).
        formatter: Zero-argument callable run before committing steps that
            do not set skip_formatting; None disables formatting.
        echo: Output function, ``click.echo`` by default.
    """

    def __init__(self, checkpoint, formatter: Optional[Callable[[], None]] = None, echo=click.echo):
        self._checkpoint = checkpoint
        self._formatter = formatter
        self._echo = echo

    def run(self, steps) -> RunReport:
        """Execute *steps* in order, stopping at the first failure.

        Raises:
            StepFailed: If a guard, action, formatter or commit raises a
                ScaffoldError. Commits made by earlier steps are kept.
        """
        report = RunReport()
        for step in steps:
            try:
                self._run_step(step, report)
            except ScaffoldError as e:
                raise StepFailed(step.name, e) from e
        return report

    def _run_step(self, step, report):
        if not step.should_run():
            report.skipped.append(step.name)
            return

        self._echo(f"==> {step.name}")
        step.action()
        report.executed.append(step.name)

        message = step.resolve_commit_message()
        if message is not None:
            self._checkpoint_step(step, message, report)

    def _checkpoint_step(self, step, message, report):
        if not step.skip_formatting and self._formatter is not None:
            self._formatter()

        self._checkpoint.stage_all()
        if not self._checkpoint.has_changes():
            self._echo(f"    nothing to commit for '{message}'", err=True)
            return

        sha = self._checkpoint.commit(message)
        report.commits.append(message)
        self._echo(f"    committed {sha[:7]} {message}")
