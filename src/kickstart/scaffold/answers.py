"""Operator answers and the guards that consume them."""

from dataclasses import dataclass, field, fields
from typing import Callable, Dict, Optional

import click

UNINSTALL_JBUILDER_PROMPT = "Would you like to uninstall jbuilder? (y/n): "
LOCALIZE_PROMPT = "Would you like to localize to Japan? (y/n): "
DISABLE_ACTIVE_STORAGE_PROMPT = "Would you like to disable active_storage? (y/n): "
DISABLE_ACTION_TEXT_PROMPT = "Would you like to disable action_text? (y/n): "


@dataclass
class ScaffoldAnswers:
    """Answers to the yes/no questions asked during a run.

    ``None`` means the question has not been answered and will be asked
    when the step that needs it is reached.
    """

    uninstall_jbuilder: Optional[bool] = None
    localize: Optional[bool] = None
    disable_active_storage: Optional[bool] = None
    disable_action_text: Optional[bool] = None

    @classmethod
    def all(cls, value: bool) -> "ScaffoldAnswers":
        """Answers with every question set to *value*."""
        return cls(**{f.name: value for f in fields(cls)})


def _confirm(prompt: str) -> bool:
    return click.confirm(prompt, default=False, show_default=False, prompt_suffix="")


@dataclass
class Prompter:
    """Resolves a question from injected answers, asking the operator otherwise.

    Each question is asked at most once; the answer is remembered on the
    ScaffoldAnswers instance.
    """

    answers: ScaffoldAnswers = field(default_factory=ScaffoldAnswers)
    confirm_fn: Callable[[str], bool] = field(default_factory=lambda: _confirm)
    asked: Dict[str, str] = field(default_factory=dict)

    def ask(self, name: str, prompt: str) -> bool:
        value = getattr(self.answers, name)
        if value is None:
            value = bool(self.confirm_fn(prompt))
            self.asked[name] = prompt
            setattr(self.answers, name, value)
        return value


class PromptGuard:
    """Guard that is true when the operator answers yes."""

    def __init__(self, prompter, name, prompt):
        self._prompter = prompter
        self.name = name
        self.prompt = prompt

    def __call__(self):
        return self._prompter.ask(self.name, self.prompt)

    def __repr__(self):
        return f"PromptGuard({self.name!r})"


class VersionGuard:
    """Guard comparing the project's Rails version against a fixed release.

    Args:
        version: The project's RailsVersion.
        minimum: Guard is true when ``version >= minimum``.
        below: Guard is true when ``version < below``.
    """

    def __init__(self, version, *, minimum=None, below=None):
        if (minimum is None) == (below is None):
            raise ValueError("VersionGuard needs exactly one of minimum= or below=")
        self._version = version
        self._minimum = minimum
        self._below = below

    def __call__(self):
        if self._minimum is not None:
            return self._version >= self._minimum
        return self._version < self._below

    def __repr__(self):
        if self._minimum is not None:
            return f"VersionGuard(>= {self._minimum})"
        return f"VersionGuard(< {self._below})"
