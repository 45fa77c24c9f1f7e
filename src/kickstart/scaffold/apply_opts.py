"""Options dataclass for the apply command."""

import os
from dataclasses import dataclass, field

import click

from kickstart.scaffold.answers import ScaffoldAnswers

REQUIRED_PROJECT_FILES = ("Gemfile", "Gemfile.lock")


@dataclass
class ApplyOpts:
    """All options for the apply command."""

    project_dir: str = "."
    answers: ScaffoldAnswers = field(default_factory=ScaffoldAnswers)

    def validate_project_dir(self):
        """Raise click.UsageError unless project_dir looks like a Rails app."""
        if not os.path.isdir(self.project_dir):
            raise click.UsageError(f"Project directory not found: {self.project_dir}")
        missing = [name for name in REQUIRED_PROJECT_FILES
                   if not os.path.isfile(os.path.join(self.project_dir, name))]
        if missing:
            raise click.UsageError(
                f"{self.project_dir} is missing {', '.join(missing)}; run `rails new` first"
            )
