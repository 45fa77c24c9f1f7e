"""Click command that applies the scaffold recipe to a Rails project."""

import os
import sys

import click

from kickstart.scaffold.answers import Prompter, ScaffoldAnswers
from kickstart.scaffold.apply_opts import ApplyOpts
from kickstart.scaffold.errors import ScaffoldError
from kickstart.scaffold.fetch import Fetcher
from kickstart.scaffold.git_checkpoint import GitCheckpoint
from kickstart.scaffold.rails_version import detect_rails_version
from kickstart.scaffold.recipe import RecipeContext, build_steps
from kickstart.scaffold.runner import ScaffoldRunner, StepFailed
from kickstart.scaffold.shell import CommandRunner


def apply(opts: ApplyOpts, *, prompter=None, commands=None, fetcher=None, checkpoint=None):
    """Customize the Rails project at opts.project_dir.

    Collaborators default to the real implementations; tests pass fakes.

    Returns:
        RunReport from the runner.
    """
    project_dir = os.path.abspath(opts.project_dir)
    commands = commands or CommandRunner(project_dir)
    ctx = RecipeContext(
        project_dir=project_dir,
        rails_version=detect_rails_version(project_dir),
        prompter=prompter or Prompter(opts.answers),
        commands=commands,
        fetcher=fetcher or Fetcher(),
    )
    checkpoint = checkpoint or GitCheckpoint.open(project_dir)
    click.echo(f"Customizing Rails {ctx.rails_version} application in {project_dir}")

    runner = ScaffoldRunner(checkpoint, formatter=commands.rubocop_autocorrect)
    report = runner.run(build_steps(ctx))

    click.echo(f"Done: {len(report.commits)} commit(s) created.")
    return report


def _answer_option(flag, name, help_text):
    return click.option(f"--{flag[0]}/--{flag[1]}", name, default=None, help=help_text)


@click.command("apply")
@click.argument("project_dir", default=".", type=click.Path(file_okay=False))
@_answer_option(("uninstall-jbuilder", "keep-jbuilder"), "uninstall_jbuilder",
                "Comment out jbuilder in the Gemfile.")
@_answer_option(("localize", "no-localize"), "localize",
                "Set the Tokyo time zone and Japanese default locale.")
@_answer_option(("disable-active-storage", "keep-active-storage"), "disable_active_storage",
                "Drop the active_storage railtie.")
@_answer_option(("disable-action-text", "keep-action-text"), "disable_action_text",
                "Drop the action_text railtie.")
def apply_cmd(project_dir, **answers):
    """Install gems, configure tooling and commit each step in PROJECT_DIR.

    Questions not answered by a flag are asked when their step is reached.
    """
    opts = ApplyOpts(project_dir=project_dir, answers=ScaffoldAnswers(**answers))
    opts.validate_project_dir()
    try:
        apply(opts)
    except StepFailed as e:
        click.echo(f"Error: {e.cause}", err=True)
        click.echo(f"Step '{e.step_name}' did not complete; earlier commits were kept.", err=True)
        sys.exit(1)
    except ScaffoldError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
