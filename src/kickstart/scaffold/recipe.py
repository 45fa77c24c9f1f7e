"""The ordered list of steps that customizes a fresh Rails application.

Order matters: gems are installed before generators use them, rubocop is
configured before the first auto-formatted commit, and jbuilder is only
uninstalled after every install step has run.
"""

import os
import re
import shutil
from dataclasses import dataclass

from kickstart.scaffold import file_edits
from kickstart.scaffold.answers import (
    DISABLE_ACTION_TEXT_PROMPT,
    DISABLE_ACTIVE_STORAGE_PROMPT,
    LOCALIZE_PROMPT,
    UNINSTALL_JBUILDER_PROMPT,
    Prompter,
    PromptGuard,
    VersionGuard,
)
from kickstart.scaffold.fetch import RAILS_I18N_JA_URL, RAILS_RUBOCOP_URL, Fetcher
from kickstart.scaffold.rails_version import RailsVersion
from kickstart.scaffold.shell import CommandRunner
from kickstart.scaffold.step import Step
from kickstart.templates.template_renderer import render_template

TEMPLATES_PACKAGE = __package__

# https://github.com/rails/rails/blob/master/railties/lib/rails/all.rb
DEFAULT_RAILTIES = (
    "active_record/railtie",
    "active_storage/engine",
    "action_controller/railtie",
    "action_view/railtie",
    "action_mailer/railtie",
    "active_job/railtie",
    "action_cable/engine",
    "action_mailbox/engine",
    "action_text/engine",
    "rails/test_unit/railtie",
    "sprockets/railtie",
)

RUBOCOP_EXCLUDES = (
    "bin/**/*",
    "config/**/*",
    "db/**/*",
    "node_modules/**/*",
    "tmp/**/*",
    "vendor/**/*",
)

LOCALIZATION_CONFIG = (
    'config.time_zone = "Tokyo"',
    "config.i18n.default_locale = :ja",
)

RUBOCOP_PACKAGING_SINCE = "6.1.0"
IRB_BACKPORT_FIXED_IN = "6.0.4"


@dataclass
class RecipeContext:
    """Everything the steps need to act on one project."""

    project_dir: str
    rails_version: RailsVersion
    prompter: Prompter
    commands: CommandRunner
    fetcher: Fetcher

    def path(self, *parts):
        return os.path.join(self.project_dir, *parts)

    @property
    def gemfile(self):
        return self.path("Gemfile")

    @property
    def application_rb(self):
        return self.path("config", "application.rb")

    def rails_rubocop_file(self):
        return f".rubocop-{self.rails_version.dashed()}.yml"

    def disabled_railties(self):
        """Railties the operator chose to disable, asking when needed."""
        disabled = []
        if self.prompter.ask("disable_active_storage", DISABLE_ACTIVE_STORAGE_PROMPT):
            disabled.append("active_storage/engine")
        if self.prompter.ask("disable_action_text", DISABLE_ACTION_TEXT_PROMPT):
            disabled.append("action_text/engine")
        return disabled


# --- rubocop ---

def install_rubocop(ctx):
    gems = [
        ("rubocop", {"require": False}),
        ("rubocop-performance", {"require": False}),
        ("rubocop-rails", {"require": False}),
    ]
    if ctx.rails_version >= RUBOCOP_PACKAGING_SINCE:
        gems.insert(1, ("rubocop-packaging", {"require": False}))
    file_edits.add_gem_group(ctx.gemfile, "development", gems)
    ctx.commands.bundle_install()


def configure_rubocop(ctx):
    rails_rubocop_file = ctx.rails_rubocop_file()
    url = RAILS_RUBOCOP_URL.format(version=ctx.rails_version)
    ctx.fetcher.fetch_to_file(url, ctx.path(rails_rubocop_file))
    # Layout/Tab was renamed; older Rails configs still reference it
    file_edits.gsub_file(ctx.path(rails_rubocop_file), "Layout/Tab", "Layout/IndentationStyle")
    file_edits.create_file(
        ctx.path(".rubocop.yml"),
        render_template(
            "rubocop.yml.j2",
            package=TEMPLATES_PACKAGE,
            rails_rubocop_file=rails_rubocop_file,
            excludes=RUBOCOP_EXCLUDES,
        ),
    )


# --- rspec, simplecov, pry, hamlit ---

def install_rspec(ctx):
    file_edits.add_gem_group(ctx.gemfile, ("development", "test"), [("rspec-rails", {})])
    ctx.commands.bundle_install()


def generate_rspec(ctx):
    ctx.commands.rails_generate("rspec:install")
    test_dir = ctx.path("test")
    if os.path.isdir(test_dir):
        shutil.rmtree(test_dir)


def install_simplecov(ctx):
    file_edits.add_gem_group(ctx.gemfile, "test", [("simplecov", {})])
    ctx.commands.bundle_install()
    gitignore = ctx.path(".gitignore")
    if not os.path.isfile(gitignore):
        file_edits.create_file(gitignore, "")
    file_edits.append_line_if_absent(gitignore, "coverage")


def install_pry(ctx):
    file_edits.add_gem_group(ctx.gemfile, "development", [("pry-byebug", {})])
    ctx.commands.bundle_install()


def install_hamlit(ctx):
    file_edits.add_gem(ctx.gemfile, "hamlit-rails")
    file_edits.add_gem(ctx.gemfile, "html2haml")
    ctx.commands.bundle_install()


def convert_erb_to_haml(ctx):
    ctx.commands.rake("hamlit:erb2haml")


# --- optional steps ---

def uninstall_jbuilder(ctx):
    file_edits.comment_lines(ctx.gemfile, r"""^gem ["']jbuilder["']""")
    ctx.commands.bundle_install()


def localize(ctx):
    file_edits.inject_application_config(ctx.application_rb, LOCALIZATION_CONFIG)
    ctx.fetcher.fetch_to_file(RAILS_I18N_JA_URL, ctx.path("config", "locales", "ja.yml"))


def disable_railties(ctx):
    disabled = ctx.disabled_railties()
    enabled = [r for r in DEFAULT_RAILTIES if r not in disabled]
    file_edits.comment_lines(ctx.application_rb, "^" + re.escape('require "rails/all"'))
    file_edits.inject_after(
        ctx.application_rb,
        '# require "rails/all"',
        render_template("railties.rb.j2", package=TEMPLATES_PACKAGE, railties=enabled),
    )


def disable_railties_message(ctx):
    return "Disable " + ", ".join(ctx.disabled_railties())


def add_irb_backport(ctx):
    file_edits.create_file(
        ctx.path("config", "initializers", "active_support_backports.rb"),
        render_template(
            "active_support_backports.rb.j2",
            package=TEMPLATES_PACKAGE,
            fixed_in=IRB_BACKPORT_FIXED_IN,
        ),
    )


def build_steps(ctx):
    """Return the fixed, ordered list of steps for *ctx*."""
    def bind(fn):
        return lambda: fn(ctx)

    return [
        Step("rails new", ctx.commands.spring_stop,
             commit_message="rails new", skip_formatting=True),
        Step("Install rubocop", bind(install_rubocop),
             commit_message="Install rubocop", skip_formatting=True),
        Step("Configure rubocop", bind(configure_rubocop),
             commit_message="rubocop -a"),
        Step("Install rspec-rails", bind(install_rspec),
             commit_message="Install rspec-rails"),
        Step("Generate rspec", bind(generate_rspec),
             commit_message="rails g rspec:install"),
        Step("Install simplecov", bind(install_simplecov),
             commit_message="Install simplecov"),
        Step("Install pry-byebug", bind(install_pry),
             commit_message="Install pry-byebug"),
        Step("Install hamlit-rails", bind(install_hamlit),
             commit_message="Install hamlit-rails"),
        Step("Convert erb to haml", bind(convert_erb_to_haml),
             commit_message="rake hamlit:erb2haml"),
        Step("Uninstall jbuilder", bind(uninstall_jbuilder),
             guard=PromptGuard(ctx.prompter, "uninstall_jbuilder", UNINSTALL_JBUILDER_PROMPT),
             commit_message="Uninstall jbuilder"),
        Step("Localize to Japan", bind(localize),
             guard=PromptGuard(ctx.prompter, "localize", LOCALIZE_PROMPT),
             commit_message="Localize to Japan"),
        Step("Disable railties", bind(disable_railties),
             guard=lambda: bool(ctx.disabled_railties()),
             commit_message=bind(disable_railties_message)),
        Step("Add IRB backport", bind(add_irb_backport),
             guard=VersionGuard(ctx.rails_version, below=IRB_BACKPORT_FIXED_IN),
             commit_message="Add backport of irb compleation"),
    ]
