"""CommandRunner: runs Bundler, Rails and Spring commands inside the project."""

import os
import subprocess
from typing import List, Optional

from kickstart.scaffold.errors import ProcessFailure

# Variables Bundler exports into child processes. Removing them matches
# Bundler.with_clean_env so nested `bundle exec` resolves the project's Gemfile.
BUNDLER_ENV_VARS = (
    "BUNDLE_GEMFILE",
    "BUNDLE_BIN_PATH",
    "BUNDLER_VERSION",
    "BUNDLER_ORIG_PATH",
    "BUNDLER_SETUP",
    "RUBYOPT",
    "RUBYLIB",
    "GEM_HOME",
    "GEM_PATH",
)


def clean_env(env=None):
    """Return a copy of *env* (default ``os.environ``) without Bundler variables."""
    source = os.environ if env is None else env
    return {k: v for k, v in source.items() if k not in BUNDLER_ENV_VARS}


class CommandRunner:
    """Runs commands in the project directory, inheriting the terminal.

    Output is not captured: the operator sees Bundler and generator output
    as it happens.
    """

    def __init__(self, project_dir: str):
        self.project_dir = project_dir

    def run(
        self, args: List[str], *, clean_env_vars: bool = False, ok_codes=(0,),
    ) -> None:
        """Run *args*, raising ProcessFailure on an unexpected exit status.

        Args:
            args: Command and arguments.
            clean_env_vars: Strip Bundler variables from the environment.
            ok_codes: Exit statuses treated as success.
        """
        env: Optional[dict] = clean_env() if clean_env_vars else None
        try:
            result = subprocess.run(args, cwd=self.project_dir, env=env)
        except OSError as e:
            raise ProcessFailure(args, None, reason=str(e)) from e
        if result.returncode not in ok_codes:
            raise ProcessFailure(args, result.returncode)

    def spring_stop(self):
        if os.path.isfile(os.path.join(self.project_dir, "bin", "spring")):
            self.run(["bin/spring", "stop"])

    def bundle_install(self):
        self.run(["bundle", "install", "--jobs=4"])

    def rubocop_autocorrect(self):
        # 1 means offenses remain that rubocop cannot correct; 2 is a real error
        self.run(["bundle", "exec", "rubocop", "-a"], clean_env_vars=True, ok_codes=(0, 1))

    def rails_generate(self, *args):
        self.run(["bundle", "exec", "rails", "generate", *args])

    def rake(self, task):
        self.run(["bundle", "exec", "rake", task])
