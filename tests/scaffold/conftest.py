"""Shared fixtures for scaffold tests."""

import os
import sys

import pytest
from git import Repo

# Ensure tests/scaffold/ is on sys.path so test files can import the fakes
# unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.dirname(__file__))

from fake_command_runner import FakeCommandRunner  # noqa: E402, F401
from fake_fetcher import FakeFetcher  # noqa: E402, F401

GEMFILE = """\
source "https://rubygems.org"
git_source(:github) { |repo| "https://github.com/#{repo}.git" }

ruby "3.0.2"

gem "rails", "~> {version}"
gem "sqlite3", "~> 1.4"
gem "puma", "~> 5.0"
gem "jbuilder", "~> 2.7"
gem "bootsnap", ">= 1.4.4", require: false

group :development do
  gem "web-console", ">= 4.1.0"
end
"""

GEMFILE_LOCK = """\
GEM
  remote: https://rubygems.org/
  specs:
    actioncable ({version})
      actionpack (= {version})
    rails ({version})
      actioncable (= {version})
    railties ({version})

PLATFORMS
  ruby

DEPENDENCIES
  rails (~> {version})
"""

APPLICATION_RB = """\
require_relative "boot"

require "rails/all"

Bundler.require(*Rails.groups)

module Sample
  class Application < Rails::Application
    config.load_defaults 6.1
  end
end
"""


def _write(root, relpath, content):
    path = os.path.join(root, relpath)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(content)
    return path


def create_rails_project(root, version="6.1.4"):
    """Lay out the files `rails new` would leave behind, without committing."""
    _write(root, "Gemfile", GEMFILE.replace("{version}", version))
    _write(root, "Gemfile.lock", GEMFILE_LOCK.replace("{version}", version))
    _write(root, "config/application.rb", APPLICATION_RB)
    _write(root, ".gitignore", "/log/*\n/tmp/*\n")
    _write(root, "app/views/layouts/application.html.erb", "<html><%= yield %></html>\n")
    _write(root, "test/test_helper.rb", "require \"rails/test_help\"\n")
    repo = Repo.init(root)
    repo.config_writer().set_value("user", "email", "test@test.com").release()
    repo.config_writer().set_value("user", "name", "Test").release()
    return repo


@pytest.fixture
def rails_project(tmp_path):
    """A fresh Rails 6.1.4 project in an uncommitted git repository."""
    repo = create_rails_project(str(tmp_path))
    return str(tmp_path), repo


@pytest.fixture
def legacy_rails_project(tmp_path):
    """A fresh Rails 6.0.3 project, old enough to need the IRB backport."""
    repo = create_rails_project(str(tmp_path), version="6.0.3")
    return str(tmp_path), repo


@pytest.fixture
def git_repo_with_commit(tmp_path):
    """A git repository with one committed README."""
    repo = Repo.init(str(tmp_path))
    repo.config_writer().set_value("user", "email", "test@test.com").release()
    repo.config_writer().set_value("user", "name", "Test").release()
    _write(str(tmp_path), "README.md", "# Test Repo")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return str(tmp_path), repo
