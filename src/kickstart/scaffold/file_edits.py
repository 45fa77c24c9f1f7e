"""Idempotent text-file mutations used by scaffold steps.

Each function detects whether its effect is already present and leaves
the file untouched in that case, so re-running a step after a failure
does not duplicate lines.
"""

import os
import re

from kickstart.scaffold.errors import ProjectFileNotFound, ScaffoldError


def _read(path):
    if not os.path.isfile(path):
        raise ProjectFileNotFound(path)
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write(path, content):
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _ensure_trailing_newline(content):
    if content and not content.endswith("\n"):
        return content + "\n"
    return content


def append_line_if_absent(path, line):
    """Append *line* to *path* unless an identical line is already present."""
    content = _read(path)
    if line in content.splitlines():
        return False
    _write(path, _ensure_trailing_newline(content) + line + "\n")
    return True


def comment_lines(path, pattern):
    """Prefix every line matching *pattern* with ``# ``.

    Indentation is preserved and lines that are already commented are
    left alone, so the line count never changes.

    Returns:
        Number of lines commented by this call.
    """
    regex = re.compile(pattern)
    lines = _read(path).splitlines(keepends=True)
    changed = 0
    for i, line in enumerate(lines):
        stripped = line.lstrip()
        if stripped.startswith("#"):
            continue
        if regex.search(stripped):
            indent = line[: len(line) - len(stripped)]
            lines[i] = f"{indent}# {stripped}"
            changed += 1
    if changed:
        _write(path, "".join(lines))
    return changed


def create_file(path, content):
    """Write *content* to *path*, creating parent directories as needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    _write(path, content)


def gsub_file(path, old, new):
    """Replace every occurrence of the substring *old* with *new*."""
    content = _read(path)
    if old not in content:
        return False
    _write(path, content.replace(old, new))
    return True


def inject_after(path, marker, text):
    """Insert *text* on the lines following the first line containing *marker*.

    Does nothing if *text* is already in the file.

    Raises:
        ProjectFileNotFound: If *path* does not exist.
        ScaffoldError: If no line contains *marker*.
    """
    content = _read(path)
    if text in content:
        return False
    lines = content.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if marker in line:
            if not line.endswith("\n"):
                lines[i] = line + "\n"
            lines.insert(i + 1, _ensure_trailing_newline(text))
            _write(path, "".join(lines))
            return True
    raise ScaffoldError(f"Marker {marker!r} not found in {path}")


# --- Gemfile helpers ---

_GEM_LINE = re.compile(r"""^\s*gem\s+["']([^"']+)["']""")


def declared_gems(path):
    """Return names of gems declared (uncommented) in a Gemfile."""
    names = []
    for line in _read(path).splitlines():
        match = _GEM_LINE.match(line)
        if match:
            names.append(match.group(1))
    return names


def gem_line(name, *, require=None):
    parts = [f'gem "{name}"']
    if require is False:
        parts.append("require: false")
    return ", ".join(parts)


def add_gem(path, name, *, require=None):
    """Append a top-level ``gem`` declaration unless *name* is already declared."""
    if name in declared_gems(path):
        return False
    content = _read(path)
    _write(path, _ensure_trailing_newline(content) + gem_line(name, require=require) + "\n")
    return True


def add_gem_group(path, groups, gems):
    """Append a ``group ... do`` block declaring the gems not yet in the Gemfile.

    Args:
        path: Gemfile path.
        groups: Group name or sequence of group names (e.g. ``("development", "test")``).
        gems: Sequence of ``(name, options)`` pairs; options are passed to
            :func:`gem_line`.

    Returns:
        Names of the gems that were added.
    """
    if isinstance(groups, str):
        groups = (groups,)
    existing = set(declared_gems(path))
    missing = [(name, opts) for name, opts in gems if name not in existing]
    if not missing:
        return []
    header = "group " + ", ".join(f":{g}" for g in groups) + " do"
    block = [header] + [f"  {gem_line(name, **opts)}" for name, opts in missing] + ["end"]
    content = _ensure_trailing_newline(_read(path))
    _write(path, content + "\n" + "\n".join(block) + "\n")
    return [name for name, _ in missing]


# --- config/application.rb ---

_APPLICATION_CLASS = "class Application < Rails::Application"


def inject_application_config(path, config_lines):
    """Add configuration lines inside the Rails ``Application`` class body.

    Lines already present anywhere in the file are skipped.

    Returns:
        The lines that were inserted.
    """
    content = _read(path)
    present = {line.strip() for line in content.splitlines()}
    missing = [line for line in config_lines if line.strip() not in present]
    if not missing:
        return []
    lines = content.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if _APPLICATION_CLASS in line:
            indent = line[: len(line) - len(line.lstrip())] + "  "
            block = "".join(f"{indent}{config}\n" for config in missing)
            if not line.endswith("\n"):
                lines[i] = line + "\n"
            lines.insert(i + 1, block)
            _write(path, "".join(lines))
            return missing
    raise ScaffoldError(f"{_APPLICATION_CLASS!r} not found in {path}")
