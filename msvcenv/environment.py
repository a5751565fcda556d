#!/usr/bin/env python3
"""
Environment snapshots and stores

Parses the output of cmd.exe's `set`, compares two snapshots and applies the
differences to an environment store. A store is any MutableMapping[str, str]:
os.environ, a plain dict in tests, or GithubActionsEnvironment which also
exports the variables to later workflow steps.
"""

import os
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, MutableMapping, Optional, Union


PATH_LIKE_VARIABLES = ("PATH", "INCLUDE", "LIB", "LIBPATH")

ERROR_LINE = re.compile(r"^\[ERROR.*\]")
# vcvarsall.bat prints this before echoing its usage text; it is not an error by itself
USAGE_LINE = re.compile(r"Error in script usage\. The correct usage is:$")


@dataclass
class EnvironmentChange:
    """A variable set (or changed) by vcvarsall.bat"""
    name: str
    value: str


def split_lines(text: str) -> List[str]:
    """Split cmd.exe output into lines (\\r\\n, tolerating bare \\n)"""
    return re.split(r"\r?\n", text)


def parse_snapshot(lines: Iterable[str]) -> Dict[str, str]:
    """Parse NAME=VALUE lines into a dict.

    Only the first '=' separates name and value. Lines without '=' and lines
    with an empty name are skipped.
    """
    snapshot = {}
    for line in lines:
        if "=" not in line:
            continue
        name, value = line.split("=", 1)
        if not name:
            continue
        snapshot[name] = value
    return snapshot


def is_path_variable(name: str) -> bool:
    return name.upper() in PATH_LIKE_VARIABLES


def filter_path_value(value: str) -> str:
    """Drop duplicate entries from a ;-separated list, keeping the first one.

    Order is preserved so that path shadowing keeps working.
    """
    seen = set()
    entries = []
    for entry in value.split(";"):
        if entry in seen:
            continue
        seen.add(entry)
        entries.append(entry)
    return ";".join(entries)


def find_error_lines(lines: Iterable[str]) -> List[str]:
    """Return the [ERROR...] lines of vcvarsall.bat output, minus the usage banner"""
    return [
        line for line in lines
        if ERROR_LINE.match(line) and not USAGE_LINE.search(line)
    ]


def diff_environment(old_lines: Iterable[str], new_lines: Iterable[str]) -> List[EnvironmentChange]:
    """Compute the variables that are new or changed in new_lines.

    Path-like values are deduplicated: vcvarsall.bat prepends its entries
    without checking whether they are already there, so repeated runs would
    otherwise grow them without bound.
    """
    old_vars = parse_snapshot(old_lines)
    changes = []
    for line in new_lines:
        # vcvarsall.bat likes to print some fluff at the beginning
        if "=" not in line:
            continue
        name, value = line.split("=", 1)
        if not name:
            continue
        if old_vars.get(name) == value:
            continue
        if is_path_variable(name):
            value = filter_path_value(value)
        changes.append(EnvironmentChange(name, value))
    return changes


def apply_changes(changes: Iterable[EnvironmentChange], env: MutableMapping[str, str]) -> None:
    for change in changes:
        print(f"[SET] {change.name}")
        env[change.name] = change.value


class GithubActionsEnvironment(MutableMapping[str, str]):
    """Environment store that also exports assignments through $GITHUB_ENV.

    Reads and writes go to `base` (the process environment by default); every
    assignment is additionally appended to the GITHUB_ENV file so that
    subsequent workflow steps inherit it.
    """

    def __init__(self, path: Union[str, Path], base: Optional[MutableMapping[str, str]] = None):
        self.path = Path(path)
        self.base = os.environ if base is None else base

    def __getitem__(self, name: str) -> str:
        return self.base[name]

    def __setitem__(self, name: str, value: str) -> None:
        self.base[name] = value
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(format_github_env(name, value))

    def __delitem__(self, name: str) -> None:
        del self.base[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.base)

    def __len__(self) -> int:
        return len(self.base)


def format_github_env(name: str, value: str) -> str:
    """Format one GITHUB_ENV entry, using the heredoc form for multi-line values"""
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def default_environment(environ: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
    """The store to update: GITHUB_ENV aware inside GitHub Actions, os.environ otherwise"""
    if environ is None:
        environ = os.environ
    github_env = environ.get("GITHUB_ENV")
    if github_env:
        return GithubActionsEnvironment(github_env)
    return os.environ
