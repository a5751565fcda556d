"""Shared fakes for the msvcenv tests: a scripted command runner and a fake filesystem."""

import pytest

from msvcenv.runner import CommandResult


class FakeRunner:
    """CommandRunner returning canned results based on the command's content"""

    def __init__(self, vswhere=None, vcvars=None):
        # Each value is a CommandResult, an exception instance to raise, or None
        self.vswhere = vswhere
        self.vcvars = vcvars
        self.commands = []

    def run(self, command):
        self.commands.append(command)
        response = self.vswhere if "vswhere" in command else self.vcvars
        if isinstance(response, BaseException):
            raise response
        if response is None:
            return CommandResult(stdout="", returncode=1)
        return response


class FakeFiles:
    """Set of existing paths usable as an `exists` predicate"""

    def __init__(self, *paths):
        self.paths = set(paths)
        self.probed = []

    def __call__(self, path):
        self.probed.append(path)
        return path in self.paths


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_files():
    return FakeFiles


def dump_output(pre, script, post):
    """Build what `set && cls && vcvarsall && cls && set` prints"""
    return "\r\n".join(pre) + "\r\n\f" + "\r\n".join(script) + "\r\n\f" + "\r\n".join(post) + "\r\n"


@pytest.fixture
def make_dump():
    return dump_output
