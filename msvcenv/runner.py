#!/usr/bin/env python3
"""Command execution used to reach vswhere.exe and vcvarsall.bat.

Everything that starts a child process goes through a CommandRunner so the
probing and environment capture can be exercised with a fake runner.
"""

import locale
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class CommandResult:
    """Captured output of a finished command"""
    stdout: str
    returncode: int = 0


class CommandRunner(Protocol):
    def run(self, command: str) -> CommandResult:
        ...


def default_encoding() -> str:
    """Encoding of shell output: the console (OEM) code page under cmd.exe"""
    if sys.platform == "win32":
        return "oem"
    return locale.getpreferredencoding(False)


class SubprocessRunner:
    """Run command lines through the system shell (cmd.exe on Windows).

    Non-zero exit codes are reported in the result, not raised. Failures to
    start the shell itself (OSError) propagate.
    """

    def __init__(self, cwd: Optional[str] = None, encoding: Optional[str] = None):
        self.cwd = cwd
        self.encoding = encoding or default_encoding()

    def run(self, command: str) -> CommandResult:
        print("$ ", command)
        result = subprocess.run(
            command,
            shell=True,
            cwd=self.cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
        # Decoded by hand: text mode would fold \r\n, the snapshot line separator
        stdout = result.stdout.decode(self.encoding, errors="replace")
        return CommandResult(stdout=stdout, returncode=result.returncode)
