#!/usr/bin/env python3
"""
Developer command prompt setup

Runs vcvarsall.bat between two `set` dumps and carries the variables it
added or changed over into an environment store, the way a Visual Studio
Developer Command Prompt would have them.
"""

import subprocess
import sys
from typing import Callable, List, MutableMapping, Optional

from .config import MsvcConfig, normalize_arch
from .environment import (
    EnvironmentChange, apply_changes, default_environment, diff_environment,
    find_error_lines, split_lines,
)
from .errors import VcvarsScriptError
from .locate import find_vcvarsall
from .runner import CommandRunner, SubprocessRunner

# `cls` prints a form feed, which separates the three parts of the output
SEGMENT_SEPARATOR = "\f"


def vcvars_arguments(config: MsvcConfig) -> List[str]:
    """Command-line arguments for vcvarsall.bat"""
    args = [normalize_arch(config.arch)]
    if config.uwp:
        args.append("uwp")
    if config.sdk:
        args.append(config.sdk)
    if config.toolset:
        args.append(f"-vcvars_ver={config.toolset}")
    if config.spectre:
        args.append("-vcvars_spectre_libs=spectre")
    return args


def capture_command(vcvarsall: str, args: List[str]) -> str:
    vcvars = f'"{vcvarsall}" {" ".join(args)}'
    return f"set && cls && {vcvars} && cls && set"


def run_vcvars(vcvarsall: str, args: List[str], runner: CommandRunner) -> List[EnvironmentChange]:
    """Run vcvarsall.bat and return the environment changes it makes.

    vcvarsall.bat exits successfully even when given bad arguments, so its
    output is scanned for [ERROR...] lines as well.

    Raises:
        subprocess.CalledProcessError: if the command line fails
        VcvarsScriptError: if the script reported errors or the output is malformed
    """
    command = capture_command(vcvarsall, args)
    result = runner.run(command)
    if result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, command, result.stdout)

    parts = result.stdout.split(SEGMENT_SEPARATOR)
    if len(parts) != 3:
        raise VcvarsScriptError(
            f"unexpected output from {vcvarsall}: expected 3 sections, got {len(parts)}"
        )
    old_environment, vcvars_output, new_environment = (split_lines(p) for p in parts)

    error_messages = find_error_lines(vcvars_output)
    if error_messages:
        raise VcvarsScriptError("invalid parameters\r\n" + "\r\n".join(error_messages))

    return diff_environment(old_environment, new_environment)


def setup_msvc_dev_cmd(config: Optional[MsvcConfig] = None,
                       env: Optional[MutableMapping[str, str]] = None,
                       runner: Optional[CommandRunner] = None,
                       platform: Optional[str] = None,
                       exists: Optional[Callable[[str], bool]] = None) -> List[EnvironmentChange]:
    """Set up the MSVC developer environment in `env`.

    Args:
        config: options; defaults to MsvcConfig() (x64, latest Visual Studio)
        env: environment store updated in place; defaults to the process
            environment (exported through GITHUB_ENV inside GitHub Actions)
        runner: CommandRunner for vswhere and the shell
        platform: host platform, defaults to sys.platform
        exists: file existence predicate used when probing install paths

    Returns:
        The changes applied to `env`. Empty on non-Windows hosts.
    """
    if platform is None:
        platform = sys.platform
    if platform != "win32":
        print("[INFO] This is not a Windows environment, nothing to do")
        return []

    if config is None:
        config = MsvcConfig()
    if env is None:
        env = default_environment()
    if runner is None:
        runner = SubprocessRunner()

    vcvarsall = find_vcvarsall(config.vsversion, config.vspath, runner=runner, exists=exists, environ=env)
    args = vcvars_arguments(config)
    print(f"[INFO] vcvars command-line: \"{vcvarsall}\" {' '.join(args)}")

    changes = run_vcvars(vcvarsall, args, runner)
    apply_changes(changes, env)

    print("[OK] Configured Developer Command Prompt")
    return changes
