"""
msvcenv - Microsoft Visual C++ developer environment setup

Locates vcvarsall.bat, runs it and carries the variables it sets over into
the current process environment (and into GITHUB_ENV inside GitHub Actions).
"""

__version__ = "0.1.0"

from .config import load_config, create_example_config, normalize_arch, MsvcConfig
from .devcmd import setup_msvc_dev_cmd
from .environment import EnvironmentChange, GithubActionsEnvironment, filter_path_value
from .errors import MsvcEnvError, MsvcNotFoundError, VcvarsScriptError, ConfigError
from .locate import find_vcvarsall
from .runner import CommandResult, CommandRunner, SubprocessRunner
from .versions import vs_year_to_version, vs_version_to_year

__all__ = [
    "setup_msvc_dev_cmd",
    "find_vcvarsall",
    "load_config",
    "create_example_config",
    "normalize_arch",
    "MsvcConfig",
    "EnvironmentChange",
    "GithubActionsEnvironment",
    "filter_path_value",
    "MsvcEnvError",
    "MsvcNotFoundError",
    "VcvarsScriptError",
    "ConfigError",
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "vs_year_to_version",
    "vs_version_to_year",
]
