#!/usr/bin/env python3
"""
Configuration management for msvcenv.toml files

This module handles parsing and validation of msvcenv.toml configuration files
that select the architecture, SDK, toolset and Visual Studio version used to
set up the MSVC developer environment. GitHub Actions style INPUT_* variables
override values read from the file.
"""

import os
try:
    import tomllib
except ImportError:
    # For Python < 3.11
    import tomli as tomllib
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Any, Union
from dataclasses import dataclass, fields

from .errors import ConfigError
from .versions import is_known_vsversion


CONFIG_FILE_NAME = "msvcenv.toml"

# Common spellings of architectures that vcvarsall.bat does not accept
ARCH_ALIASES = {
    "win32": "x86",
    "win64": "x64",
    "x86_64": "x64",
    "x86-64": "x64",
}

# Host/target combinations understood by vcvarsall.bat
KNOWN_ARCHS = [
    "x86", "amd64", "x64", "arm", "arm64",
    "x86_amd64", "x86_x64", "x86_arm", "x86_arm64",
    "amd64_x86", "x64_x86", "amd64_arm", "x64_arm", "amd64_arm64", "x64_arm64",
    "arm64_x86", "arm64_amd64", "arm64_x64", "arm64_arm",
]

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off", "")


def normalize_arch(arch: str) -> str:
    """Map common architecture aliases to the names vcvarsall.bat expects.

    Matching ignores case; values that are not aliases are returned unchanged.
    """
    return ARCH_ALIASES.get(arch.lower(), arch)


@dataclass
class MsvcConfig:
    """Options for a developer command prompt setup"""
    arch: str = "x64"
    vspath: Optional[str] = None
    sdk: Optional[str] = None
    toolset: Optional[str] = None
    uwp: bool = False
    spectre: bool = False
    vsversion: Optional[str] = None


def parse_bool(name: str, value: Union[str, bool]) -> bool:
    """Parse a boolean option given either as TOML bool or as text"""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"Option '{name}' must be true or false, got: {value!r}")


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _vsversion(value: Any) -> Optional[str]:
    # TOML floats lose trailing zeros (16.10 -> 16.1), so only int and str are accepted
    if isinstance(value, bool) or not isinstance(value, (int, str, type(None))):
        raise ConfigError(
            f"Option 'vsversion' must be a year or a quoted version string, got: {value!r}. "
            "Put the version in quotes, e.g. vsversion = \"16.10\""
        )
    return _optional_str(value)


def config_from_mapping(data: Mapping[str, Any]) -> MsvcConfig:
    """Build an MsvcConfig from the [msvc] table of a TOML document"""
    known = {f.name for f in fields(MsvcConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown option(s) in [msvc] section: {', '.join(unknown)}")

    return MsvcConfig(
        arch=_optional_str(data.get("arch")) or "x64",
        vspath=_optional_str(data.get("vspath")),
        sdk=_optional_str(data.get("sdk")),
        toolset=_optional_str(data.get("toolset")),
        uwp=parse_bool("uwp", data.get("uwp", False)),
        spectre=parse_bool("spectre", data.get("spectre", False)),
        # A TOML integer like 2019 is accepted as well as "2019"
        vsversion=_vsversion(data.get("vsversion")),
    )


def apply_input_overrides(config: MsvcConfig, environ: Optional[Mapping[str, str]] = None) -> MsvcConfig:
    """Override config values with non-empty INPUT_<NAME> variables"""
    if environ is None:
        environ = os.environ

    overrides: Dict[str, Any] = {}
    for f in fields(MsvcConfig):
        value = environ.get(f"INPUT_{f.name.upper()}")
        if value is None or not value.strip():
            continue
        if f.type is bool:
            overrides[f.name] = parse_bool(f.name, value)
        else:
            overrides[f.name] = value.strip()

    if not overrides:
        return config
    values = {f.name: getattr(config, f.name) for f in fields(MsvcConfig)}
    values.update(overrides)
    return MsvcConfig(**values)


def find_project_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest directory containing msvcenv.toml, or None"""
    if start_path is None:
        start_path = Path.cwd()

    current = start_path if start_path.is_dir() else start_path.parent
    for path in [current] + list(current.parents):
        if (path / CONFIG_FILE_NAME).exists():
            return path
    return None


def load_config(config_path: Optional[Union[str, Path]] = None,
                environ: Optional[Mapping[str, str]] = None) -> MsvcConfig:
    """Load msvcenv configuration.

    With an explicit path the file must exist. Without one, the nearest
    msvcenv.toml is used when there is one, and defaults otherwise. INPUT_*
    variables are applied on top in both cases.
    """
    if config_path is None:
        project_root = find_project_root()
        if project_root is not None:
            config_path = project_root / CONFIG_FILE_NAME

    data: Dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

    msvc_data = data.get("msvc", {})
    if not isinstance(msvc_data, dict):
        raise ConfigError("[msvc] must be a table")

    return apply_input_overrides(config_from_mapping(msvc_data), environ)


def create_example_config(path: Optional[Union[str, Path]] = None) -> Path:
    """Create an example msvcenv.toml configuration file"""
    if path is None:
        path = Path.cwd() / CONFIG_FILE_NAME
    else:
        path = Path(path)

    example_config = '''# msvcenv.toml - MSVC developer environment settings

[msvc]
# Target architecture: x64, x86, arm64, amd64_x86, ... (win32/win64 aliases accepted)
arch = "x64"

# Visual Studio year or version, e.g. "2022" or "17.0" (default: latest)
# vsversion = "2022"

# Windows SDK version passed to vcvarsall.bat
# sdk = "10.0.22621.0"

# VC++ toolset version (-vcvars_ver)
# toolset = "14.29"

# Custom Visual Studio installation directory
# vspath = "D:\\\\VisualStudio"

uwp = false
spectre = false
'''

    with open(path, "w", encoding="utf-8") as f:
        f.write(example_config)

    return path


def validate_config(config: MsvcConfig) -> List[str]:
    """Validate an msvcenv configuration and return list of warnings"""
    warnings = []

    arch = normalize_arch(config.arch)
    if arch.lower() not in KNOWN_ARCHS:
        warnings.append(f"Unknown architecture: {config.arch}")

    if config.vsversion and not is_known_vsversion(config.vsversion):
        warnings.append(f"Unknown Visual Studio version: {config.vsversion}")

    if config.uwp and config.spectre:
        warnings.append("Spectre-mitigated libraries are not provided for UWP")

    if config.vspath and not Path(config.vspath).exists():
        warnings.append(f"Custom Visual Studio path does not exist: {config.vspath}")

    return warnings
