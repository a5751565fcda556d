#!/usr/bin/env python3
"""
Locate vcvarsall.bat

Probes, in order: vswhere.exe, the standard Visual Studio installation
directories (newest year first), a user supplied installation directory and
finally the Visual C++ 2015 Build Tools location.
"""

import os
from pathlib import PureWindowsPath
from typing import Callable, List, Mapping, Optional

from .errors import MsvcNotFoundError
from .runner import CommandRunner, SubprocessRunner
from .versions import vs_version_to_year, vswhere_version_range


EDITIONS = ["Enterprise", "Professional", "Community", "BuildTools"]
YEARS = ["2022", "2019", "2017"]

VCVARSALL_RELPATH = PureWindowsPath("VC", "Auxiliary", "Build", "vcvarsall.bat")
VSWHERE_RELPATH = PureWindowsPath("Microsoft Visual Studio", "Installer", "vswhere.exe")
VS2015_RELPATH = PureWindowsPath("Microsoft Visual C++ Build Tools", "vcbuildtools.bat")

DEFAULT_PROGRAM_FILES_X86 = r"C:\Program Files (x86)"
DEFAULT_PROGRAM_FILES = r"C:\Program Files"


def program_files_x86(environ: Optional[Mapping[str, str]] = None) -> str:
    if environ is None:
        environ = os.environ
    return environ.get("ProgramFiles(x86)") or DEFAULT_PROGRAM_FILES_X86


def program_files_dirs(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Installation roots to probe, 32-bit Program Files first"""
    if environ is None:
        environ = os.environ
    return [
        program_files_x86(environ),
        environ.get("ProgramFiles") or DEFAULT_PROGRAM_FILES,
    ]


def vswhere_command(exists: Callable[[str], bool], environ: Optional[Mapping[str, str]] = None) -> str:
    """Path to vswhere.exe in its standard location, or the bare name to use PATH"""
    candidate = str(PureWindowsPath(program_files_x86(environ)) / VSWHERE_RELPATH)
    if exists(candidate):
        return f'"{candidate}"'
    return "vswhere"


def find_with_vswhere(relpath: PureWindowsPath, version_pattern: str,
                      runner: CommandRunner, exists: Callable[[str], bool],
                      environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Ask vswhere for an installation root and join relpath onto it.

    Returns None (after a warning) when vswhere is missing or fails.
    """
    cmd = f"{vswhere_command(exists, environ)} -products * {version_pattern} -prerelease -property installationPath"
    try:
        result = runner.run(cmd)
    except OSError as e:
        print(f"[WARN] vswhere failed: {e}")
        return None

    if result.returncode != 0:
        print(f"[WARN] vswhere failed with exit code {result.returncode}")
        return None

    # With a version range several installations may match; take the first
    installations = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    if not installations:
        print("[WARN] vswhere did not report any installation")
        return None
    return str(PureWindowsPath(installations[0]) / relpath)


def standard_locations(vsversion: Optional[str] = None,
                       environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Standard vcvarsall.bat locations, from the latest year to the oldest"""
    years = [vs_version_to_year(vsversion)] if vsversion else YEARS
    candidates = []
    for prog_files in program_files_dirs(environ):
        for year in years:
            for edition in EDITIONS:
                root = PureWindowsPath(prog_files) / "Microsoft Visual Studio" / year / edition
                candidates.append(str(root / VCVARSALL_RELPATH))
    return candidates


def find_vcvarsall(vsversion: Optional[str] = None,
                   vspath: Optional[str] = None,
                   runner: Optional[CommandRunner] = None,
                   exists: Optional[Callable[[str], bool]] = None,
                   environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the path of the vcvarsall.bat to use.

    Args:
        vsversion: Visual Studio year ("2019") or version ("16.0", "16.5")
        vspath: custom Visual Studio installation directory
        runner: CommandRunner used to invoke vswhere
        exists: predicate telling whether a file exists
        environ: mapping providing ProgramFiles / ProgramFiles(x86)

    Raises:
        MsvcNotFoundError: if no candidate exists on disk
    """
    if runner is None:
        runner = SubprocessRunner()
    if exists is None:
        exists = os.path.isfile

    version_pattern = vswhere_version_range(vsversion)

    path = find_with_vswhere(VCVARSALL_RELPATH, version_pattern, runner, exists, environ)
    if path and exists(path):
        print(f"[OK] Found with vswhere: {path}")
        return path
    print("[INFO] Not found with vswhere")

    for path in standard_locations(vsversion, environ):
        print(f"[INFO] Trying standard location: {path}")
        if exists(path):
            print(f"[OK] Found standard location: {path}")
            return path
    print("[INFO] Not found in standard locations")

    if vspath:
        path = str(PureWindowsPath(vspath) / VCVARSALL_RELPATH)
        print(f"[INFO] Trying custom location: {path}")
        if exists(path):
            print(f"[OK] Found custom location: {path}")
            return path
        print("[INFO] Not found in custom location")

    # Visual C++ 2015 Build Tools ship a different script
    path = str(PureWindowsPath(program_files_x86(environ)) / VS2015_RELPATH)
    if exists(path):
        print(f"[OK] Found VS 2015: {path}")
        return path
    print(f"[INFO] Not found in VS 2015 location: {path}")

    raise MsvcNotFoundError("Microsoft Visual Studio not found")
