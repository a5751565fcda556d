#!/usr/bin/env python3
"""Visual Studio year and version lookups."""

from typing import Optional

# Product year -> internal version number
VS_YEAR_VERSION = {
    "2022": "17.0",
    "2019": "16.0",
    "2017": "15.0",
    "2015": "14.0",
    "2013": "12.0",
}


def vs_year_to_version(vsversion: Optional[str]) -> Optional[str]:
    """Map a product year such as "2019" to its version ("16.0").

    Anything that is not a known year is returned unchanged, since it may
    already be a version number like "16.5".
    """
    if vsversion is None:
        return None
    return VS_YEAR_VERSION.get(vsversion, vsversion)


def vs_version_to_year(vsversion: Optional[str]) -> Optional[str]:
    """Map a version such as "16.0" back to its product year ("2019")."""
    if vsversion is None:
        return None
    for year, version in VS_YEAR_VERSION.items():
        if version == vsversion:
            return year
    return vsversion


def vswhere_version_range(vsversion: Optional[str]) -> str:
    """Build the vswhere version filter for an optional year/version specifier."""
    version = vs_year_to_version(vsversion)
    if not version:
        return "-latest"
    major = version.split(".")[0]
    return f'-version "{version},{major}.9"'


def is_known_vsversion(vsversion: str) -> bool:
    """True for a known year, a known version, or a version within a known major."""
    if vsversion in VS_YEAR_VERSION or vsversion in VS_YEAR_VERSION.values():
        return True
    major = vsversion.split(".")[0]
    return any(version.split(".")[0] == major for version in VS_YEAR_VERSION.values())
