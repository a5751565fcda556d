"""Tests for msvcenv.toml loading, INPUT_* overrides and architecture aliases."""

import pytest

from msvcenv.config import (
    MsvcConfig, create_example_config, load_config, normalize_arch, parse_bool,
    validate_config,
)
from msvcenv.errors import ConfigError


@pytest.mark.parametrize("alias,expected", [
    ("win32", "x86"),
    ("WIN32", "x86"),
    ("Win64", "x64"),
    ("x86_64", "x64"),
    ("X86-64", "x64"),
])
def test_arch_aliases(alias, expected):
    assert normalize_arch(alias) == expected


@pytest.mark.parametrize("arch", ["x86", "x64", "arm64", "amd64_x86", "ARM64"])
def test_canonical_arch_unchanged(arch):
    assert normalize_arch(arch) == arch
    assert normalize_arch(normalize_arch(arch)) == arch


def test_normalize_is_idempotent_for_aliases():
    for alias in ["win32", "win64", "x86_64", "x86-64"]:
        once = normalize_arch(alias)
        assert normalize_arch(once) == once


def test_parse_bool():
    assert parse_bool("uwp", "TRUE") is True
    assert parse_bool("uwp", "false") is False
    assert parse_bool("uwp", "") is False
    assert parse_bool("uwp", True) is True
    with pytest.raises(ConfigError):
        parse_bool("uwp", "maybe")


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(environ={})
    assert config == MsvcConfig()
    assert config.arch == "x64"


def test_load_from_file(tmp_path):
    path = tmp_path / "msvcenv.toml"
    path.write_text(
        '[msvc]\narch = "win32"\nvsversion = 2019\nsdk = "10.0.19041.0"\nspectre = true\n',
        encoding="utf-8",
    )
    config = load_config(path, environ={})
    assert config.arch == "win32"
    assert config.vsversion == "2019"
    assert config.sdk == "10.0.19041.0"
    assert config.spectre is True
    assert config.uwp is False


def test_file_found_in_parent(tmp_path, monkeypatch):
    (tmp_path / "msvcenv.toml").write_text('[msvc]\narch = "arm64"\n', encoding="utf-8")
    sub = tmp_path / "a" / "b"
    sub.mkdir(parents=True)
    monkeypatch.chdir(sub)
    assert load_config(environ={}).arch == "arm64"


def test_input_overrides(tmp_path):
    path = tmp_path / "msvcenv.toml"
    path.write_text('[msvc]\narch = "x86"\ntoolset = "14.29"\n', encoding="utf-8")
    environ = {"INPUT_ARCH": "arm64", "INPUT_UWP": "true", "INPUT_TOOLSET": "  ", "INPUT_SDK": "10.0.1"}
    config = load_config(path, environ=environ)
    assert config.arch == "arm64"
    assert config.uwp is True
    # Blank inputs do not override
    assert config.toolset == "14.29"
    assert config.sdk == "10.0.1"


def test_invalid_bool_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError):
        load_config(environ={"INPUT_SPECTRE": "sometimes"})


def test_unknown_option(tmp_path):
    path = tmp_path / "msvcenv.toml"
    path.write_text('[msvc]\narchitecture = "x64"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml", environ={})


def test_example_config_loads(tmp_path):
    path = create_example_config(tmp_path / "msvcenv.toml")
    config = load_config(path, environ={})
    assert config == MsvcConfig(arch="x64")
    assert validate_config(config) == []


def test_validate_config():
    warnings = validate_config(MsvcConfig(arch="sparc", vsversion="2005", uwp=True, spectre=True))
    assert any("architecture" in w for w in warnings)
    assert any("Visual Studio version" in w for w in warnings)
    assert any("UWP" in w for w in warnings)
    assert validate_config(MsvcConfig(arch="Win64", vsversion="2022")) == []


def test_float_vsversion_rejected(tmp_path):
    path = tmp_path / "msvcenv.toml"
    path.write_text('[msvc]\nvsversion = 16.10\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="quote"):
        load_config(path, environ={})


def test_quoted_vsversion_kept(tmp_path):
    path = tmp_path / "msvcenv.toml"
    path.write_text('[msvc]\nvsversion = "16.10"\n', encoding="utf-8")
    assert load_config(path, environ={}).vsversion == "16.10"
