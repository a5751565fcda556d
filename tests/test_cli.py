"""Tests for the msvcenv command line."""

import sys

import pytest

from msvcenv.cli import main


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ["ARCH", "VSPATH", "SDK", "TOOLSET", "UWP", "SPECTRE", "VSVERSION"]:
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    return tmp_path


def test_help(capsys):
    assert main(["help"]) == 0
    assert "Usage: msvcenv" in capsys.readouterr().out
    assert main([]) == 0


def test_unknown_subcommand(capsys):
    assert main(["frobnicate"]) == 1
    assert "Unknown subcommand: frobnicate" in capsys.readouterr().out


def test_init_creates_config(project, capsys):
    assert main(["init"]) == 0
    assert (project / "msvcenv.toml").exists()
    # A second init refuses to overwrite without --force
    assert main(["init"]) == 1
    assert main(["init", "--force"]) == 0


def test_init_output_path(project):
    assert main(["init", "-o", "sub.toml"]) == 0
    assert (project / "sub.toml").exists()
    assert main(["init", "--output"]) == 1
    assert main(["init", "--bogus"]) == 1


def test_config_error_reported(project, capsys):
    (project / "msvcenv.toml").write_text('[msvc]\nuwp = "maybe"\n', encoding="utf-8")
    assert main(["env"]) == 1
    assert "[ERROR]" in capsys.readouterr().out


@pytest.mark.skipif(sys.platform == "win32", reason="sets up a real MSVC environment on Windows")
def test_env_is_noop_off_windows(project, capsys):
    assert main(["env"]) == 0
    assert "not a Windows environment" in capsys.readouterr().out


@pytest.mark.skipif(sys.platform == "win32", reason="sets up a real MSVC environment on Windows")
def test_run_returns_exit_code(project):
    assert main(["run", "--", sys.executable, "-c", "import sys; sys.exit(3)"]) == 3


def test_run_without_command(project, capsys):
    assert main(["run", "--"]) == 2
    assert "Usage: msvcenv run" in capsys.readouterr().out


@pytest.mark.skipif(sys.platform == "win32", reason="locates a real Visual Studio on Windows")
def test_locate_is_noop_off_windows(project, capsys):
    assert main(["locate"]) == 0
    out = capsys.readouterr().out
    assert "not a Windows environment" in out
    assert "vswhere" not in out
    assert "[ERROR]" not in out


@pytest.mark.skipif(sys.platform == "win32", reason="sets up a real MSVC environment on Windows")
def test_run_missing_command(project, capsys):
    assert main(["run", "--", "msvcenv-no-such-command-xyz"]) == 1
    assert "[ERROR] Could not run msvcenv-no-such-command-xyz" in capsys.readouterr().out
