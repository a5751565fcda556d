"""
msvcenv CLI
Set up the Microsoft Visual C++ developer environment without a Developer Command Prompt

Usage: msvcenv <command> [options]

Settings come from msvcenv.toml ([msvc] table) in the current directory or a
parent, overridden by INPUT_ARCH, INPUT_SDK, ... environment variables.
"""
import os
import subprocess
import sys
from pathlib import Path

from .config import load_config, validate_config, create_example_config
from .devcmd import setup_msvc_dev_cmd
from .errors import MsvcEnvError
from .locate import find_vcvarsall


def _load_config():
    config = load_config()
    for warning in validate_config(config):
        print(f"[WARN] {warning}")
    return config


def locate():
    """Print the path of the vcvarsall.bat that would be used"""
    config = _load_config()
    if sys.platform != "win32":
        print("[INFO] This is not a Windows environment, nothing to do")
        return 0
    print(find_vcvarsall(config.vsversion, config.vspath))
    return 0


def show_env():
    """Print the variables vcvarsall.bat sets, without touching this process"""
    config = _load_config()
    scratch = dict(os.environ)
    changes = setup_msvc_dev_cmd(config, env=scratch)
    for change in changes:
        print(f"{change.name}={change.value}")
    return 0


def run_command(args):
    """Set up the environment, then run a command in it"""
    if args and args[0] == "--":
        args = args[1:]
    if not args:
        print("Usage: msvcenv run -- COMMAND [ARGS...]")
        return 2

    config = _load_config()
    setup_msvc_dev_cmd(config, env=os.environ)
    print("$ ", " ".join(args))
    try:
        return subprocess.call(args)
    except OSError as e:
        print(f"[ERROR] Could not run {args[0]}: {e}")
        return 1


def main(argv=None):
    """Main entry point for msvcenv command with subcommands"""
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print_help()
        return 0

    subcommand = argv[0]
    try:
        if subcommand in ["init", "new"]:
            return init_config(argv[1:])
        elif subcommand == "locate":
            return locate()
        elif subcommand == "env":
            return show_env()
        elif subcommand == "run":
            return run_command(argv[1:])
        elif subcommand in ["help", "-h", "--help"]:
            print_help()
            return 0
        else:
            print(f"Unknown subcommand: {subcommand}")
            print_help()
            return 1
    except MsvcEnvError as e:
        print(f"[ERROR] {e}")
        return 1


def init_config(args):
    """Initialize a new msvcenv.toml configuration file"""
    output_path = None
    force = False

    i = 0
    while i < len(args):
        if args[i] in ["-o", "--output"]:
            if i + 1 < len(args):
                output_path = args[i + 1]
                i += 2
            else:
                print("Error: --output requires a path")
                return 1
        elif args[i] in ["-f", "--force"]:
            force = True
            i += 1
        elif args[i] in ["-h", "--help"]:
            print("""
msvcenv init - Create a new msvcenv.toml configuration file

Usage: msvcenv init [options]

Options:
  -o, --output PATH    Output path for the configuration file (default: msvcenv.toml)
  -f, --force          Overwrite existing file
  -h, --help           Show this help message
""")
            return 0
        else:
            print(f"Unknown option: {args[i]}")
            print("Use 'msvcenv init --help' for usage information")
            return 1

    if output_path is None:
        output_path = Path.cwd() / "msvcenv.toml"
    else:
        output_path = Path(output_path)

    if output_path.exists() and not force:
        print(f"Configuration file already exists: {output_path}")
        print("Use --force to overwrite or specify a different path with --output")
        return 1

    created_path = create_example_config(output_path)
    print(f"[OK] Created configuration file: {created_path}")
    return 0


def print_help():
    """Print help information for msvcenv command"""
    help_text = """
msvcenv - Microsoft Visual C++ developer environment setup

Usage: msvcenv <command> [options]

Commands:
  init, new      Create a new msvcenv.toml configuration file
  locate         Print the path of vcvarsall.bat
  env            Print the variables set by vcvarsall.bat (NAME=VALUE)
  run -- CMD     Run CMD inside the developer environment
  help           Show this help message

Configuration:
  msvcenv looks for msvcenv.toml in the current directory or its parents.
  INPUT_ARCH, INPUT_VSPATH, INPUT_SDK, INPUT_TOOLSET, INPUT_UWP,
  INPUT_SPECTRE and INPUT_VSVERSION override the file when set.

Examples:
  msvcenv init
  msvcenv env
  msvcenv run -- cl /nologo /EHsc main.cpp

On hosts other than Windows the environment is left unchanged and
locate and env only report that there is nothing to do.
"""
    print(help_text)


if __name__ == "__main__":
    sys.exit(main())
