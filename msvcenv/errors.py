"""Exceptions raised by msvcenv."""


class MsvcEnvError(Exception):
    """Base class for msvcenv failures"""


class MsvcNotFoundError(MsvcEnvError, FileNotFoundError):
    """No Visual Studio installation could be located"""


class VcvarsScriptError(MsvcEnvError, RuntimeError):
    """vcvarsall.bat reported an error or produced unusable output"""


class ConfigError(MsvcEnvError, ValueError):
    """Invalid msvcenv configuration value"""
