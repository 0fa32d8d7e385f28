"""linecmd — embeddable single-line command interpreter.

Lines are split into a command name and parameters, parameters are bound
against a typed schema, and brace-delimited sub-commands are executed and
substituted before binding.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("linecmd")
except PackageNotFoundError:
    __version__ = "0.0.0"
