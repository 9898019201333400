"""UFDL client version."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ufdl-client")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
