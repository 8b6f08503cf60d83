"""Maternal Wellness: screening assessment engine for perinatal mental health."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("maternal-wellness")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
__all__ = ["__version__"]
