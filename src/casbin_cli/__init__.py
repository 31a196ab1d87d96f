"""
casbin-cli: command-line front end for Casbin policy enforcement.

This package provides the ``casbin`` command and the version-resolution
machinery behind ``casbin --version``.
"""

# Version is read from package metadata (pyproject.toml is the single source of truth)
try:
    from importlib.metadata import version

    __version__ = version("casbin-cli")
except Exception:
    __version__ = "0.0.0+unknown"
