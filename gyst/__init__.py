"""AI-powered git commit message generator."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gyst")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
