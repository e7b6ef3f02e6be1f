"""codeguide: coding-style guidance for language models, served over MCP."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("codeguide")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
