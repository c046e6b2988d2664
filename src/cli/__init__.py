"""CLI entrypoints for protoc-gen-go-cache-manager."""

from cli.app import main
from cli.exit_codes import ExitCode

__all__ = ["ExitCode", "main"]
