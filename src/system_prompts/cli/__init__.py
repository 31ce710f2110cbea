"""Command-line interface (``system-prompts`` console script)."""

from system_prompts.cli.main import build_parser, main

__all__ = ["build_parser", "main"]
