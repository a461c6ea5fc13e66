"""Shared helpers for the OpenIE CLI."""

from apps.cli.openie_cli.utils.async_wrapper import async_command

__all__ = ["async_command"]
