"""OpenIE application shells.

This package contains thin I/O layers for different interfaces:
- api: FastAPI HTTP service
- cli: Typer CLI
"""
