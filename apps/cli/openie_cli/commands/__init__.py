"""OpenIE CLI commands package.

- serve: Run the HTTP extraction server
- extract: Run the configured extraction engine on text from the command line
"""

from __future__ import annotations

__all__ = ["extract", "serve"]
