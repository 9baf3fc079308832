"""CLI module for stellare_types.

Provides the `stellare-types` command for inspecting dimension tags,
converting values between tags, and checking interop capabilities.
"""

from stellare_types.cli.main import app

__all__ = ["app"]
