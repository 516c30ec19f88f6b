"""
devflow package

This package implements devflow as a CLI-first developer-workflow runner.

Key responsibilities are split across modules:
- `config.py`: load the config file into an immutable `Config`
- `commands.py`: render tool command lines from Jinja2 templates
- `runner.py`: launch external tools with inherited standard streams
- `releases.py`: latest-release lookup for the update check (HTTP)
- `confirm.py`: one-shot yes/no prompt before deleting the working copy
- `features.py`: one step function per feature flag
- `pipeline.py`: run enabled steps in fixed order, halting on first failure
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
