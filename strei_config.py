#!/usr/bin/env python3
"""Convenience entry point for the configuration CLI.

The implementation lives in `strei.cli`; this wrapper lets the tool run from
a source checkout without installing the package.
"""

from strei.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
