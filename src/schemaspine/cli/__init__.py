"""
CLI layer for schemaspine.

Terminal transport only: argument parsing, coloured output and tables.
Resolution itself lives in :mod:`schemaspine.resolver`.

Entry point::

    schemaspine --help
"""

from schemaspine.cli.app import app

__all__ = ["app"]
