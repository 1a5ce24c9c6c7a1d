"""CLI command modules."""

from dagweave.cli.commands import config_cmd, graph_cmd

__all__ = ["config_cmd", "graph_cmd"]
