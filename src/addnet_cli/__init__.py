"""CLI demo and delta reporter for addition nets."""

from addnet_cli.demo import format_delta_line, main, print_delta, run_demo

__all__ = ["format_delta_line", "main", "print_delta", "run_demo"]
