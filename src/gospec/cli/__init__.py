"""
CLI support: output mode configuration and machine-aware printing.
"""
from .config import CLIConfig
from .output import echo, get_console, print_error, print_json, print_table

__all__ = ["CLIConfig", "echo", "get_console", "print_error", "print_json", "print_table"]
