"""
CLI Configuration

Centralized configuration for the gospec CLI subsystem.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Machine mode (plain output for scripts and pipes)
    _machine_mode: Optional[bool] = None
    _verbose: bool = False

    @classmethod
    def set_machine_mode(cls, enabled: Optional[bool]) -> None:
        """Set machine mode (pure data output, no presentation)"""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default. Returns False only if human mode is
        explicitly requested by flag or GOSPEC_HUMAN_MODE.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("GOSPEC_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True

    @classmethod
    def set_verbose(cls, enabled: bool) -> None:
        cls._verbose = enabled

    @classmethod
    def is_verbose(cls) -> bool:
        return cls._verbose
