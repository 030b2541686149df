"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from rich.console import Console

from actlog.core.classify import Rule


@dataclass
class CLIState:
    """CLI runtime options, loaded configuration and active rules."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    rules: List[Rule]
    min_confidence: float

    def debug(self, message: str) -> None:
        """Log a diagnostic line when running with --verbose."""
        if self.verbose:
            self.console.log(message)
