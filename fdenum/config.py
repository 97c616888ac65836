"""Configuration classes for fdenum components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EnumerationConfig:
    """Configuration for enumeration sessions and their drivers."""

    # Number of solutions the CLI emits when no --limit is given
    default_limit: int = 1000

    # Emit a DEBUG progress line every this many solutions (0 disables)
    progress_log_interval: int = 10_000

    # Maximum rows rendered by the CLI table format before eliding
    max_table_rows: int = 50

    def effective_limit(self, requested: Optional[int]) -> Optional[int]:
        """Resolve a requested limit.

        ``None`` falls back to ``default_limit``; zero or a negative value
        means "no limit" and returns ``None``.
        """
        if requested is None:
            return self.default_limit
        if requested <= 0:
            return None
        return requested


# Global configuration instance
ENUMERATION_CONFIG = EnumerationConfig()
