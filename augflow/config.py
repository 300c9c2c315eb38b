"""Configuration classes for augflow components."""

from dataclasses import dataclass
from typing import Optional

from augflow.errors import InvalidArgumentError


@dataclass
class SolverConfig:
    """Defaults applied when a solver is created without explicit options."""

    # Augmenting-path search used when no strategy is given ("dfs" or "bfs")
    default_strategy: str = "dfs"

    # Upper bound on augmenting rounds per solve; None means unbounded
    max_rounds: Optional[int] = None

    def resolve_max_rounds(self, override: Optional[int] = None) -> Optional[int]:
        """Return the round limit to use, preferring an explicit override."""
        limit = self.max_rounds if override is None else override
        if limit is not None and limit < 1:
            raise InvalidArgumentError(f"max_rounds must be positive, got {limit}")
        return limit


# Global configuration instance
SOLVER_CONFIG = SolverConfig()
