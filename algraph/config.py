"""Configuration classes for algraph algorithms."""

import math
from dataclasses import dataclass


@dataclass
class MinCutConfig:
    """Configuration for the randomized minimum-cut estimator."""

    # Scales the n^2 * ln(n) trial count
    trial_multiplier: float = 1.0

    # Lower bound on the number of contraction trials
    min_trials: int = 1

    # Reference run used to extrapolate the expected duration:
    # a 200-vertex graph took 23 minutes.
    benchmark_vertices: int = 200
    benchmark_seconds: float = 23 * 60.0

    def trial_count(self, vertex_count: int) -> int:
        """Return the number of contraction trials for ``vertex_count`` vertices.

        Uses ``round(multiplier * n^2 * ln(n))``, clamped to ``min_trials``.

        Raises:
            ValueError: If ``trial_multiplier`` is negative or ``min_trials`` is
                below 1.
        """
        if self.trial_multiplier < 0:
            raise ValueError(
                f"trial_multiplier must be non-negative, got {self.trial_multiplier}"
            )
        if self.min_trials < 1:
            raise ValueError(f"min_trials must be at least 1, got {self.min_trials}")
        if vertex_count < 2:
            return self.min_trials
        trials = math.floor(
            self.trial_multiplier * vertex_count**2 * math.log(vertex_count) + 0.5
        )
        return max(self.min_trials, int(trials))

    def estimate_seconds(self, trials: int) -> float:
        """Extrapolate the duration of ``trials`` trials from the benchmark run."""
        benchmark_trials = self.benchmark_vertices**2 * math.log(
            self.benchmark_vertices
        )
        return self.benchmark_seconds * trials / benchmark_trials


# Global configuration instance
MIN_CUT_CONFIG = MinCutConfig()
