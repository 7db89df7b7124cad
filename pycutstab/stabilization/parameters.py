from dataclasses import dataclass, replace

import numpy as np

# guards the upper threshold against support sizes that equal one reference
# element up to round-off
_SQRT_EPS = float(np.sqrt(np.finfo(float).eps))


@dataclass
class StabilizationParameters:
    """Settings that govern a *single* basis-stabilisation pass."""

    tolerance: float = 1e-8                 # ‖x − x(ξ)‖ threshold of the point search
    max_iter: int = 10                      # hard cap on Newton iterations per point
    upper_threshold_factor: float = 1.0     # × reference-element measure
    lower_threshold: float = float(np.finfo(float).tiny)  # below: DoF is simply outside

    def __post_init__(self):
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter}.")
        if not self.tolerance > 0.0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}.")
        if self.lower_threshold < 0.0:
            raise ValueError(f"lower_threshold must be non-negative, got {self.lower_threshold}.")

    def upper_threshold(self, reference_measure: float) -> float:
        return self.upper_threshold_factor * reference_measure - _SQRT_EPS

    def with_overrides(self, **overrides) -> "StabilizationParameters":
        """Copy with the non-None entries of ``overrides`` replaced."""
        given = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **given) if given else self
