"""
Gas properties for a calorically perfect gas.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GasProperties:
    """Thermodynamic constants shared by every kernel for one run."""
    R: float = 287.0            # Specific gas constant [J/(kg·K)]
    cv: float = 717.5           # Specific heat at constant volume [J/(kg·K)]
    kappa: float = 1.4          # Heat capacity ratio used for sound speed

    def __post_init__(self):
        if self.R <= 0 or self.cv <= 0:
            raise ValueError(f"R and cv must be positive, got R={self.R}, cv={self.cv}")
        if self.kappa <= 1:
            raise ValueError(f"kappa must be greater than 1, got {self.kappa}")

    @property
    def gamma_minus_one(self) -> float:
        """R / cv, the factor relating internal energy and pressure."""
        return self.R / self.cv

    @property
    def cp(self) -> float:
        """Specific heat at constant pressure [J/(kg·K)]."""
        return self.cv + self.R
