"""
Run configuration: gas constants, time step, boundary markers and policies.

Configurations round-trip through JSON; nested sections are given as dicts
and promoted to their dataclasses on construction.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .gas import GasProperties
from .profile import FarFieldProfile
from .interface_flux import NUMERICAL_FLUXES

logger = logging.getLogger(__name__)

SOLID_WALL_POLICIES = ('pressure', 'mirror')


class ConfigJSONEncoder(json.JSONEncoder):
    """Encodes dataclasses and far-field profiles."""

    def default(self, o):
        if isinstance(o, FarFieldProfile):
            return o.to_dict()
        if dataclasses.is_dataclass(o):
            return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        return super().default(o)


@dataclass
class SolverConfig:
    """Configuration for the Euler weak forms."""
    tau: float = 1e-3                     # Time step size
    integration_order: int = 20           # Fixed quadrature order for all forms
    solid_wall_marker: int = 1
    inlet_outlet_marker: int = 2
    solid_wall_policy: str = 'pressure'   # Options: 'pressure', 'mirror'
    numerical_flux: str = 'hllc'          # Options: 'hllc', 'rusanov'
    gas: GasProperties = field(default_factory=GasProperties)
    far_field: FarFieldProfile = field(default_factory=FarFieldProfile)

    def __post_init__(self):
        if isinstance(self.gas, dict):
            self.gas = GasProperties(**self.gas)
        if isinstance(self.far_field, dict):
            defaults = FarFieldProfile().to_dict()
            unknown = set(self.far_field) - set(defaults)
            if unknown:
                raise ValueError(f"Unknown far-field keys: {', '.join(sorted(unknown))}. "
                                 f"Options: {', '.join(defaults)}")
            values = {**defaults, **self.far_field}
            self.far_field = FarFieldProfile.constant(
                values['density'], values['density_vel_x'],
                values['density_vel_y'], values['energy'])

        if self.tau <= 0:
            raise ValueError(f"Time step tau must be positive, got {self.tau}")
        if self.integration_order < 0:
            raise ValueError(f"Integration order must be non-negative, got {self.integration_order}")
        if self.solid_wall_marker == self.inlet_outlet_marker:
            raise ValueError("Solid wall and inlet/outlet markers must differ")
        if self.solid_wall_policy not in SOLID_WALL_POLICIES:
            raise ValueError(f"Unknown solid wall policy: {self.solid_wall_policy}. "
                             f"Options: {', '.join(SOLID_WALL_POLICIES)}")
        if self.numerical_flux not in NUMERICAL_FLUXES:
            raise ValueError(f"Unknown numerical flux: {self.numerical_flux}. "
                             f"Options: {', '.join(sorted(NUMERICAL_FLUXES))}")

    def to_json(self, **kwargs) -> str:
        """Serialize to a JSON document."""
        return json.dumps(self, cls=ConfigJSONEncoder, **kwargs)

    @classmethod
    def from_json(cls, text: str) -> 'SolverConfig':
        """Parse a JSON document; missing keys take their defaults."""
        return cls(**json.loads(text))


def load_config(path) -> SolverConfig:
    """Read a :class:`SolverConfig` from a JSON file."""
    path = Path(path)
    config = SolverConfig.from_json(path.read_text())
    logger.info("Loaded configuration from %s (tau=%g, wall policy=%s, flux=%s)",
                path, config.tau, config.solid_wall_policy, config.numerical_flux)
    return config
