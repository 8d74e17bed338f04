from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


CONFIG_FILE = Path(__file__).parent / "munkres_config.yaml"


@dataclass
class MunkresConfig:
    pad_value: float = 0
    verbose: bool = False
    backend: str = "munkres"


@dataclass
class VerifyConfig:
    num_trials: int = 200
    rows: int = 3
    cols: int = 6
    dtype: str = "float64"
    seed: int = 0


@dataclass
class SolverConfig:
    munkres: MunkresConfig = field(default_factory=MunkresConfig)
    verify: VerifyConfig = field(default_factory=VerifyConfig)


def _build_section(cls, params, section):
    params = params or {}
    if not isinstance(params, dict):
        raise ValueError(f"config section '{section}' must be a mapping, got: {type(params)}!")
    known = {f.name for f in fields(cls)}
    unknown = set(params) - known
    if unknown:
        raise ValueError(f"unknown key(s) in config section '{section}': {sorted(unknown)}!")
    return cls(**params)


def load_config(path=None):
    """
    Load solver settings from a yaml file, missing keys keep their defaults.

    Args:
        path (str or Path):
            yaml file with optional sections 'Munkres' and 'Verify'.
            Default: munkres_config.yaml next to this module.
    """
    path = CONFIG_FILE if path is None else Path(path)
    with open(path, 'r') as file:
        config = yaml.safe_load(file) or {}

    return SolverConfig(
        munkres=_build_section(MunkresConfig, config.get('Munkres'), 'Munkres'),
        verify=_build_section(VerifyConfig, config.get('Verify'), 'Verify'),
    )
