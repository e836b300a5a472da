"""Configuration for the DupSlasher near-duplicate detector.

Settings come from keyword arguments, a YAML mapping or CLI flags. All of
them are validated once, when :class:`DedupConfig` is built, so that no
document is ever processed with undefined arithmetic (e.g. modulus by zero).
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml  # type: ignore

logger = logging.getLogger(__name__)

# 262144 is the HashingTF default in Spark; should be a power of 2.
DEFAULT_NUM_FEATURES = 262144
DEFAULT_SEED = 1


class ConfigurationError(ValueError):
    """Raised when detector settings are out of range or malformed."""


def _require_int(name: str, value: Any, minimum: int) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class DedupConfig:
    """Validated detector settings.

    Args:
        ngrams: Token-window width used for shingling.
        num_hashes: Signature length (estimator precision).
        threshold: Pairs with estimated distance strictly below this value
            are reported.
        num_features: Modulus of the feature hash space.
        seed: Key for the hash family generator.
    """

    ngrams: int = 3
    num_hashes: int = 13
    threshold: float = 0.3
    num_features: int = DEFAULT_NUM_FEATURES
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        _require_int("ngrams", self.ngrams, 1)
        _require_int("num_hashes", self.num_hashes, 1)
        _require_int("num_features", self.num_features, 1)
        _require_int("seed", self.seed, 0)

        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise ConfigurationError(f"threshold must be a number, got {self.threshold!r}")
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"threshold must lie in [0, 1], got {self.threshold}")
        object.__setattr__(self, "threshold", float(self.threshold))

        if self.num_features & (self.num_features - 1):
            logger.warning("num_features=%d is not a power of two", self.num_features)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DedupConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**dict(data))

    def replace(self, **overrides: Any) -> "DedupConfig":
        """Return a copy with *overrides* applied; ``None`` values are ignored."""
        merged = self.to_dict()
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return type(self).from_mapping(merged)


def read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML file that must contain a mapping at the top level."""
    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(cfg_path)
    with cfg_path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{cfg_path}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{cfg_path}: expected a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path], section: Optional[str] = None) -> DedupConfig:
    """Load :class:`DedupConfig` from a YAML file.

    When *section* is given, detector options are read from that nested
    mapping instead of the top level.
    """
    data = read_yaml(path)
    if section is not None:
        data = data.get(section) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: section {section!r} must be a mapping")
    config = DedupConfig.from_mapping(data)
    logger.debug("Loaded configuration from %s: %s", path, config)
    return config
