# -*- coding: utf-8 -*-
"""Configuration management for the Fuzzy VIKOR package."""

import numbers
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Dict, Optional
from enum import Enum


class ConfigurationError(ValueError):
    """Invalid problem configuration (counts, v, label or flag lengths)."""


@dataclass
class VIKORConfig:
    """Fuzzy VIKOR method configuration."""
    v: float = 0.5
    v_sensitivity: List[float] = field(default_factory=lambda: [0.0, 0.25, 0.5, 0.75, 1.0])
    max_count: int = 20
    alternative_prefix: str = "Alternative"
    criterion_prefix: str = "Criterion"
    expert_prefix: str = "Expert"
    # Used as resize fill when a term set is empty
    fallback_criteria_term: str = "M"
    fallback_alternative_term: str = "F"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[Path] = None
    json_file: Optional[Path] = None
    console: bool = True


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    vikor: VIKORConfig = field(default_factory=VIKORConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict:
        def _to_dict(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: _to_dict(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, list):
                return [_to_dict(i) for i in obj]
            elif isinstance(obj, dict):
                return {k: _to_dict(v) for k, v in obj.items()}
            return obj
        return _to_dict(self)

    def summary(self) -> str:
        return f"""
{'='*60}
CONFIGURATION SUMMARY - Fuzzy VIKOR
{'='*60}

METHOD:
  Default v: {self.vikor.v}
  v sensitivity grid: {self.vikor.v_sensitivity}
  Maximum alternatives/criteria/experts: {self.vikor.max_count}

LOGGING:
  Level: {self.logging.level}
  Log file: {self.logging.log_file}
  JSON log: {self.logging.json_file}
{'='*60}
"""


@dataclass(frozen=True)
class ProblemConfig:
    """
    Configuration of a single decision problem.

    Attributes
    ----------
    n_alternatives, n_criteria, n_experts : int
        Problem dimensions, each in 1..max_count.
    v : float
        Strategy weight in [0, 1]; 0.5 is consensus.
    benefit_cost : tuple of bool
        One flag per criterion, True for benefit (maximize), False for cost.
    alternative_labels, criteria_labels, expert_labels : tuple of str
        Display labels, one per alternative/criterion/expert.
    """
    n_alternatives: int
    n_criteria: int
    n_experts: int
    v: float = 0.5
    benefit_cost: tuple = ()
    alternative_labels: tuple = ()
    criteria_labels: tuple = ()
    expert_labels: tuple = ()

    @classmethod
    def default(cls,
                n_alternatives: int,
                n_criteria: int,
                n_experts: int,
                v: Optional[float] = None,
                config: Optional[Config] = None) -> 'ProblemConfig':
        """Problem with synthesized labels and all-benefit criteria."""
        vikor = (config or get_config()).vikor
        return cls(
            n_alternatives=n_alternatives,
            n_criteria=n_criteria,
            n_experts=n_experts,
            v=vikor.v if v is None else v,
            benefit_cost=tuple([True] * n_criteria),
            alternative_labels=tuple(f"{vikor.alternative_prefix} {i + 1}" for i in range(n_alternatives)),
            criteria_labels=tuple(f"{vikor.criterion_prefix} {i + 1}" for i in range(n_criteria)),
            expert_labels=tuple(f"{vikor.expert_prefix} {i + 1}" for i in range(n_experts)),
        )

    def with_changes(self, **changes) -> 'ProblemConfig':
        return replace(self, **changes)

    def validate(self, max_count: Optional[int] = None) -> 'ProblemConfig':
        """
        Check counts, v and list lengths.

        Raises
        ------
        ConfigurationError
            On the first violated constraint.
        """
        if max_count is None:
            max_count = get_config().vikor.max_count

        for name in ('n_alternatives', 'n_criteria', 'n_experts'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if not 1 <= value <= max_count:
                raise ConfigurationError(f"{name} must be between 1 and {max_count}, got {value}")

        if isinstance(self.v, bool) or not isinstance(self.v, numbers.Real):
            raise ConfigurationError(f"v must be a real number, got {self.v!r}")
        if not 0 <= self.v <= 1:
            raise ConfigurationError(f"v must be between 0 and 1, got {self.v}")

        expected = {
            'benefit_cost': self.n_criteria,
            'alternative_labels': self.n_alternatives,
            'criteria_labels': self.n_criteria,
            'expert_labels': self.n_experts,
        }
        for name, length in expected.items():
            actual = len(getattr(self, name))
            if actual != length:
                raise ConfigurationError(f"{name} has {actual} entries, expected {length}")

        return self


_config: Optional[Config] = None

def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config

def get_default_config() -> Config:
    """Get a fresh default configuration."""
    return Config()

def set_config(config: Config) -> None:
    global _config
    _config = config

def reset_config() -> None:
    global _config
    _config = Config()
