"""Matching thresholds, optionally loaded from a YAML file."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import yaml

from .answers import MatchOptions


@dataclass
class MatchConfig:
    auto_match_threshold: int = 70
    review_threshold: int = 40
    allow_partial_match: bool = True
    min_match_percentage: float = 70

    def __post_init__(self):
        for name in ("auto_match_threshold", "review_threshold", "min_match_percentage"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")
        if self.review_threshold > self.auto_match_threshold:
            raise ValueError("review_threshold cannot exceed auto_match_threshold")

    def answer_options(self, alternatives: Optional[Sequence[str]] = None) -> MatchOptions:
        return MatchOptions(
            allow_partial_match=self.allow_partial_match,
            min_match_percentage=self.min_match_percentage,
            acceptable_alternatives=tuple(alternatives or ()),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> MatchConfig:
    """Load a MatchConfig from YAML.

    Args:
        path: YAML file. If omitted, defaults are returned.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping or a value is out of range.
    """
    if path is None:
        return MatchConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")

    defaults = MatchConfig()
    try:
        return MatchConfig(
            auto_match_threshold=int(data.get("auto_match_threshold", defaults.auto_match_threshold)),
            review_threshold=int(data.get("review_threshold", defaults.review_threshold)),
            allow_partial_match=bool(data.get("allow_partial_match", defaults.allow_partial_match)),
            min_match_percentage=float(data.get("min_match_percentage", defaults.min_match_percentage)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid config value in {config_path}: {exc}") from exc
