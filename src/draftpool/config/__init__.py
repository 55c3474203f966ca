"""Configuration helpers for season scoring tables."""

from .scoring import ScoringPreset, get_preset, iter_presets, preset_scoring

__all__ = [
    "ScoringPreset",
    "get_preset",
    "iter_presets",
    "preset_scoring",
]
