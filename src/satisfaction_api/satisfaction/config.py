"""Tunable constants of the satisfaction heuristic."""

from __future__ import annotations

from pydantic import BaseModel, Field

from satisfaction_api.config import Settings, get_settings

DEFAULT_POSITIVE_WEIGHTS: dict[str, float] = {"happiness": 1.0, "surprise": 0.4}
DEFAULT_NEGATIVE_WEIGHTS: dict[str, float] = {
    "sadness": 0.8,
    "anger": 1.0,
    "disgust": 0.9,
    "fear": 0.9,
}


class SatisfactionConfig(BaseModel):
    """Weights and thresholds used by scoring and segmentation.

    Passed explicitly into the core functions so that each call is
    self-contained; :meth:`from_settings` builds the instance the HTTP
    layer uses.
    """

    positive_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_POSITIVE_WEIGHTS)
    )
    negative_weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_NEGATIVE_WEIGHTS)
    )
    baseline: float = 50.0
    scale: float = 50.0
    gap_seconds: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SatisfactionConfig:
        settings = settings or get_settings()
        return cls(
            positive_weights=settings.satisfaction_positive_weights,
            negative_weights=settings.satisfaction_negative_weights,
            gap_seconds=settings.satisfaction_gap_seconds,
        )
