"""Score deriver — emotion probabilities to a bounded satisfaction value.

The score is a linear heuristic around a neutral baseline of 50::

    p = 1.0 * happiness + 0.4 * surprise
    n = 0.8 * sadness + 1.0 * anger + 0.9 * disgust + 0.9 * fear
    score = clamp(50 + 50 * (p - n), 0, 100)

Negative emotions outweigh positive ones (``n`` saturates near 3.6 while
``p`` tops out at 1.4), so the clamp is what keeps the result in range.
Every emotion field goes through :func:`norm01` first, which makes the
deriver total: malformed input contributes 0, it never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from satisfaction_api.satisfaction.config import SatisfactionConfig

_DEFAULT_CONFIG = SatisfactionConfig()


def norm01(value: Any) -> float:
    """Normalise a raw emotion intensity into ``[0, 1]``.

    Values above 1 are read as percentages.  ``None``, NaN, infinities and
    anything that does not cast to a float (including ints too large for
    one) map to 0.
    """
    if value is None:
        return 0.0
    try:
        x = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(x):
        return 0.0
    if x > 1:
        x = x / 100
    return max(0.0, min(1.0, x))


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _weighted(record: Any, weights: Mapping[str, float]) -> float:
    return sum(w * norm01(_field(record, name)) for name, w in weights.items())


def derive_satisfaction(record: Any, config: SatisfactionConfig | None = None) -> float:
    """Return the satisfaction score of *record* in ``[0, 100]``.

    *record* may be an :class:`~satisfaction_api.models.EmotionRecord`, a
    mapping or any object exposing the emotion names as attributes.
    """
    cfg = config or _DEFAULT_CONFIG
    p = _weighted(record, cfg.positive_weights)
    n = _weighted(record, cfg.negative_weights)
    score = cfg.baseline + cfg.scale * (p - n)
    return max(0.0, min(100.0, score))
