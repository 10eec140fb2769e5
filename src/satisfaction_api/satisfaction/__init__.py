"""Satisfaction derivation and temporal segmentation.

Pipeline
--------
1. **Score deriver** (`scoring.py`)
   - ``norm01`` turns fractions / percentages / junk into ``[0, 1]``
   - ``derive_satisfaction`` applies the weighted positive/negative
     heuristic and clamps to ``[0, 100]``

2. **Minute aggregation** (`aggregation.py`)
   - Per-minute mean of record scores, overall mean over records
   - Response builders for the daily and single-minute views

3. **Segmenter** (`segmentation.py`)
   - Groups minutes into contiguous runs separated by data gaps

All functions are pure and operate on already-fetched records; tunables
travel in a :class:`SatisfactionConfig`.
"""

from satisfaction_api.satisfaction.aggregation import (
    aggregate_minutes,
    build_daily_segments,
    build_minute_detail,
)
from satisfaction_api.satisfaction.config import SatisfactionConfig
from satisfaction_api.satisfaction.scoring import derive_satisfaction, norm01
from satisfaction_api.satisfaction.segmentation import Segmenter, segment_minutes

__all__ = [
    "SatisfactionConfig",
    "Segmenter",
    "aggregate_minutes",
    "build_daily_segments",
    "build_minute_detail",
    "derive_satisfaction",
    "norm01",
    "segment_minutes",
]
