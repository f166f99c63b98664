"""Measures persisted against entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .entities import Entity


class Metric(Enum):
    """Metrics produced from the lcom4 section of a report."""

    LCOM4 = "lcom4"  # float score, >= 1
    LCOM4_BLOCKS = "lcom4_blocks"  # JSON evidence string


@dataclass(frozen=True)
class Measure:
    entity: Entity
    metric: Metric
    value: Union[float, str]
