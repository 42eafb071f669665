"""Tabular export helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd


def rows_to_frame(rows: Iterable[Mapping[str, Any]], columns: Sequence[str]) -> pd.DataFrame:
    """Build a DataFrame with a fixed column order, including when `rows` is empty."""
    frame = pd.DataFrame(list(rows), columns=list(columns))
    return frame


def frame_to_csv(frame: pd.DataFrame) -> str:
    return frame.to_csv(index=False)
