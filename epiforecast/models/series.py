"""Historical case series model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from ..core.validator import InvalidInputError, validate_case_counts


@dataclass(frozen=True, eq=False)
class HistoricalSeries:
    """
    Daily cumulative and new case counts ordered by date.

    Cumulative totals are expected to rise but real reports occasionally
    revise them downward; such noise is accepted here and handled by the
    estimator.
    """

    dates: pd.DatetimeIndex
    total_cases: np.ndarray
    new_cases: np.ndarray

    def __post_init__(self) -> None:
        dates = pd.DatetimeIndex(self.dates)
        totals = validate_case_counts(self.total_cases, "total_cases")
        new = validate_case_counts(self.new_cases, "new_cases")
        if not len(dates) == totals.size == new.size:
            raise InvalidInputError(
                "dates, total_cases and new_cases must have equal lengths "
                f"(got {len(dates)}, {totals.size}, {new.size})"
            )
        if totals.size < 2:
            raise InvalidInputError("Historical series needs at least 2 data points")
        if dates.hasnans:
            raise InvalidInputError("Historical series contains missing dates")
        if not dates.is_monotonic_increasing or not dates.is_unique:
            raise InvalidInputError("Historical dates must be strictly ascending")
        totals.setflags(write=False)
        new.setflags(write=False)
        object.__setattr__(self, "dates", dates)
        object.__setattr__(self, "total_cases", totals)
        object.__setattr__(self, "new_cases", new)

    @classmethod
    def from_counts(
        cls,
        total_cases: Iterable[float],
        new_cases: Optional[Iterable[float]] = None,
        *,
        start_date: str = "2020-03-08",
    ) -> "HistoricalSeries":
        """
        Build a series from bare counts with consecutive daily dates.

        When ``new_cases`` is omitted it is derived from day-over-day
        differences of the totals (the first day counts its whole total).
        """
        totals = np.asarray(list(total_cases), dtype=float)
        if new_cases is None:
            new = np.diff(totals, prepend=0.0).clip(min=0.0)
        else:
            new = np.asarray(list(new_cases), dtype=float)
        dates = pd.date_range(start=start_date, periods=totals.size, freq="D")
        return cls(dates=dates, total_cases=totals, new_cases=new)

    @classmethod
    def from_dataframe(
        cls,
        dataframe: pd.DataFrame,
        *,
        date_column: str = "date",
        total_column: str = "total_cases",
        new_column: str = "new_cases",
    ) -> "HistoricalSeries":
        """Create a series from a dataframe already sorted by date."""
        return cls(
            dates=pd.DatetimeIndex(pd.to_datetime(dataframe[date_column])),
            total_cases=dataframe[total_column].to_numpy(dtype=float),
            new_cases=dataframe[new_column].to_numpy(dtype=float),
        )

    def __len__(self) -> int:
        return int(self.total_cases.size)

    @property
    def initial_total(self) -> float:
        """Last known cumulative total; the starting point of every projection."""
        return float(self.total_cases[-1])

    @property
    def last_date(self) -> pd.Timestamp:
        return self.dates[-1]
