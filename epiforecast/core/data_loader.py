"""Data ingestion routines for historical case reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from ..config import DEFAULT_FIELD_MAP
from ..models.series import HistoricalSeries
from .validator import InvalidInputError, validate_field_mapping

LOGGER = logging.getLogger(__name__)

CANONICAL_COLUMNS = ["date", "total_cases", "new_cases"]


@dataclass
class LoadResult:
    """Represents the outcome of a data load operation."""

    series: HistoricalSeries
    dataframe: pd.DataFrame
    field_map: Dict[str, str]
    dropped_rows: int


class DataLoader:
    """Load daily case reports and apply a user-defined field mapping."""

    def __init__(self, date_format: Optional[str] = None) -> None:
        self.date_format = date_format

    def load_series(
        self,
        file_path: str,
        field_map: Optional[Dict[str, str]] = None,
    ) -> LoadResult:
        """Load a case series from CSV applying the field mapping."""
        dataframe = self._read_csv(file_path)
        return self.load_series_from_dataframe(dataframe, field_map)

    def load_series_from_dataframe(
        self,
        dataframe: pd.DataFrame,
        field_map: Optional[Dict[str, str]] = None,
    ) -> LoadResult:
        """Create a case series from an in-memory dataframe."""
        field_map = dict(field_map or DEFAULT_FIELD_MAP)
        validate_field_mapping(field_map, dataframe)
        mapped_df = self._apply_mapping(dataframe.copy(), field_map)
        cleaned, dropped = self._clean(mapped_df)
        if dropped:
            LOGGER.info("Dropped %d rows with missing or negative counts", dropped)
        LOGGER.info("Data loaded: %d days of case data", len(cleaned))
        series = HistoricalSeries.from_dataframe(cleaned)
        return LoadResult(
            series=series,
            dataframe=cleaned,
            field_map=field_map,
            dropped_rows=dropped,
        )

    def _read_csv(self, file_path: str) -> pd.DataFrame:
        """Read the CSV file into a dataframe."""
        try:
            return pd.read_csv(file_path)
        except FileNotFoundError as exc:
            raise InvalidInputError(f"File not found: {file_path}") from exc
        except pd.errors.EmptyDataError as exc:
            raise InvalidInputError(f"File is empty: {file_path}") from exc
        except pd.errors.ParserError as exc:
            raise InvalidInputError(f"Unable to parse CSV: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"File is not valid UTF-8 text: {file_path}") from exc
        except OSError as exc:
            raise InvalidInputError(f"Unable to read file {file_path}: {exc}") from exc

    def _apply_mapping(
        self, dataframe: pd.DataFrame, field_map: Dict[str, str]
    ) -> pd.DataFrame:
        """Select mapped columns and rename them to the canonical schema."""
        rename_map = {field_map[target]: target for target in CANONICAL_COLUMNS}
        mapped_df = dataframe[list(rename_map)].rename(columns=rename_map).copy()
        try:
            mapped_df["date"] = pd.to_datetime(mapped_df["date"], format=self.date_format)
        except (ValueError, TypeError) as exc:
            raise InvalidInputError(f"Unable to parse dates: {exc}") from exc
        for column in ("total_cases", "new_cases"):
            mapped_df[column] = pd.to_numeric(mapped_df[column], errors="coerce")
        return mapped_df

    def _clean(self, dataframe: pd.DataFrame) -> tuple[pd.DataFrame, int]:
        """Drop rows with missing or negative counts and sort by date."""
        valid = (
            dataframe["date"].notna()
            & dataframe["new_cases"].notna()
            & (dataframe["new_cases"] >= 0)
            & dataframe["total_cases"].notna()
            & (dataframe["total_cases"] >= 0)
        )
        cleaned = dataframe.loc[valid].sort_values("date").reset_index(drop=True)
        if cleaned.empty:
            raise InvalidInputError("No valid rows remain after removing missing or negative counts")
        return cleaned, int((~valid).sum())


__all__ = ["DataLoader", "LoadResult"]
