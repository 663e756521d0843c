"""Country selection helpers for the multi-select filter."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional

import pandas as pd


def country_options(records: pd.DataFrame) -> List[str]:
  if records.empty:
    return []
  return sorted(records["country"].dropna().astype(str).unique().tolist())


def normalize_selection(selection: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
  """An empty or missing selection means every country, so it maps to ``None``."""
  if selection is None:
    return None
  chosen = frozenset(selection)
  return chosen or None


__all__ = ["country_options", "normalize_selection"]
