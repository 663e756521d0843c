"""Per-date totals of the outbreak records."""

from __future__ import annotations

from typing import AbstractSet, Dict, Optional, Union

import pandas as pd

CATEGORIES = ("cases", "deaths", "recoveries")
POINT_COLUMNS = ["date", *CATEGORIES, "total"]


def aggregate(
  records: pd.DataFrame, country_filter: Optional[AbstractSet[str]] = None
) -> pd.DataFrame:
  """Sum the category counts per date, optionally for a subset of countries.

  One row per distinct date, ascending, with ``total`` as the sum of the three
  categories. An empty or ``None`` filter keeps every country; countries not
  present in the data simply match nothing.
  """
  if country_filter:
    records = records[records["country"].isin(country_filter)]
  if records.empty:
    return pd.DataFrame(columns=POINT_COLUMNS)

  points = records.groupby("date", as_index=False, sort=True)[list(CATEGORIES)].sum()
  points["total"] = points[list(CATEGORIES)].sum(axis=1)
  return points[POINT_COLUMNS].reset_index(drop=True)


def summarize(points: pd.DataFrame) -> Dict[str, Union[int, float, pd.Timestamp, None]]:
  summary: Dict[str, Union[int, float, pd.Timestamp, None]] = {
    "dates": len(points),
    "latest": points["date"].max() if len(points) else None,
  }
  for col in (*CATEGORIES, "total"):
    summary[col] = points[col].sum() if len(points) else 0
  return summary


__all__ = ["CATEGORIES", "POINT_COLUMNS", "aggregate", "summarize"]
