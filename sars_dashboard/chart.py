"""Stacked-area chart of the per-date totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import altair as alt
import numpy as np
import pandas as pd

from .config import CHART_CONFIG, ChartConfig

BAND_COLUMNS = ["date", "category", "y0", "y1"]


@dataclass(frozen=True)
class ChartScales:
  x_domain: Optional[Tuple[pd.Timestamp, pd.Timestamp]]
  y_domain: Tuple[float, float]


def stack_points(points: pd.DataFrame, config: ChartConfig = CHART_CONFIG) -> pd.DataFrame:
  """Long-form bands, one per (date, category), stacked in ``config.categories`` order.

  ``y0`` is the sum of the categories below at that date and ``y1`` adds the
  category's own value, so bands at a date touch without overlapping.
  """
  if points.empty:
    return pd.DataFrame(columns=BAND_COLUMNS)

  cats = list(config.categories)
  values = points[cats].to_numpy(dtype=float)
  upper = np.cumsum(values, axis=1)
  lower = np.hstack([np.zeros((len(values), 1)), upper[:, :-1]])

  dates = points["date"].reset_index(drop=True)
  frames = [
    pd.DataFrame({"date": dates, "category": cat, "y0": lower[:, i], "y1": upper[:, i]})
    for i, cat in enumerate(cats)
  ]
  return pd.concat(frames, ignore_index=True)


def scales_for(points: pd.DataFrame, config: ChartConfig = CHART_CONFIG) -> ChartScales:
  if points.empty:
    return ChartScales(x_domain=None, y_domain=(0.0, 0.0))
  bands = stack_points(points, config)
  return ChartScales(
    x_domain=(points["date"].min(), points["date"].max()),
    y_domain=(0.0, float(bands["y1"].max())),
  )


def _datetime(ts: pd.Timestamp) -> alt.DateTime:
  # Aware timestamps go out as UTC, naive ones as local time, as the data does.
  utc = alt.Undefined
  if ts.tzinfo is not None:
    ts = ts.tz_convert("UTC")
    utc = True
  return alt.DateTime(
    year=ts.year,
    month=ts.month,
    date=ts.day,
    hours=ts.hour,
    minutes=ts.minute,
    seconds=ts.second,
    utc=utc,
  )


def build_chart(points: pd.DataFrame, config: ChartConfig = CHART_CONFIG) -> alt.Chart:
  bands = stack_points(points, config)
  scales = scales_for(points, config)

  if scales.x_domain is None:
    x_scale = alt.Scale()
  else:
    x_scale = alt.Scale(domain=[_datetime(d) for d in scales.x_domain])
  y_scale = alt.Scale(domain=list(scales.y_domain), zero=True)

  color = alt.Color(
    "category:N",
    title=None,
    scale=alt.Scale(domain=list(config.categories), range=list(config.color_range)),
    legend=alt.Legend(orient="right", values=list(config.legend_order)),
  )

  return (
    alt.Chart(bands)
    .mark_area()
    .encode(
      x=alt.X("date:T", title="Date", scale=x_scale),
      y=alt.Y("y0:Q", title="People", scale=y_scale, stack=None),
      y2="y1:Q",
      color=color,
      tooltip=[
        alt.Tooltip("date:T", title="Date"),
        alt.Tooltip("category:N", title="Category"),
        alt.Tooltip("y0:Q", title="From", format=","),
        alt.Tooltip("y1:Q", title="To", format=","),
      ],
    )
    .properties(
      width=config.inner_width,
      height=config.inner_height,
      padding={
        "top": config.margin.top,
        "right": config.margin.right,
        "bottom": config.margin.bottom,
        "left": config.margin.left,
      },
    )
  )


def render(points: pd.DataFrame, surface, config: ChartConfig = CHART_CONFIG) -> alt.Chart:
  """Draw the chart into ``surface``, replacing whatever it held before.

  ``surface`` is a single-element Streamlit container such as ``st.empty()``.
  """
  chart = build_chart(points, config)
  surface.altair_chart(chart)
  return chart


__all__ = ["BAND_COLUMNS", "ChartScales", "build_chart", "render", "scales_for", "stack_points"]
