"""Runtime settings and chart constants."""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


PRIMARY_BLUE = "#1d4ed8"
ALERT_RED = "#ef4444"
RECOVERY_GREEN = "#16a34a"


def _optional_float(value: Optional[str]) -> Optional[float]:
  if value is None or value.strip() == "":
    return None
  return float(value)


class Config:
  """Settings read from the environment (or a local .env file)."""

  DATA_URL = os.getenv("SARS_DATA_URL", "http://127.0.0.1:8000/records/")

  # Unset means the request may wait forever; the dashboard stays "Loading".
  REQUEST_TIMEOUT = _optional_float(os.getenv("SARS_REQUEST_TIMEOUT"))

  LOG_LEVEL = os.getenv("SARS_LOG_LEVEL", "INFO").upper()

  PAGE_TITLE = "SARS 2003 outbreak"


@dataclass(frozen=True)
class Margin:
  top: int = 10
  right: int = 120
  bottom: int = 50
  left: int = 50


@dataclass(frozen=True)
class ChartConfig:
  width: int = 900
  height: int = 500
  margin: Margin = field(default_factory=Margin)
  # Stacking order, bottom band first.
  categories: Tuple[str, ...] = ("cases", "deaths", "recoveries")
  colors: Dict[str, str] = field(
    default_factory=lambda: {
      "cases": PRIMARY_BLUE,
      "deaths": ALERT_RED,
      "recoveries": RECOVERY_GREEN,
    }
  )

  @property
  def inner_width(self) -> int:
    return self.width - self.margin.left - self.margin.right

  @property
  def inner_height(self) -> int:
    return self.height - self.margin.top - self.margin.bottom

  @property
  def legend_order(self) -> Tuple[str, ...]:
    return tuple(reversed(self.categories))

  @property
  def color_range(self) -> Tuple[str, ...]:
    return tuple(self.colors[c] for c in self.categories)


CHART_CONFIG = ChartConfig()


__all__ = ["CHART_CONFIG", "ChartConfig", "Config", "Margin"]
