"""Fetch the outbreak records once and expose the outcome as a tri-state result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

import pandas as pd
import requests

logger = logging.getLogger("sars_dashboard.loader")

RECORD_COLUMNS = ["date", "country", "cases", "deaths", "recoveries"]
COUNT_COLUMNS = ["cases", "deaths", "recoveries"]


class LoadError(Exception):
  """A failed load, with a short message and a diagnostic detail string."""

  def __init__(self, message: str, detail: str = ""):
    super().__init__(message)
    self.message = message
    self.detail = detail


class NetworkFailure(LoadError):
  pass


class ParseFailure(LoadError):
  pass


class LoadStatus(str, Enum):
  PENDING = "pending"
  READY = "ready"
  FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
  status: LoadStatus
  records: Optional[pd.DataFrame] = None
  error: Optional[LoadError] = None

  @classmethod
  def pending(cls) -> "LoadResult":
    return cls(LoadStatus.PENDING)

  @classmethod
  def ready(cls, records: pd.DataFrame) -> "LoadResult":
    return cls(LoadStatus.READY, records=records)

  @classmethod
  def failed(cls, error: LoadError) -> "LoadResult":
    return cls(LoadStatus.FAILED, error=error)


def _parse_dates(values: pd.Series) -> pd.Series:
  """Parse each timestamp on its own and store it as naive UTC."""
  return pd.to_datetime(values, format="mixed", utc=True).dt.tz_convert(None)


def _describe(exc: BaseException) -> str:
  return f"{type(exc).__name__}: {exc}"


def fetch_payload(
  url: str,
  timeout: Optional[float] = None,
  session: Optional[requests.Session] = None,
) -> Any:
  """GET ``url`` and return the decoded JSON body."""
  getter = session.get if session is not None else requests.get
  try:
    resp = getter(url, timeout=timeout)
    resp.raise_for_status()
  except requests.HTTPError as exc:
    status = exc.response.status_code if exc.response is not None else "?"
    raise NetworkFailure(
      f"Request to {url} failed with HTTP {status}", _describe(exc)
    ) from exc
  except requests.RequestException as exc:
    raise NetworkFailure(f"Could not reach {url}", _describe(exc)) from exc

  try:
    return resp.json()
  except ValueError as exc:
    raise ParseFailure(f"Response from {url} is not valid JSON", _describe(exc)) from exc


def normalize_records(payload: Any) -> pd.DataFrame:
  """Turn a JSON array of records into a date-sorted DataFrame.

  Dates become ``datetime64`` and the three counts numeric. Anything that does
  not fit that shape raises ``ParseFailure``.
  """
  if not isinstance(payload, list):
    raise ParseFailure(
      "Expected a JSON array of records",
      f"got {type(payload).__name__}",
    )
  if not payload:
    df = pd.DataFrame(columns=RECORD_COLUMNS)
    df["date"] = _parse_dates(df["date"])
    return df
  if not all(isinstance(item, dict) for item in payload):
    raise ParseFailure("Expected every record to be a JSON object")

  df = pd.DataFrame(payload)
  missing = [c for c in RECORD_COLUMNS if c not in df.columns]
  if missing:
    raise ParseFailure("Records are missing fields", f"missing: {', '.join(missing)}")
  df = df[RECORD_COLUMNS].copy()

  incomplete = df[df.isna().any(axis=1)]
  if not incomplete.empty:
    raise ParseFailure(
      f"{len(incomplete)} record(s) have empty fields",
      f"first incomplete record: {incomplete.iloc[0].to_dict()}",
    )

  try:
    df["date"] = _parse_dates(df["date"])
    for col in COUNT_COLUMNS:
      df[col] = pd.to_numeric(df[col])
  except (ValueError, TypeError) as exc:
    raise ParseFailure("Records have malformed dates or counts", _describe(exc)) from exc
  df["country"] = df["country"].astype(str)

  return df.sort_values("date", kind="mergesort").reset_index(drop=True)


class DataLoader:
  """Own the one request for the session and its final outcome."""

  def __init__(
    self,
    url: str,
    timeout: Optional[float] = None,
    fetch: Callable[..., Any] = fetch_payload,
  ):
    self.url = url
    self.timeout = timeout
    self._fetch = fetch
    self._started = False
    self._callbacks: List[Callable[[LoadResult], None]] = []
    self.result = LoadResult.pending()

  @property
  def status(self) -> LoadStatus:
    return self.result.status

  def on_complete(self, callback: Callable[[LoadResult], None]) -> None:
    if self.result.status is LoadStatus.PENDING:
      self._callbacks.append(callback)
    else:
      callback(self.result)

  def load(self) -> LoadResult:
    if self._started:
      return self.result
    self._started = True

    logger.info("Fetching records from %s", self.url)
    try:
      payload = self._fetch(self.url, timeout=self.timeout)
      records = normalize_records(payload)
    except LoadError as exc:
      logger.error("Loading records failed: %s (%s)", exc.message, exc.detail)
      self._complete(LoadResult.failed(exc))
    else:
      logger.info(
        "Loaded %d record(s) across %d date(s)",
        len(records),
        records["date"].nunique(),
      )
      self._complete(LoadResult.ready(records))
    return self.result

  def _complete(self, result: LoadResult) -> None:
    self.result = result
    callbacks, self._callbacks = self._callbacks, []
    for callback in callbacks:
      callback(result)


__all__ = [
  "COUNT_COLUMNS",
  "DataLoader",
  "LoadError",
  "LoadResult",
  "LoadStatus",
  "NetworkFailure",
  "ParseFailure",
  "RECORD_COLUMNS",
  "fetch_payload",
  "normalize_records",
]
