"""
Shared fixtures: the three-record outbreak sample and canned HTTP responses.
"""
import json

import pandas as pd
import pytest
import requests

from sars_dashboard.loader import normalize_records

SAMPLE_PAYLOAD = [
  {"date": "2003-03-01", "country": "China", "cases": 10, "deaths": 1, "recoveries": 0},
  {"date": "2003-03-01", "country": "Canada", "cases": 5, "deaths": 0, "recoveries": 1},
  {"date": "2003-03-02", "country": "China", "cases": 3, "deaths": 0, "recoveries": 2},
]


def make_response(status=200, body=None, raw=None, url="http://sars.test/records/"):
  """Build a real ``requests.Response`` so raise_for_status/json behave normally."""
  resp = requests.Response()
  resp.status_code = status
  resp.url = url
  resp.reason = "OK" if status < 400 else "Internal Server Error"
  resp.encoding = "utf-8"
  if raw is None:
    raw = json.dumps(body if body is not None else [])
  resp._content = raw.encode("utf-8")
  return resp


@pytest.fixture
def sample_payload():
  return [dict(r) for r in SAMPLE_PAYLOAD]


@pytest.fixture
def sample_records(sample_payload) -> pd.DataFrame:
  return normalize_records(sample_payload)


@pytest.fixture
def wide_records() -> pd.DataFrame:
  """A shuffled multi-country set with repeated dates and a fractional count."""
  payload = [
    {"date": "2003-04-02", "country": "Singapore", "cases": 4, "deaths": 1, "recoveries": 3},
    {"date": "2003-03-17", "country": "Hong Kong", "cases": 20, "deaths": 0, "recoveries": 0},
    {"date": "2003-04-02", "country": "Hong Kong", "cases": 7, "deaths": 2, "recoveries": 5},
    {"date": "2003-03-17", "country": "Canada", "cases": 2, "deaths": 0, "recoveries": 0},
    {"date": "2003-03-20", "country": "Singapore", "cases": 1.5, "deaths": 0, "recoveries": 1},
    {"date": "2003-04-02", "country": "Canada", "cases": 0, "deaths": 1, "recoveries": 2},
    {"date": "2003-03-20", "country": "Hong Kong", "cases": 9, "deaths": 1, "recoveries": 0},
  ]
  return normalize_records(payload)
