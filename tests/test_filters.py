"""
Tests for country selection helpers — sars_dashboard/filters.py
"""
import pandas as pd

from sars_dashboard.filters import country_options, normalize_selection


def test_options_distinct_and_sorted(wide_records):
  assert country_options(wide_records) == ["Canada", "Hong Kong", "Singapore"]


def test_options_empty():
  assert country_options(pd.DataFrame(columns=["date", "country"])) == []


def test_empty_selection_is_no_filter():
  assert normalize_selection([]) is None
  assert normalize_selection(None) is None


def test_selection_becomes_frozenset():
  assert normalize_selection(["China", "Canada", "China"]) == frozenset({"China", "Canada"})


def test_unknown_country_kept():
  assert normalize_selection(["Atlantis"]) == frozenset({"Atlantis"})
