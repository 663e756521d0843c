# Streamlit dashboard for the 2003 SARS outbreak

'''
  Main question:
  How did the 2003 SARS outbreak unfold, day by day?

  Data:
  - One JSON array of daily records (date, country, cases, deaths, recoveries)
    served by the records API configured through SARS_DATA_URL.

  Core Graph:
  - Stacked cases / deaths / recoveries over time, optionally narrowed to a
    set of countries.

  Run with:
    streamlit run app.py
'''
import logging

import streamlit as st

from sars_dashboard.aggregation import aggregate, summarize
from sars_dashboard.chart import render
from sars_dashboard.config import CHART_CONFIG, Config
from sars_dashboard.filters import country_options, normalize_selection
from sars_dashboard.loader import DataLoader, LoadResult, LoadStatus

logging.basicConfig(
  level=Config.LOG_LEVEL,
  format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("sars_dashboard")

LOADING_TEXT = 'Loading<span style="letter-spacing: -0.05em">. . .</span>'


def get_loader() -> DataLoader:
  if 'loader' not in st.session_state:
    st.session_state.loader = DataLoader(Config.DATA_URL, timeout=Config.REQUEST_TIMEOUT)
  return st.session_state.loader


def format_count(value) -> str:
  return f"{value:,.2f}".rstrip("0").rstrip(".")


def render_failure(result: LoadResult):
  error = result.error
  st.error(f"Could not load the SARS records: {error.message}")
  with st.expander("Details"):
    st.code(error.detail or type(error).__name__, language=None)


def render_dashboard(result: LoadResult):
  records = result.records

  selected_countries = st.multiselect(
    "Countries",
    country_options(records),
    default=[],
    key="countries",
    help="Leave empty to include every country.",
  )
  points = aggregate(records, normalize_selection(selected_countries))
  logger.debug("Aggregated %d date(s) for %s", len(points), selected_countries or "all countries")
  summary = summarize(points)

  metric_cols = st.columns(4)
  metric_cols[0].metric(
    "Cases",
    format_count(summary['cases']),
    help="Sum of reported cases over every date in view.",
  )
  metric_cols[1].metric("Deaths", format_count(summary['deaths']))
  metric_cols[2].metric("Recoveries", format_count(summary['recoveries']))
  metric_cols[3].metric(
    "Latest report",
    f"{summary['latest']:%b %d, %Y}" if summary['latest'] is not None else "n/a",
    help="Most recent date among the selected countries.",
  )

  if points.empty:
    st.info("No records match the selected countries.")

  render(points, st.empty(), CHART_CONFIG)


def handle_result(result: LoadResult):
  if result.status is LoadStatus.FAILED:
    render_failure(result)
  elif result.status is LoadStatus.READY:
    render_dashboard(result)


st.set_page_config(page_title=Config.PAGE_TITLE, layout="wide")
st.title(Config.PAGE_TITLE)

loader = get_loader()
# Runs straight away when the session already has its records.
loader.on_complete(handle_result)

if loader.status is LoadStatus.PENDING:
  status_slot = st.empty()
  status_slot.markdown(LOADING_TEXT, unsafe_allow_html=True)
  loader.load()
  if loader.status is not LoadStatus.PENDING:
    status_slot.empty()
