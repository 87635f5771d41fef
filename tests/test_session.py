from __future__ import annotations

import logging

from distribution_core.data import DEFAULT_RECORDS
from distribution_core.filters import FilterState, ViewSettings
from distribution_core.session import SOURCE_CUSTOM, SOURCE_DEFAULT, DatasetSession


def test_session_starts_on_default_dataset() -> None:
    session = DatasetSession()

    assert session.source == SOURCE_DEFAULT
    assert session.records == DEFAULT_RECORDS
    assert session.filters == FilterState()


def test_ingest_replaces_active_set() -> None:
    session = DatasetSession()

    produced = session.ingest("Supplier,Date,Customer\nACME,20240101,CUST1\nACME,20240102,CUST2")

    assert produced == 2
    assert session.source == SOURCE_CUSTOM
    assert [r.customer_id for r in session.records] == ["CUST1", "CUST2"]


def test_failed_ingest_keeps_current_set(caplog) -> None:
    session = DatasetSession()
    session.ingest('[{"supplier": "X"}]')

    with caplog.at_level(logging.WARNING, logger="distribution_core.session"):
        assert session.ingest("not data") == 0

    assert session.source == SOURCE_CUSTOM
    assert [r.supplier_id for r in session.records] == ["X"]
    assert "produced no records" in caplog.text


def test_use_default_switches_back() -> None:
    session = DatasetSession()
    session.ingest('{"supplier": "X"}')

    assert session.use_default() == 19
    assert session.source == SOURCE_DEFAULT


def test_filters_apply_and_clear() -> None:
    session = DatasetSession()

    session.set_filter("supplier_id", "b00209")
    assert len(session.filtered()) == 4
    session.set_filter("model", "nothing-like-this")
    assert session.filtered() == []

    session.clear_filters()
    assert session.filters.is_empty()
    assert len(session.filtered()) == 19
    assert session.records == DEFAULT_RECORDS


def test_session_dashboard_reports_source_and_uses_settings() -> None:
    session = DatasetSession(settings=ViewSettings(preview_rows=3))
    session.set_filter("supplier_id", "B00079")

    payload = session.dashboard(include_charts=False)

    assert payload["source"] == SOURCE_DEFAULT
    assert payload["row_counts"] == {"records": 19, "filtered": 8}
    assert len(payload["preview"]) == 3
