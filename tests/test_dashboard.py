from __future__ import annotations

import json

from distribution_core.dashboard import compute_dashboard, prepare_context
from distribution_core.data import DEFAULT_RECORDS
from distribution_core.filters import FilterState, ViewSettings


def test_prepare_context_normalizes_raw_filters() -> None:
    ctx = prepare_context(DEFAULT_RECORDS, {"supplierId": "b00051"})

    assert ctx["filters"] == FilterState(supplier_id="b00051")
    assert len(ctx["records"]) == 19
    assert len(ctx["filtered_records"]) == 7
    assert all(r.supplier_id == "B00051" for r in ctx["filtered_records"])


def test_compute_dashboard_payload_shape() -> None:
    payload = compute_dashboard(DEFAULT_RECORDS)

    assert payload["row_counts"] == {"records": 19, "filtered": 19}
    assert set(payload["charts"]) == {"temporal", "pareto", "hierarchy", "cross_tab"}
    assert payload["summary"]["rows"] == 19
    assert payload["pareto"][0]["name"] == "L111"
    assert payload["filters"]["supplier_id"] == ""
    assert payload["preview"][0]["supplierId"] == "B00079"
    json.dumps(payload)


def test_compute_dashboard_applies_filters_to_every_view() -> None:
    payload = compute_dashboard(DEFAULT_RECORDS, FilterState(model="calistar"), include_charts=False)

    assert payload["charts"] == {}
    assert payload["row_counts"]["filtered"] == 4
    assert payload["pareto"] == [{"name": "Calistar S", "count": 4, "cumulative": 100}]
    assert payload["cross_tab"] == [{"model": "Calistar S", "customer": "C03210", "value": 4}]
    assert [n["name"] for n in payload["flow_graph"]["nodes"]][0] == "Supplier: B00209"


def test_compute_dashboard_bounds_flow_graph_and_preview() -> None:
    settings = ViewSettings(flow_record_limit=1, preview_rows=2)
    payload = compute_dashboard(DEFAULT_RECORDS, settings=settings, include_charts=False)

    assert len(payload["flow_graph"]["nodes"]) == 4
    assert all(link["value"] == 1 for link in payload["flow_graph"]["links"])
    assert len(payload["preview"]) == 2
    assert payload["summary"]["rows"] == 19


def test_compute_dashboard_with_no_matches() -> None:
    payload = compute_dashboard(DEFAULT_RECORDS, {"customer_id": "nobody"})

    assert payload["row_counts"]["filtered"] == 0
    assert payload["flow_graph"] == {"nodes": [], "links": []}
    assert payload["temporal_series"] == []
    assert payload["hierarchy"] == []
    assert payload["preview"] == []
