from __future__ import annotations

import json

from distribution_core.charts import cross_tab_chart, hierarchy_chart, pareto_chart, temporal_chart
from distribution_core.data import DEFAULT_RECORDS
from distribution_core.metrics_crosstab import build_cross_tab
from distribution_core.metrics_hierarchy import build_hierarchy
from distribution_core.metrics_pareto import build_pareto_ranking
from distribution_core.metrics_temporal import build_temporal_series
from distribution_core.records import DistributionRecord


def test_chart_specs_are_json_serializable_vega_lite() -> None:
    specs = [
        temporal_chart(build_temporal_series(DEFAULT_RECORDS)),
        pareto_chart(build_pareto_ranking(DEFAULT_RECORDS)),
        hierarchy_chart(build_hierarchy(DEFAULT_RECORDS)),
        cross_tab_chart(build_cross_tab(DEFAULT_RECORDS)),
    ]

    for spec in specs:
        assert "vega-lite" in spec["$schema"]
        json.dumps(spec)


def test_pareto_chart_layers_bars_and_cumulative_line() -> None:
    spec = pareto_chart(build_pareto_ranking(DEFAULT_RECORDS))

    assert len(spec["layer"]) == 2


def test_chart_specs_accept_empty_views() -> None:
    assert "$schema" in temporal_chart([])
    assert "$schema" in pareto_chart([])
    assert "$schema" in hierarchy_chart([])
    assert "$schema" in cross_tab_chart([])


def test_hierarchy_chart_keeps_truncated_categories_on_separate_bars() -> None:
    tree = build_hierarchy(
        [
            DistributionRecord(category="Cardiovascular Devices A", model="M"),
            DistributionRecord(category="Cardiovascular Devices B", model="M"),
        ]
    )

    spec = hierarchy_chart(tree)

    (values,) = spec["datasets"].values()
    assert sorted(row["group"] for row in values) == [0, 1]
    assert [row["category"] for row in values] == ["Cardiovascular ", "Cardiovascular "]
    assert spec["encoding"]["x"]["field"] == "group"
