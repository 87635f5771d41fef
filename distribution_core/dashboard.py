from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from distribution_core.charts import cross_tab_chart, hierarchy_chart, pareto_chart, temporal_chart
from distribution_core.filters import FilterState, ViewSettings, apply_filters, normalize_filters
from distribution_core.metrics_crosstab import build_cross_tab
from distribution_core.metrics_flow import build_flow_graph
from distribution_core.metrics_hierarchy import build_hierarchy
from distribution_core.metrics_pareto import build_pareto_ranking
from distribution_core.metrics_summary import compute_summary
from distribution_core.metrics_temporal import build_temporal_series
from distribution_core.records import DistributionRecord, record_to_dict


def prepare_context(
    records: Sequence[DistributionRecord],
    filters: Union[FilterState, Mapping[str, object], None] = None,
) -> Dict[str, Any]:
    filt = filters if isinstance(filters, FilterState) else normalize_filters(filters)
    records = tuple(records)
    return {
        "filters": filt,
        "records": records,
        "filtered_records": tuple(apply_filters(records, filt)),
    }


def compute_dashboard(
    records: Sequence[DistributionRecord],
    filters: Union[FilterState, Mapping[str, object], None] = None,
    *,
    settings: Optional[ViewSettings] = None,
    include_charts: bool = True,
) -> Dict[str, Any]:
    """Filter the active record set and fold it into every view payload."""
    settings = settings or ViewSettings()
    ctx = prepare_context(records, filters)
    filtered = ctx["filtered_records"]

    temporal = build_temporal_series(filtered)
    pareto = build_pareto_ranking(filtered, top_n=settings.pareto_top_n)
    hierarchy = build_hierarchy(filtered)
    cross_tab = build_cross_tab(filtered)

    charts: Dict[str, Any] = {}
    if include_charts:
        charts = {
            "temporal": temporal_chart(temporal),
            "pareto": pareto_chart(pareto),
            "hierarchy": hierarchy_chart(hierarchy),
            "cross_tab": cross_tab_chart(cross_tab),
        }

    return {
        "filters": asdict(ctx["filters"]),
        "row_counts": {"records": len(ctx["records"]), "filtered": len(filtered)},
        "summary": compute_summary(filtered),
        "flow_graph": build_flow_graph(filtered[: settings.flow_record_limit]),
        "temporal_series": temporal,
        "pareto": pareto,
        "hierarchy": hierarchy,
        "cross_tab": cross_tab,
        "charts": charts,
        "preview": [record_to_dict(r) for r in filtered[: settings.preview_rows]],
    }
