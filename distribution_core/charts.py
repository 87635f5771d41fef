from __future__ import annotations

import json
from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def temporal_chart(series: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(series, columns=["date", "count"])
    hover = alt.selection_point(fields=["date"], on="mouseover", empty=True)
    chart = (
        alt.Chart(df)
        .mark_area(line=True, point={"filled": True}, opacity=0.4)
        .encode(
            x=alt.X("date:O", title="Delivery Date", sort=None, axis=alt.Axis(grid=False)),
            y=alt.Y("count:Q", title="Shipments", axis=alt.Axis(format="d", gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[alt.Tooltip("date:O", title="Date"), alt.Tooltip("count:Q", title="Shipments")],
        )
        .add_params(hover)
    )
    return to_vega_spec(chart)


def pareto_chart(ranking: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(ranking, columns=["name", "count", "cumulative"])
    base = alt.Chart(df).encode(x=alt.X("name:N", title="Model", sort=None, axis=alt.Axis(grid=False)))
    bars = base.mark_bar().encode(
        y=alt.Y("count:Q", title="Shipments"),
        tooltip=[alt.Tooltip("name:N", title="Model"), alt.Tooltip("count:Q", title="Shipments")],
    )
    line = base.mark_line(point=True, color="#e67e22").encode(
        y=alt.Y("cumulative:Q", title="Cumulative %", scale=alt.Scale(domain=[0, 100])),
        tooltip=[alt.Tooltip("name:N", title="Model"), alt.Tooltip("cumulative:Q", title="Cumulative %")],
    )
    chart = alt.layer(bars, line).resolve_scale(y="independent")
    return to_vega_spec(chart)


def hierarchy_chart(tree: List[Dict[str, Any]]) -> Dict[str, Any]:
    # Bars key on tree position; display names may collide after truncation.
    rows = [
        {"group": pos, "category": node["name"], "model": child["name"], "size": child["size"]}
        for pos, node in enumerate(tree)
        for child in node["children"]
    ]
    df = pd.DataFrame(rows, columns=["group", "category", "model", "size"])
    labels = json.dumps([node["name"] for node in tree], ensure_ascii=False)
    cat_hover = alt.selection_point(fields=["model"], on="mouseover", empty=True)
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X(
                "group:O",
                title="Category",
                axis=alt.Axis(grid=False, labelAngle=0, labelExpr=f"{labels}[datum.value]"),
            ),
            y=alt.Y("size:Q", title="Shipments", stack="zero"),
            color=alt.Color("model:N", title="Model"),
            opacity=alt.condition(cat_hover, alt.value(1), alt.value(0.6)),
            tooltip=[
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("model:N", title="Model"),
                alt.Tooltip("size:Q", title="Shipments"),
            ],
        )
        .add_params(cat_hover)
    )
    return to_vega_spec(chart)


def cross_tab_chart(cells: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(cells, columns=["model", "customer", "value"])
    chart = (
        alt.Chart(df)
        .mark_rect()
        .encode(
            x=alt.X("customer:N", title="Customer"),
            y=alt.Y("model:N", title="Model"),
            color=alt.Color("value:Q", title="Shipments"),
            tooltip=["model", "customer", alt.Tooltip("value:Q", title="Shipments")],
        )
    )
    return to_vega_spec(chart)
