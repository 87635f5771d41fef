from __future__ import annotations

from typing import Any, Dict, List, Sequence

from distribution_core.data import round_half_up
from distribution_core.records import DistributionRecord, records_to_frame

PARETO_TOP_N = 10


def build_pareto_ranking(records: Sequence[DistributionRecord], *, top_n: int = PARETO_TOP_N) -> List[Dict[str, Any]]:
    """Models by shipment count with a running cumulative share of the total.

    The cumulative percentage is taken over every model before the ``top_n``
    cut, so the last row returned can sit below 100.
    """
    df = records_to_frame(records)
    if df.empty:
        return []

    counts = (
        df.groupby("model", sort=False)
        .size()
        .reset_index(name="count")
        .sort_values("count", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
    total = int(counts["count"].sum())
    counts["cumulative"] = [
        int(round_half_up(running / total * 100)) for running in counts["count"].cumsum()
    ]
    top = counts.head(max(1, int(top_n)))
    return [
        {"name": str(row["model"]), "count": int(row["count"]), "cumulative": int(row["cumulative"])}
        for row in top.to_dict(orient="records")
    ]
