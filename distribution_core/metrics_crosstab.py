from __future__ import annotations

from typing import Any, Dict, List, Sequence

from distribution_core.records import DistributionRecord, records_to_frame


def build_cross_tab(records: Sequence[DistributionRecord]) -> List[Dict[str, Any]]:
    """Model x customer shipment counts, one entry per observed pair."""
    df = records_to_frame(records)
    if df.empty:
        return []
    counts = df.groupby(["model", "customer_id"], sort=False).size().reset_index(name="value")
    return [
        {"model": str(row["model"]), "customer": str(row["customer_id"]), "value": int(row["value"])}
        for row in counts.to_dict(orient="records")
    ]
