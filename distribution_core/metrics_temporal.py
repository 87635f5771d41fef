from __future__ import annotations

from typing import Any, Dict, List, Sequence

from distribution_core.records import DistributionRecord, records_to_frame

DATE_BUCKET_CHARS = 8


def build_temporal_series(records: Sequence[DistributionRecord]) -> List[Dict[str, Any]]:
    """Shipment counts per date bucket (first 8 chars of delivery_date), key-sorted.

    Keys are compared as text, so the order is only chronological when every
    record uses the same date format (20251103 and 2025-11-03 do not mix).
    """
    df = records_to_frame(records)
    if df.empty:
        return []
    buckets = df["delivery_date"].astype(str).str.slice(0, DATE_BUCKET_CHARS)
    counts = buckets.groupby(buckets, sort=False).size()
    counts = counts.sort_index(kind="stable")
    return [{"date": str(key), "count": int(n)} for key, n in counts.items()]
