from __future__ import annotations

from typing import Any, Dict, Sequence

import pandas as pd

from distribution_core.data import parse_delivery_date
from distribution_core.records import DistributionRecord, records_to_frame
from distribution_core.regions import REGION_LABELS, region_of


def _date_bounds(dates: pd.Series) -> Dict[str, Any]:
    parsed = dates.map(parse_delivery_date).dropna()
    if parsed.empty:
        return {"date_min": None, "date_max": None}
    return {"date_min": str(min(parsed).date()), "date_max": str(max(parsed).date())}


def compute_summary(records: Sequence[DistributionRecord]) -> Dict[str, Any]:
    df = records_to_frame(records)
    if df.empty:
        return {
            "rows": 0,
            "unique_suppliers": 0,
            "unique_customers": 0,
            "unique_licenses": 0,
            "unique_models": 0,
            "region_counts": {label: 0 for label in REGION_LABELS},
            "date_min": None,
            "date_max": None,
        }

    regions = df["customer_id"].map(region_of).value_counts()
    out: Dict[str, Any] = {
        "rows": int(len(df)),
        "unique_suppliers": int(df["supplier_id"].nunique()),
        "unique_customers": int(df["customer_id"].nunique()),
        "unique_licenses": int(df["license_no"].nunique()),
        "unique_models": int(df["model"].nunique()),
        "region_counts": {label: int(regions.get(label, 0)) for label in REGION_LABELS},
    }
    out.update(_date_bounds(df["delivery_date"]))
    return out
