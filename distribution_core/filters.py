from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from distribution_core.records import DistributionRecord, records_to_frame
from distribution_core.regions import region_of
from distribution_core.schemas import FilterStateModel

REGION_FIELD = "region"


@dataclass(frozen=True)
class ViewSettings:
    flow_record_limit: int = 100
    pareto_top_n: int = 10
    preview_rows: int = 50


@dataclass(frozen=True)
class FilterState:
    """Substring pattern per field; an empty pattern places no constraint."""

    supplier_id: str = ""
    customer_id: str = ""
    license_no: str = ""
    category: str = ""
    model: str = ""
    lot_no: str = ""
    serial_no: str = ""
    udid: str = ""
    delivery_date: str = ""
    region: str = ""

    def active(self) -> Dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v}

    def is_empty(self) -> bool:
        return not self.active()

    def with_pattern(self, field: str, pattern: Optional[str]) -> "FilterState":
        if field not in FILTER_FIELDS:
            raise KeyError(f"unknown filter field: {field!r}")
        return replace(self, **{field: pattern or ""})

    def cleared(self) -> "FilterState":
        return FilterState()


FILTER_FIELDS = tuple(f.name for f in fields(FilterState))


def _as_bounded_int(value: object, default: int, lo: int, hi: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except Exception:
        out = default
    return max(lo, min(hi, out))


def normalize_settings(raw: Optional[Mapping[str, object]] = None) -> ViewSettings:
    raw = raw or {}
    return ViewSettings(
        flow_record_limit=_as_bounded_int(raw.get("flow_record_limit", 100), 100, 1, 1000),
        pareto_top_n=_as_bounded_int(raw.get("pareto_top_n", 10), 10, 1, 200),
        preview_rows=_as_bounded_int(raw.get("preview_rows", 50), 50, 0, 5000),
    )


def normalize_filters(raw: Optional[Mapping[str, object]] = None) -> FilterState:
    """Build a FilterState from a loosely-shaped mapping (camelCase keys accepted)."""
    model = FilterStateModel.model_validate(dict(raw or {}))
    return FilterState(**model.model_dump())


def filter_mask(frame: pd.DataFrame, filters: FilterState) -> pd.Series:
    mask = pd.Series(True, index=frame.index, dtype=bool)
    if frame.empty:
        return mask
    for field, pattern in filters.active().items():
        if field == REGION_FIELD:
            values = frame["customer_id"].astype(str).map(region_of)
        else:
            values = frame[field].astype(str)
        mask &= values.str.lower().str.contains(pattern.lower(), regex=False, na=False)
    return mask


def apply_filters(records: Sequence[DistributionRecord], filters: FilterState) -> List[DistributionRecord]:
    """Records whose fields contain every active pattern, in input order."""
    if filters.is_empty():
        return list(records)
    frame = records_to_frame(records)
    keep = filter_mask(frame, filters).tolist()
    return [r for r, ok in zip(records, keep) if ok]
