from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

import pandas as pd


UNKNOWN = "UNKNOWN"
PENDING = "PENDING"
DEFAULT_CATEGORY = "General"
DEFAULT_MODEL = "Standard"

RECORD_FIELDS = (
    "supplier_id",
    "customer_id",
    "license_no",
    "category",
    "model",
    "lot_no",
    "serial_no",
    "udid",
    "delivery_date",
)

# Keys used when a record leaves the library (preview rows, JSON export).
EXPORT_KEYS = {
    "supplier_id": "supplierId",
    "customer_id": "customerId",
    "license_no": "licenseNo",
    "category": "category",
    "model": "model",
    "lot_no": "lotNo",
    "serial_no": "serialNo",
    "udid": "udid",
    "delivery_date": "deliveryDate",
}


@dataclass(frozen=True)
class DistributionRecord:
    supplier_id: str = UNKNOWN
    customer_id: str = UNKNOWN
    license_no: str = PENDING
    category: str = DEFAULT_CATEGORY
    model: str = DEFAULT_MODEL
    lot_no: str = ""
    serial_no: str = ""
    udid: str = ""
    delivery_date: str = ""


def record_to_dict(record: DistributionRecord) -> Dict[str, str]:
    return {EXPORT_KEYS[k]: v for k, v in asdict(record).items()}


def records_to_frame(records: Sequence[DistributionRecord]) -> pd.DataFrame:
    """One row per record, one string column per canonical field."""
    if not records:
        return pd.DataFrame({c: pd.Series(dtype=object) for c in RECORD_FIELDS})
    rows: List[Dict[str, Any]] = [asdict(r) for r in records]
    return pd.DataFrame(rows, columns=list(RECORD_FIELDS))


