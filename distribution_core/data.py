from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from distribution_core.records import (
    DEFAULT_CATEGORY,
    DEFAULT_MODEL,
    EXPORT_KEYS,
    PENDING,
    RECORD_FIELDS,
    UNKNOWN,
    DistributionRecord,
    record_to_dict,
    records_to_frame,
)

logger = logging.getLogger(__name__)

# JSON keys are matched case-sensitively, first present non-empty value wins.
JSON_ALIASES: Dict[str, Tuple[str, ...]] = {
    "supplier_id": ("supplierId", "SupplierID", "supplier"),
    "customer_id": ("customerId", "CustomerID", "customer"),
    "license_no": ("licenseNo", "LicenseNo", "license"),
    "category": ("category", "Category"),
    "model": ("model", "Model"),
    "lot_no": ("lotNo", "LotNO", "lot"),
    "serial_no": ("serialNo", "SerNo", "serial"),
    "udid": ("udid", "UDID", "udi"),
    "delivery_date": ("deliveryDate", "Deliverdate", "date"),
}

# CSV headers are lower-cased and matched by substring; "ser" also hits e.g. "user".
CSV_KEYWORDS: Dict[str, str] = {
    "supplier_id": "supplier",
    "delivery_date": "date",
    "customer_id": "customer",
    "license_no": "license",
    "category": "category",
    "model": "model",
    "lot_no": "lot",
    "serial_no": "ser",
}

FIELD_DEFAULTS: Dict[str, str] = {
    "supplier_id": UNKNOWN,
    "customer_id": UNKNOWN,
    "license_no": PENDING,
    "category": DEFAULT_CATEGORY,
    "model": DEFAULT_MODEL,
    "lot_no": "",
    "serial_no": "",
    "udid": "",
}

CSV_DELIMITER = ","


def utc_timestamp() -> str:
    """Current UTC time as an ISO string, e.g. 2025-11-07T08:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def parse_delivery_date(value: object) -> Optional[pd.Timestamp]:
    """Parse YYYYMMDD or ISO-ish dates to a naive UTC timestamp; None when unparseable."""
    s = str(value or "").strip()
    if not s:
        return None
    if re.fullmatch(r"\d{8}", s):
        ts = pd.to_datetime(s, format="%Y%m%d", errors="coerce")
    else:
        ts = pd.to_datetime(s, errors="coerce", utc=True)
        if not pd.isna(ts):
            ts = ts.tz_convert(None)
    return None if pd.isna(ts) else ts


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _resolve_alias(item: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    for key in aliases:
        value = item.get(key)
        if value:
            return _as_text(value)
    return None


def _defaults(delivery_date: str) -> Dict[str, str]:
    return {**FIELD_DEFAULTS, "delivery_date": delivery_date}


def record_from_mapping(item: Mapping[str, Any], *, now: Optional[str] = None) -> DistributionRecord:
    """Build a canonical record from a loosely-typed JSON object."""
    defaults = _defaults(now or utc_timestamp())
    values = {}
    for field in RECORD_FIELDS:
        resolved = _resolve_alias(item, JSON_ALIASES[field])
        values[field] = resolved if resolved is not None else defaults[field]
    return DistributionRecord(**values)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _standardize_json(text: str, now: str) -> List[DistributionRecord]:
    parsed = json.loads(text, parse_constant=_reject_constant)
    items = parsed if isinstance(parsed, list) else [parsed]
    return [record_from_mapping(item if isinstance(item, Mapping) else {}, now=now) for item in items]


def find_column_indexes(header: Sequence[str]) -> Dict[str, int]:
    """Map canonical fields to the first header column containing their keyword."""
    tokens = [h.strip().lower() for h in header]
    indexes: Dict[str, int] = {}
    for field, keyword in CSV_KEYWORDS.items():
        for idx, token in enumerate(tokens):
            if keyword in token:
                indexes[field] = idx
                break
    return indexes


def _standardize_csv(text: str, now: str) -> List[DistributionRecord]:
    # Rows end at "\n" only; other Unicode line breaks stay inside cells.
    lines = [line.rstrip("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if len(lines) < 2:
        return []

    indexes = find_column_indexes(lines[0].split(CSV_DELIMITER))
    defaults = _defaults(now)
    out: List[DistributionRecord] = []
    for line in lines[1:]:
        cells = line.split(CSV_DELIMITER)
        values = {}
        for field in RECORD_FIELDS:
            idx = indexes.get(field)
            cell = cells[idx].strip() if idx is not None and idx < len(cells) else ""
            values[field] = cell or defaults[field]
        out.append(DistributionRecord(**values))
    return out


def standardize(raw_input: str) -> List[DistributionRecord]:
    """Parse CSV or JSON text into canonical records.

    Input starting with ``[`` or ``{`` (after trimming) is read as JSON, anything
    else as CSV with a header row. Parse failures are logged and produce an empty
    list; callers treat zero records as "could not process data".
    """
    text = (raw_input or "").strip()
    if not text:
        return []

    now = utc_timestamp()
    try:
        if text[0] in "[{":
            return _standardize_json(text, now)
        return _standardize_csv(text, now)
    except (ValueError, TypeError, RecursionError) as exc:
        logger.warning("standardize failed (%s): %s", type(exc).__name__, exc)
        return []


# ---------------- Export ----------------
def records_to_csv(records: Sequence[DistributionRecord]) -> str:
    frame = records_to_frame(records).rename(columns=EXPORT_KEYS)
    return frame.to_csv(index=False)


def records_to_json(records: Sequence[DistributionRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], ensure_ascii=False, indent=2)


# ---------------- Default dataset ----------------
DEFAULT_RECORDS: Tuple[DistributionRecord, ...] = (
    DistributionRecord("B00079", "C05278", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L111", "890057", "", "00802526576331", "20251107"),
    DistributionRecord("B00079", "C06030", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L111", "872177", "", "00802526576331", "20251106"),
    DistributionRecord("B00079", "C00123", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L111", "889490", "", "00802526576331", "20251106"),
    DistributionRecord("B00079", "C06034", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L111", "889253", "", "00802526576331", "20251105"),
    DistributionRecord("B00079", "C05363", "衛部醫器輸字第029100號", "E.3610植入式心律器之脈搏產生器", "L311", "869531", "", "00802526576461", "20251103"),
    DistributionRecord("B00079", "C06034", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L111", "889230", "", "00802526576331", "20251103"),
    DistributionRecord("B00079", "C05278", "衛部醫器輸字第029100號", "E.3610植入式心律器之脈搏產生器", "L331", "182310", "", "00802526576485", "20251103"),
    DistributionRecord("B00051", "C02822", "衛部醫器輸字第028560號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "CPS02", "CC250520", "19", "08437007606478", "20251030"),
    DistributionRecord("B00079", "C00123", "衛部醫器輸字第033951號", "E.3610植入式心律器之脈搏產生器", "L110", "915900", "", "00802526576324", "20251030"),
    DistributionRecord("B00051", "C02822", "衛部醫器輸字第028560號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "CPS02", "CC250520", "20", "08437007606478", "20251030"),
    DistributionRecord("B00051", "C02082", "衛部醫器輸字第028560號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "CPS02", "CC250326", "4", "08437007606478", "20251029"),
    DistributionRecord("B00051", "C02082", "衛部醫器輸字第028560號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "CPS02", "CC250326", "5", "08437007606478", "20251029"),
    DistributionRecord("B00209", "C03210", "衛部醫器輸字第026988號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "Calistar S", "", "00012150", "07798121803473", "20251028"),
    DistributionRecord("B00051", "C01774", "衛部醫器輸字第030820號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "KITMIPS02", "MB241203", "140", "08437007606515", "20251028"),
    DistributionRecord("B00209", "C03210", "衛部醫器輸字第026988號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "Calistar S", "", "00012154", "07798121803473", "20251028"),
    DistributionRecord("B00051", "C01773", "衛部醫器輸字第028560號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "CPS02", "CC241128", "85", "08437007606478", "20251028"),
    DistributionRecord("B00209", "C03210", "衛部醫器輸字第026988號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "Calistar S", "", "00012155", "07798121803473", "20251028"),
    DistributionRecord("B00051", "C01774", "衛部醫器輸字第030820號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "KITMIPS02", "MB241203", "142", "08437007606515", "20251028"),
    DistributionRecord("B00209", "C03210", "衛部醫器輸字第026988號", "L.5980經陰道骨盆腔器官脫垂治療用手術網片", "Calistar S", "", "00012156", "07798121803473", "20251028"),
)


def load_default_records() -> List[DistributionRecord]:
    return list(DEFAULT_RECORDS)
