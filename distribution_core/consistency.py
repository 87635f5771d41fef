"""Reconcile a supplier-side shipment dataset against a customer-side one.

Two kinds of findings are produced:

- ``missing_serial``: a serial number shipped in dataset A never shows up in
  dataset B (severity High).
- ``date_mismatch``: a lot received in B more than ``max_delay_days`` after it
  was shipped in A (severity Medium), or received before it shipped (High).

Records without a serial or lot are ignored by the respective check, and
delivery dates that cannot be parsed are skipped rather than flagged.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from distribution_core.data import parse_delivery_date
from distribution_core.records import DistributionRecord, records_to_frame

DEFAULT_MAX_DELAY_DAYS = 3


@dataclass(frozen=True)
class Finding:
    kind: str
    severity: str
    key: str
    message: str
    shipped: Optional[str] = None
    received: Optional[str] = None
    delay_days: Optional[int] = None


def _earliest_by(df: pd.DataFrame, key: str) -> pd.Series:
    keyed = df[df[key].astype(str).str.strip() != ""].copy()
    if keyed.empty:
        return pd.Series(dtype="datetime64[ns]")
    keyed["parsed"] = pd.to_datetime(keyed["delivery_date"].map(parse_delivery_date))
    return keyed.dropna(subset=["parsed"]).groupby(key, sort=False)["parsed"].min()


def missing_serials(shipped: pd.DataFrame, received: pd.DataFrame) -> List[Finding]:
    seen = set(received["serial_no"].astype(str).str.strip())
    out: List[Finding] = []
    for serial in shipped["serial_no"].astype(str).str.strip().drop_duplicates():
        if serial and serial not in seen:
            out.append(
                Finding(
                    kind="missing_serial",
                    severity="High",
                    key=serial,
                    message=f"Missing Serial: {serial} (Detected in A, missing in B)",
                )
            )
    return out


def date_mismatches(shipped: pd.DataFrame, received: pd.DataFrame, *, max_delay_days: int) -> List[Finding]:
    a = _earliest_by(shipped, "lot_no")
    b = _earliest_by(received, "lot_no")
    out: List[Finding] = []
    for lot, ship_ts in a.items():
        if lot not in b.index:
            continue
        recv_ts = b[lot]
        delay = int((recv_ts - ship_ts).days)
        if 0 <= delay <= max_delay_days:
            continue
        severity = "High" if delay < 0 else "Medium"
        reason = "Received before shipment" if delay < 0 else "Threshold Exceeded"
        out.append(
            Finding(
                kind="date_mismatch",
                severity=severity,
                key=str(lot),
                message=(
                    f"Date Mismatch: Lot #{lot} (Shipped {ship_ts.date()}, "
                    f"Received {recv_ts.date()} - {reason})"
                ),
                shipped=str(ship_ts.date()),
                received=str(recv_ts.date()),
                delay_days=delay,
            )
        )
    return out


def compare_datasets(
    supplier_records: Sequence[DistributionRecord],
    customer_records: Sequence[DistributionRecord],
    *,
    max_delay_days: int = DEFAULT_MAX_DELAY_DAYS,
) -> Dict[str, Any]:
    shipped = records_to_frame(supplier_records)
    received = records_to_frame(customer_records)
    max_delay_days = max(0, int(max_delay_days))

    findings: List[Finding] = []
    if not shipped.empty:
        findings.extend(missing_serials(shipped, received))
        if not received.empty:
            findings.extend(date_mismatches(shipped, received, max_delay_days=max_delay_days))

    severity_order = {"High": 0, "Medium": 1}
    findings.sort(key=lambda f: severity_order.get(f.severity, 2))
    return {
        "max_delay_days": max_delay_days,
        "counts": {
            "shipped_rows": int(len(shipped)),
            "received_rows": int(len(received)),
            "missing_serials": sum(1 for f in findings if f.kind == "missing_serial"),
            "date_mismatches": sum(1 for f in findings if f.kind == "date_mismatch"),
        },
        "findings": [asdict(f) for f in findings],
    }
