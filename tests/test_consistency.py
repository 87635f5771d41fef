from __future__ import annotations

from distribution_core.consistency import compare_datasets
from distribution_core.records import DistributionRecord


def _rec(serial: str, lot: str, date: str) -> DistributionRecord:
    return DistributionRecord(serial_no=serial, lot_no=lot, delivery_date=date)


def test_missing_serial_and_late_lot_are_reported() -> None:
    shipped = [_rec("SN-1", "L1", "20250101"), _rec("SN-2", "L2", "20250101")]
    received = [_rec("SN-1", "L1", "20250110")]

    report = compare_datasets(shipped, received)

    assert report["counts"]["missing_serials"] == 1
    assert report["counts"]["date_mismatches"] == 1
    missing, late = report["findings"]
    assert missing["kind"] == "missing_serial"
    assert missing["severity"] == "High"
    assert missing["key"] == "SN-2"
    assert late["kind"] == "date_mismatch"
    assert late["severity"] == "Medium"
    assert late["delay_days"] == 9
    assert late["shipped"] == "2025-01-01"
    assert late["received"] == "2025-01-10"


def test_delivery_within_threshold_is_not_flagged() -> None:
    shipped = [_rec("SN-1", "L1", "20250101")]
    received = [_rec("SN-1", "L1", "20250104")]

    assert compare_datasets(shipped, received)["findings"] == []
    assert len(compare_datasets(shipped, received, max_delay_days=2)["findings"]) == 1


def test_receipt_before_shipment_is_high_severity() -> None:
    report = compare_datasets([_rec("S", "L1", "20250105")], [_rec("S", "L1", "20250101")])

    (finding,) = report["findings"]
    assert finding["severity"] == "High"
    assert finding["delay_days"] == -4


def test_blank_keys_and_bad_dates_are_skipped() -> None:
    shipped = [_rec("", "", "20250101"), _rec("SN-1", "L1", "someday")]
    received = [_rec("SN-1", "L1", "20250301")]

    report = compare_datasets(shipped, received)

    assert report["findings"] == []
    assert report["counts"]["shipped_rows"] == 2


def test_empty_inputs() -> None:
    assert compare_datasets([], [])["findings"] == []
    report = compare_datasets([_rec("SN-1", "L1", "20250101")], [])
    assert [f["key"] for f in report["findings"]] == ["SN-1"]
