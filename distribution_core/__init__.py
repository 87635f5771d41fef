"""Core (UI-agnostic) distribution analytics logic.

This package contains:
- record standardization (CSV / JSON text -> canonical records)
- filter state + substring filtering
- view compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
