from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from distribution_core.dashboard import compute_dashboard
from distribution_core.data import load_default_records, standardize
from distribution_core.filters import FilterState, ViewSettings, apply_filters
from distribution_core.records import DistributionRecord

logger = logging.getLogger(__name__)

SOURCE_DEFAULT = "default"
SOURCE_CUSTOM = "custom"


class DatasetSession:
    """Holds the one active record set plus the current filter state.

    The active set is replaced wholesale (default dataset or a fresh
    standardization), never merged. An ingestion that yields no records leaves
    the current set in place; ``ingest`` returns the produced count so the
    caller can report it.
    """

    def __init__(self, settings: Optional[ViewSettings] = None) -> None:
        self.settings = settings or ViewSettings()
        self.filters = FilterState()
        self._records: Tuple[DistributionRecord, ...] = tuple(load_default_records())
        self.source = SOURCE_DEFAULT

    @property
    def records(self) -> Tuple[DistributionRecord, ...]:
        return self._records

    def use_default(self) -> int:
        self._records = tuple(load_default_records())
        self.source = SOURCE_DEFAULT
        return len(self._records)

    def ingest(self, raw_input: str) -> int:
        produced = standardize(raw_input)
        if not produced:
            logger.warning("ingest produced no records; keeping %s dataset (%d rows)", self.source, len(self._records))
            return 0
        self._records = tuple(produced)
        self.source = SOURCE_CUSTOM
        logger.info("ingested %d records", len(produced))
        return len(produced)

    def set_filter(self, field: str, pattern: Optional[str]) -> FilterState:
        self.filters = self.filters.with_pattern(field, pattern)
        return self.filters

    def clear_filters(self) -> FilterState:
        self.filters = self.filters.cleared()
        return self.filters

    def filtered(self) -> List[DistributionRecord]:
        return apply_filters(self._records, self.filters)

    def dashboard(self, *, include_charts: bool = True) -> Dict[str, Any]:
        payload = compute_dashboard(
            self._records,
            self.filters,
            settings=self.settings,
            include_charts=include_charts,
        )
        payload["source"] = self.source
        return payload
