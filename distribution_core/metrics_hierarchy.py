from __future__ import annotations

from typing import Any, Dict, List, Sequence

from distribution_core.records import DistributionRecord, records_to_frame

CATEGORY_LABEL_CHARS = 15


def build_hierarchy(records: Sequence[DistributionRecord]) -> List[Dict[str, Any]]:
    df = records_to_frame(records)
    if df.empty:
        return []

    counts = df.groupby(["category", "model"], sort=False).size().reset_index(name="size")
    tree: List[Dict[str, Any]] = []
    by_category: Dict[str, Dict[str, Any]] = {}
    for row in counts.to_dict(orient="records"):
        category = str(row["category"])
        if category not in by_category:
            # Grouped on the full category; only the display name is cut.
            by_category[category] = {"name": category[:CATEGORY_LABEL_CHARS], "children": []}
            tree.append(by_category[category])
        by_category[category]["children"].append({"name": str(row["model"]), "size": int(row["size"])})
    return tree
