from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from distribution_core.records import DistributionRecord

LICENSE_LABEL_CHARS = 6
ELLIPSIS = "..."


def stage_labels(record: DistributionRecord) -> Tuple[str, str, str, str]:
    return (
        f"Supplier: {record.supplier_id}",
        f"License: {record.license_no[:LICENSE_LABEL_CHARS]}{ELLIPSIS}",
        f"Model: {record.model}",
        f"Customer: {record.customer_id}",
    )


def build_flow_graph(records: Sequence[DistributionRecord]) -> Dict[str, List[Dict[str, Any]]]:
    """Supplier -> License -> Model -> Customer flow as Sankey nodes and links.

    Node indices follow first appearance. A (source, target) pair seen again
    bumps the existing link's ``value``. The caller bounds ``records``; the
    dashboard passes at most ``ViewSettings.flow_record_limit`` of them.
    """
    nodes: List[Dict[str, Any]] = []
    links: List[Dict[str, Any]] = []
    node_index: Dict[str, int] = {}
    link_index: Dict[Tuple[int, int], int] = {}

    def node(label: str) -> int:
        if label not in node_index:
            node_index[label] = len(nodes)
            nodes.append({"name": label})
        return node_index[label]

    for record in records:
        path = [node(label) for label in stage_labels(record)]
        for source, target in zip(path, path[1:]):
            key = (source, target)
            if key in link_index:
                links[link_index[key]]["value"] += 1
            else:
                link_index[key] = len(links)
                links.append({"source": source, "target": target, "value": 1})

    return {"nodes": nodes, "links": links}
