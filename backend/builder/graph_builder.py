"""
Graph builder: application records -> star graph (primary -> every other app).
Positions stay at (0, 0); only the layout engine assigns them.
"""

from typing import Any, Iterable, List, Sequence, Tuple, Union

from pydantic import ValidationError

from shared.errors import DanglingReferenceError, DuplicateNodeIdError, InvalidTopologyError, RecordFormatError
from shared.models import ApplicationRecord, GraphEdge, GraphNode

ID_STRATEGY_COMPOSITE = "composite"
ID_STRATEGY_RAW = "raw"
ID_STRATEGIES = (ID_STRATEGY_COMPOSITE, ID_STRATEGY_RAW)
DEFAULT_ID_STRATEGY = ID_STRATEGY_COMPOSITE


def parse_records(data: Any) -> List[ApplicationRecord]:
    """Validate a decoded JSON array into ApplicationRecords."""
    if not isinstance(data, (list, tuple)):
        raise RecordFormatError(f"Expected a JSON array of application records, got {type(data).__name__}")
    records = []
    for idx, item in enumerate(data):
        if isinstance(item, ApplicationRecord):
            records.append(item)
            continue
        try:
            records.append(ApplicationRecord.model_validate(item))
        except ValidationError as e:
            raise RecordFormatError(f"Invalid application record at index {idx}: {e}") from e
    return records


def node_id_for(record: ApplicationRecord, index: int, id_strategy: str = DEFAULT_ID_STRATEGY) -> str:
    """composite: '{appId}-{index}' (safe with repeated appIds). raw: appId."""
    if id_strategy == ID_STRATEGY_COMPOSITE:
        return f"{record.app_id}-{index}"
    if id_strategy == ID_STRATEGY_RAW:
        return record.app_id
    raise ValueError(f"Unknown id strategy: {id_strategy!r} (expected one of {', '.join(ID_STRATEGIES)})")


def edge_id_for(source: str, target: str) -> str:
    return f"e-{source}-{target}"


def _find_primary(records: Sequence[ApplicationRecord]) -> int:
    primaries = [idx for idx, r in enumerate(records) if r.is_primary]
    if len(primaries) != 1:
        raise InvalidTopologyError(
            f"Expected exactly one primary application, found {len(primaries)}"
        )
    return primaries[0]


def build_graph(
    records: Iterable[Union[ApplicationRecord, dict]],
    id_strategy: str = DEFAULT_ID_STRATEGY,
) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """Build (nodes, edges) in input order. Raises InvalidTopologyError unless exactly one primary."""
    records = parse_records(list(records))

    node_ids = [node_id_for(r, idx, id_strategy) for idx, r in enumerate(records)]
    seen = set()
    for nid in node_ids:
        if nid in seen:
            raise DuplicateNodeIdError(f"Duplicate node id {nid!r}; use the composite id strategy for repeated appIds")
        seen.add(nid)

    primary_idx = _find_primary(records)
    primary_id = node_ids[primary_idx]

    nodes = [GraphNode(id=nid, label=r.name) for nid, r in zip(node_ids, records)]
    edges = [
        GraphEdge(id=edge_id_for(primary_id, nid), source_node_id=primary_id, target_node_id=nid)
        for idx, nid in enumerate(node_ids)
        if idx != primary_idx
    ]

    validate_references(nodes, edges)
    return nodes, edges


def validate_references(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> None:
    """Every edge endpoint must be a node id in nodes."""
    ids = {n.id for n in nodes}
    for e in edges:
        for end in (e.source_node_id, e.target_node_id):
            if end not in ids:
                raise DanglingReferenceError(f"Edge {e.id!r} references unknown node {end!r}")
