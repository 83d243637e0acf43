"""
Referential integrity checks between the node table and the path table.

All checks are advisory: they report issues for a human editor and never
remove or reject data.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .data_structures import CareerPath, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrityIssue:
    """One advisory finding about the dataset."""
    kind: str  # 'missing_reference', 'empty_id' or 'duplicate_id'
    field: str
    value: str
    row: Optional[int] = None

    @property
    def message(self) -> str:
        location = f"Row {self.row}" if self.row is not None else "Dataset"
        if self.kind == 'missing_reference':
            return (f"Warning [{location}]: Path '{self.field}' ID "
                    f"\"{self.value}\" not found in nodes.")
        if self.kind == 'duplicate_id':
            return f"Warning [{location}]: Node ID \"{self.value}\" is not unique."
        return f"Warning [{location}]: Node has an empty '{self.field}'."

    def __str__(self) -> str:
        return self.message


def _row_of(record, index: int) -> int:
    return record.row if record.row is not None else index + 2


def check_path_references(paths: Iterable[CareerPath], node_ids: Set[str],
                          log: bool = True) -> List[IntegrityIssue]:
    """
    Check both endpoints of every path against the known node ids.

    Row numbers come from the path's source record when it was read from CSV,
    otherwise from its position (first path is row 2, after the header).

    Returns:
        One issue per dangling endpoint, in path order ('from' before 'to')
    """
    issues: List[IntegrityIssue] = []
    for index, path in enumerate(paths):
        row = _row_of(path, index)
        for field_name, value in (('from', path.source), ('to', path.target)):
            if value not in node_ids:
                issues.append(IntegrityIssue('missing_reference', field_name, value, row))

    if log:
        for issue in issues:
            logger.warning(issue.message)
    return issues


def check_node_identifiers(nodes: Iterable[Node], log: bool = True) -> List[IntegrityIssue]:
    """
    Report empty and duplicated node ids.

    Row numbers follow the same rule as check_path_references.
    """
    nodes = list(nodes)
    issues: List[IntegrityIssue] = []

    for index, node in enumerate(nodes):
        if not node.id or not node.id.strip():
            issues.append(IntegrityIssue('empty_id', 'id', node.id or '', _row_of(node, index)))

    # Reported once per id, at its second occurrence
    counts = Counter()
    for index, node in enumerate(nodes):
        if not node.id:
            continue
        counts[node.id] += 1
        if counts[node.id] == 2:
            issues.append(IntegrityIssue('duplicate_id', 'id', node.id, _row_of(node, index)))

    if log:
        for issue in issues:
            logger.warning(issue.message)
    return issues
