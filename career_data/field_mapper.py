"""
Mapping between the flat CSV row shape and the structured JSON shape.

Export narrows nodes to the editable CSV columns and leaves list flattening to
the serializer. Import splits the requirements cell back into a list, trimming
pieces and dropping empty ones, so the two directions are inverse up to
whitespace inside requirements.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .csv_parser import CsvTable
from .data_structures import CareerPath, Node, NODE_COLUMNS, PATH_COLUMNS

logger = logging.getLogger(__name__)


def split_requirements(cell: Optional[str], delimiter: str = ';') -> List[str]:
    """Split a requirements cell into trimmed, non-empty entries."""
    if not cell:
        return []
    return [piece.strip() for piece in cell.split(delimiter) if piece.strip()]


def node_to_row(node: Node, columns: Sequence[str] = NODE_COLUMNS,
                list_delimiter: str = ';') -> Dict[str, Any]:
    """Select the CSV columns of a node; requirements stay a list."""
    source = node.to_dict()
    row = {column: source.get(column) for column in columns}

    for requirement in node.requirements:
        if list_delimiter in str(requirement):
            # Re-import will split this entry in two
            logger.warning(
                f"Node '{node.id}': requirement {requirement!r} contains the "
                f"list delimiter {list_delimiter!r}")
    return row


def path_to_row(path: CareerPath,
                columns: Sequence[str] = PATH_COLUMNS) -> Dict[str, Any]:
    source = path.to_dict()
    return {column: source.get(column) for column in columns}


def nodes_to_rows(nodes: Iterable[Node], columns: Sequence[str] = NODE_COLUMNS,
                  list_delimiter: str = ';') -> List[Dict[str, Any]]:
    return [node_to_row(node, columns, list_delimiter) for node in nodes]


def paths_to_rows(paths: Iterable[CareerPath],
                  columns: Sequence[str] = PATH_COLUMNS) -> List[Dict[str, Any]]:
    return [path_to_row(path, columns) for path in paths]


def row_to_node(row: Dict[str, str], list_delimiter: str = ';',
                row_number: Optional[int] = None) -> Node:
    """
    Build a Node from a CSV row.

    Every field other than requirements stays a plain string; salary in
    particular is a pay-grade bucket and is never converted to a number.
    """
    return Node(
        id=row.get('id', ''),
        label=row.get('label', ''),
        department=row.get('department', ''),
        level=row.get('level', ''),
        description=row.get('description', ''),
        requirements=split_requirements(row.get('requirements'), list_delimiter),
        salary=row.get('salary', ''),
        row=row_number,
    )


def row_to_path(row: Dict[str, str], row_number: Optional[int] = None) -> CareerPath:
    return CareerPath(
        source=row.get('from', ''),
        target=row.get('to', ''),
        timeframe=row.get('timeframe'),
        row=row_number,
    )


def table_to_nodes(table: CsvTable, list_delimiter: str = ';') -> List[Node]:
    return [row_to_node(row, list_delimiter, number) for number, row in table.numbered_rows()]


def table_to_paths(table: CsvTable) -> List[CareerPath]:
    return [row_to_path(row, number) for number, row in table.numbered_rows()]
