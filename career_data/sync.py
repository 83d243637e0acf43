"""
Dataset sync driver: JSON -> CSV export and CSV -> JSON import.

Each entry point is a straight-line batch run that reads one representation,
transforms it in memory and overwrites the other representation wholesale.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .csv_parser import CsvTable, parse_csv
from .csv_serializer import to_csv
from .data_structures import CareerPath, Dataset, Node, SyncConfig, SyncReport
from .field_mapper import nodes_to_rows, paths_to_rows, table_to_nodes, table_to_paths
from .integrity import check_node_identifiers, check_path_references

logger = logging.getLogger(__name__)


class DatasetReadError(Exception):
    """Raised when a required input file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


def read_text(path: Path, encoding: str = 'utf-8') -> str:
    """Read a whole file, wrapping I/O and decoding failures."""
    try:
        with open(path, 'r', encoding=encoding, newline='') as f:
            return f.read()
    except FileNotFoundError:
        raise DatasetReadError(path, "file not found")
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetReadError(path, str(e))


def read_json_document(path: Path, key: str, encoding: str = 'utf-8') -> List[Dict[str, Any]]:
    """Load `{key: [...]}` from a JSON file and return the list."""
    text = read_text(path, encoding)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DatasetReadError(path, f"invalid JSON ({e})")

    if not isinstance(document, dict) or not isinstance(document.get(key), list):
        raise DatasetReadError(path, f"expected an object with a '{key}' list")
    return document[key]


def _replacement_mode(path: Path) -> int:
    """Permission bits for a file about to replace `path`."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text(path: Path, content: str, encoding: str = 'utf-8',
               atomic: bool = True) -> None:
    """
    Write a file, replacing any existing content.

    With atomic=True the content goes to a temporary file in the same
    directory which is then renamed over the target.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not atomic:
        with open(path, 'w', encoding=encoding, newline='') as f:
            f.write(content)
        return

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp',
                                    dir=str(path.parent))
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
            f.write(content)
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, _replacement_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def dump_json(document: Dict[str, Any], indent: int = 2) -> str:
    return json.dumps(document, indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Export: JSON -> CSV
# ---------------------------------------------------------------------------

def export_dataset(config: SyncConfig) -> SyncReport:
    """
    Export career-nodes.json / career-paths.json to nodes.csv / paths.csv.

    A missing JSON file is logged and its CSV is skipped; the other file is
    still exported.

    Raises:
        DatasetReadError: If a present JSON file cannot be read or parsed
    """
    report = SyncReport(direction='export')

    if config.nodes_json_path.exists():
        records = read_json_document(config.nodes_json_path, 'nodes', config.encoding)
        nodes = [Node.from_dict(record) for record in records]
        rows = nodes_to_rows(nodes, config.node_columns, config.list_delimiter)
        write_text(config.nodes_csv_path,
                   to_csv(rows, config.node_columns, config.list_delimiter),
                   config.encoding, config.atomic_writes)
        report.node_count = len(nodes)
        report.files_written.append(str(config.nodes_csv_path))
        logger.info(f"{config.nodes_csv} created ({len(nodes)} nodes)")
    else:
        message = f"{config.nodes_json} not found"
        logger.warning(message)
        report.warnings.append(message)
        report.files_skipped.append(str(config.nodes_csv_path))

    if config.paths_json_path.exists():
        records = read_json_document(config.paths_json_path, 'paths', config.encoding)
        paths = [CareerPath.from_dict(record) for record in records]
        rows = paths_to_rows(paths, config.path_columns)
        write_text(config.paths_csv_path,
                   to_csv(rows, config.path_columns, config.list_delimiter),
                   config.encoding, config.atomic_writes)
        report.path_count = len(paths)
        report.files_written.append(str(config.paths_csv_path))
        logger.info(f"{config.paths_csv} created ({len(paths)} paths)")
    else:
        message = f"{config.paths_json} not found"
        logger.warning(message)
        report.warnings.append(message)
        report.files_skipped.append(str(config.paths_csv_path))

    return report


# ---------------------------------------------------------------------------
# Import: CSV -> JSON
# ---------------------------------------------------------------------------

def read_csv_tables(config: SyncConfig) -> Tuple[CsvTable, CsvTable]:
    """
    Read and parse both CSV master files.

    Both files are read before anything is parsed so that a missing file
    aborts the run without side effects.
    """
    logger.info("Reading CSV files...")
    nodes_raw = read_text(config.nodes_csv_path, config.encoding)
    paths_raw = read_text(config.paths_csv_path, config.encoding)

    nodes_table = parse_csv(nodes_raw, source=config.nodes_csv)
    paths_table = parse_csv(paths_raw, source=config.paths_csv)
    return nodes_table, paths_table


def build_dataset(nodes_table: CsvTable, paths_table: CsvTable,
                  config: SyncConfig, report: Optional[SyncReport] = None) -> Dataset:
    """Map parsed tables to a Dataset and run the advisory integrity checks."""
    nodes = table_to_nodes(nodes_table, config.list_delimiter)
    paths = table_to_paths(paths_table)
    dataset = Dataset(nodes=nodes, paths=paths)

    issues = check_node_identifiers(nodes)
    issues += check_path_references(paths, dataset.node_ids)

    if report is not None:
        report.node_count = len(nodes)
        report.path_count = len(paths)
        report.warnings.extend(issue.message for issue in issues)
        if nodes_table.stats.dropped_rows:
            report.dropped_rows[config.nodes_csv] = list(nodes_table.stats.dropped_rows)
        if paths_table.stats.dropped_rows:
            report.dropped_rows[config.paths_csv] = list(paths_table.stats.dropped_rows)
    return dataset


def validate_dataset(config: SyncConfig) -> SyncReport:
    """Parse the CSV files and run integrity checks without writing anything."""
    report = SyncReport(direction='validate')
    nodes_table, paths_table = read_csv_tables(config)
    build_dataset(nodes_table, paths_table, config, report)
    return report


def import_dataset(config: SyncConfig) -> SyncReport:
    """
    Import nodes.csv / paths.csv into career-nodes.json / career-paths.json.

    Integrity problems are logged but the paths are still written.

    Raises:
        DatasetReadError: If either CSV file cannot be read
    """
    report = SyncReport(direction='import')
    nodes_table, paths_table = read_csv_tables(config)
    dataset = build_dataset(nodes_table, paths_table, config, report)

    write_text(config.nodes_json_path,
               dump_json(dataset.nodes_document(), config.json_indent),
               config.encoding, config.atomic_writes)
    report.files_written.append(str(config.nodes_json_path))

    write_text(config.paths_json_path,
               dump_json(dataset.paths_document(), config.json_indent),
               config.encoding, config.atomic_writes)
    report.files_written.append(str(config.paths_json_path))

    logger.info("Successfully updated JSON files.")
    logger.info(f"Processed {len(dataset.nodes)} nodes and {len(dataset.paths)} paths.")
    return report


def load_json_dataset(config: SyncConfig) -> Dataset:
    """Load the JSON runtime copy from the data directory."""
    nodes = read_json_document(config.nodes_json_path, 'nodes', config.encoding)
    paths = read_json_document(config.paths_json_path, 'paths', config.encoding)
    return Dataset.from_documents({'nodes': nodes}, {'paths': paths})
