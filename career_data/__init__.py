"""
Career Path Dataset Sync

Keeps the CSV master copy and the JSON runtime copy of a hospital career-path
dataset (job roles and the transitions between them) in sync.
"""

from .data_structures import (
    Node,
    CareerPath,
    Dataset,
    SyncConfig,
    SyncReport,
    NODE_COLUMNS,
    PATH_COLUMNS
)
from .csv_parser import CsvTable, CsvParseStats, parse_csv
from .csv_serializer import encode_field, to_csv
from .field_mapper import split_requirements
from .integrity import IntegrityIssue, check_path_references, check_node_identifiers
from .sync import DatasetReadError, export_dataset, import_dataset, validate_dataset
from .career_graph import build_career_graph, get_graph_statistics
from .loader import CareerDataLoader, CareerDataLoaderError, remap_node_keys

__version__ = "1.0.0"

__all__ = [
    # Data model
    'Node',
    'CareerPath',
    'Dataset',
    'SyncConfig',
    'SyncReport',
    'NODE_COLUMNS',
    'PATH_COLUMNS',

    # CSV codec
    'CsvTable',
    'CsvParseStats',
    'parse_csv',
    'encode_field',
    'to_csv',
    'split_requirements',

    # Integrity
    'IntegrityIssue',
    'check_path_references',
    'check_node_identifiers',

    # Sync driver
    'DatasetReadError',
    'export_dataset',
    'import_dataset',
    'validate_dataset',

    # Graph and runtime loading
    'build_career_graph',
    'get_graph_statistics',
    'CareerDataLoader',
    'CareerDataLoaderError',
    'remap_node_keys',
]
