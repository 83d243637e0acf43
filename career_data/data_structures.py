"""
Core data structures for the career dataset sync engine.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Any, Optional
import json
import logging
from pathlib import Path

import yaml


NODE_COLUMNS = ['id', 'label', 'department', 'level',
                'salary', 'description', 'requirements']
PATH_COLUMNS = ['from', 'to', 'timeframe']

# Key order of node objects in career-nodes.json
NODE_JSON_FIELDS = ['id', 'label', 'department', 'level',
                    'description', 'requirements', 'salary']

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


@dataclass
class Node:
    """A career position in the hospital workforce graph."""
    id: str
    label: str = ''
    department: str = ''
    level: str = ''
    description: str = ''
    requirements: List[str] = field(default_factory=list)
    salary: str = ''  # pay-grade bucket, never numeric
    extra: Dict[str, Any] = field(default_factory=dict)
    row: Optional[int] = None  # source record number when read from CSV

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the career-nodes.json object shape."""
        data = {
            'id': self.id,
            'label': self.label,
            'department': self.department,
            'level': self.level,
            'description': self.description,
            'requirements': list(self.requirements),
            'salary': self.salary,
        }
        for key, value in self.extra.items():
            if key not in data:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Node':
        """Create Node from a JSON object, keeping unknown keys in extra."""
        requirements = data.get('requirements') or []
        if isinstance(requirements, str):
            requirements = [requirements]
        return cls(
            id=data.get('id', ''),
            label=data.get('label', ''),
            department=data.get('department', ''),
            level=data.get('level', ''),
            description=data.get('description', ''),
            requirements=list(requirements),
            salary=data.get('salary', ''),
            extra={k: v for k, v in data.items() if k not in NODE_JSON_FIELDS}
        )


@dataclass
class CareerPath:
    """A directed transition between two node ids."""
    source: str
    target: str
    timeframe: Optional[str] = None
    row: Optional[int] = None  # source record number when read from CSV

    def to_dict(self) -> Dict[str, Any]:
        data = {'from': self.source, 'to': self.target}
        if self.timeframe is not None:
            data['timeframe'] = self.timeframe
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CareerPath':
        return cls(
            source=data.get('from', ''),
            target=data.get('to', ''),
            timeframe=data.get('timeframe')
        )


@dataclass
class Dataset:
    """Ordered node set and path set describing a career-progression graph."""
    nodes: List[Node] = field(default_factory=list)
    paths: List[CareerPath] = field(default_factory=list)

    @property
    def node_ids(self) -> set:
        return {node.id for node in self.nodes}

    def nodes_document(self) -> Dict[str, Any]:
        """Document written to career-nodes.json."""
        return {'nodes': [node.to_dict() for node in self.nodes]}

    def paths_document(self) -> Dict[str, Any]:
        """Document written to career-paths.json."""
        return {'paths': [path.to_dict() for path in self.paths]}

    @classmethod
    def from_documents(cls, nodes_doc: Dict[str, Any],
                       paths_doc: Dict[str, Any]) -> 'Dataset':
        return cls(
            nodes=[Node.from_dict(n) for n in nodes_doc.get('nodes', [])],
            paths=[CareerPath.from_dict(p) for p in paths_doc.get('paths', [])]
        )


@dataclass
class SyncConfig:
    """Configuration for the CSV/JSON sync entry points and the data loader."""
    data_dir: str = 'data'
    nodes_json: str = 'career-nodes.json'
    paths_json: str = 'career-paths.json'
    nodes_csv: str = 'nodes.csv'
    paths_csv: str = 'paths.csv'
    node_columns: List[str] = field(default_factory=lambda: list(NODE_COLUMNS))
    path_columns: List[str] = field(default_factory=lambda: list(PATH_COLUMNS))
    list_delimiter: str = ';'
    json_indent: int = 2
    atomic_writes: bool = True
    encoding: str = 'utf-8'

    # Runtime loader
    base_url: str = 'assets/data'
    request_timeout: float = 15.0

    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration parameters."""
        if not self.data_dir:
            raise ValueError("data_dir must be a non-empty string")

        if not self.node_columns:
            raise ValueError("node_columns cannot be empty")

        if not self.path_columns:
            raise ValueError("path_columns cannot be empty")

        if 'id' not in self.node_columns:
            raise ValueError("node_columns must include 'id'")

        for column in ('from', 'to'):
            if column not in self.path_columns:
                raise ValueError(f"path_columns must include '{column}'")

        if len(self.list_delimiter) != 1 or self.list_delimiter in (',', '"', '\n', '\r'):
            raise ValueError(
                f"list_delimiter must be a single character other than comma, quote or newline, got: {self.list_delimiter!r}")

        if self.json_indent < 0:
            raise ValueError("json_indent must be non-negative")

        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got: {self.log_level}")

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def nodes_json_path(self) -> Path:
        return self.data_path / self.nodes_json

    @property
    def paths_json_path(self) -> Path:
        return self.data_path / self.paths_json

    @property
    def nodes_csv_path(self) -> Path:
        return self.data_path / self.nodes_csv

    @property
    def paths_csv_path(self) -> Path:
        return self.data_path / self.paths_csv

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'data_dir': self.data_dir,
            'nodes_json': self.nodes_json,
            'paths_json': self.paths_json,
            'nodes_csv': self.nodes_csv,
            'paths_csv': self.paths_csv,
            'node_columns': list(self.node_columns),
            'path_columns': list(self.path_columns),
            'list_delimiter': self.list_delimiter,
            'json_indent': self.json_indent,
            'atomic_writes': self.atomic_writes,
            'encoding': self.encoding,
            'base_url': self.base_url,
            'request_timeout': self.request_timeout,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SyncConfig':
        """Create SyncConfig from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_keys}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, file_path: str) -> 'SyncConfig':
        """Load configuration from YAML file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, file_path: str) -> 'SyncConfig':
        """Load configuration from JSON file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        return cls.from_dict(data)

    def save_yaml(self, file_path: str) -> None:
        """Save configuration to YAML file."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def save_json(self, file_path: str) -> None:
        """Save configuration to JSON file."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)


@dataclass
class SyncReport:
    """Outcome of one export or import run."""
    direction: str  # 'export' or 'import'
    node_count: int = 0
    path_count: int = 0
    files_written: List[str] = field(default_factory=list)
    files_skipped: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dropped_rows: Dict[str, List[int]] = field(default_factory=dict)

    def __post_init__(self):
        if self.direction not in ('export', 'import', 'validate'):
            raise ValueError(
                f"direction must be 'export', 'import' or 'validate', got: {self.direction}")

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'direction': self.direction,
            'node_count': self.node_count,
            'path_count': self.path_count,
            'files_written': list(self.files_written),
            'files_skipped': list(self.files_skipped),
            'warnings': list(self.warnings),
            'dropped_rows': {k: list(v) for k, v in self.dropped_rows.items()},
        }

    def save_json(self, file_path: str) -> None:
        """Save report to JSON file."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
