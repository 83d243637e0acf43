#!/usr/bin/env python3
"""
Command-line interface for the career dataset sync engine.

Keeps the human-edited CSV master copy (nodes.csv, paths.csv) and the JSON
runtime copy (career-nodes.json, career-paths.json) of the career-path
dataset in sync, and reports on dataset integrity.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .career_graph import build_career_graph, get_graph_statistics, save_graph
from .data_structures import SyncConfig, SyncReport
from .loader import CareerDataLoader, CareerDataLoaderError
from .logging_utils import setup_logging
from .sync import (DatasetReadError, export_dataset, import_dataset,
                   load_json_dataset, validate_dataset)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/sync_config.yaml'


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog='career-data',
        description="Career path dataset sync (CSV <-> JSON)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export the JSON runtime copy to the CSV master copy
  python -m career_data export

  # Rebuild the JSON files from edited CSV files
  python -m career_data import --data-dir src/assets/data

  # Check the CSV files for dangling path references without writing
  python -m career_data validate

  # Graph statistics of the JSON copy, also saved as GEXF
  python -m career_data summary --gexf career_graph.gexf

  # Fetch the dataset from a running deployment
  python -m career_data fetch https://careers.example.org/assets/data

  # Write the default configuration
  python -m career_data generate-config --output config/sync_config.yaml

Environment Variables:
  CAREER_DATA_DIR            Override data directory
  CAREER_DATA_BASE_URL       Override loader base URL
  CAREER_DATA_LOG_LEVEL      Set logging level (DEBUG, INFO, WARNING, ERROR)
  CAREER_DATA_ATOMIC_WRITES  true/false, write via temp file and rename
  CAREER_DATA_ENCODING       File encoding
        """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', '-c', type=str,
                        help=f'Path to configuration file (YAML or JSON, default: {DEFAULT_CONFIG_PATH} if present)')
    common.add_argument('--data-dir', '-d', type=str,
                        help='Directory holding the dataset files')
    common.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    export_parser = subparsers.add_parser(
        'export', parents=[common], help='Export JSON files to CSV')
    export_parser.add_argument('--report', type=str,
                               help='Save the run report as JSON')

    import_parser = subparsers.add_parser(
        'import', parents=[common], help='Import CSV files into JSON')
    import_parser.add_argument('--report', type=str,
                               help='Save the run report as JSON')

    subparsers.add_parser(
        'validate', parents=[common], help='Check CSV files without writing')

    summary_parser = subparsers.add_parser(
        'summary', parents=[common], help='Print career graph statistics of the JSON files')
    summary_parser.add_argument('--gexf', type=str,
                                help='Also save the career graph in GEXF format')

    fetch_parser = subparsers.add_parser(
        'fetch', parents=[common], help='Fetch the JSON files over HTTP and summarise them')
    fetch_parser.add_argument('base_url', nargs='?',
                              help='URL of the served data directory (default: config base_url)')

    config_parser = subparsers.add_parser(
        'generate-config', help='Write the default configuration file')
    config_parser.add_argument('--output', '-o', type=str, required=True,
                               help='Output path for configuration file')
    config_parser.add_argument('--format', choices=['yaml', 'json'], default='yaml',
                               help='Configuration file format')

    return parser


def load_config_from_file(config_path: str) -> SyncConfig:
    """Load configuration from file (YAML or JSON)."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if config_path.suffix.lower() == '.json':
        return SyncConfig.from_json(str(config_path))
    return SyncConfig.from_yaml(str(config_path))


def apply_env_overrides(config: SyncConfig) -> SyncConfig:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'CAREER_DATA_DIR': ('data_dir', str),
        'CAREER_DATA_BASE_URL': ('base_url', str),
        'CAREER_DATA_LOG_LEVEL': ('log_level', str),
        'CAREER_DATA_ATOMIC_WRITES': ('atomic_writes', lambda x: x.lower() == 'true'),
        'CAREER_DATA_ENCODING': ('encoding', str),
    }

    config_dict = config.to_dict()

    for env_var, (config_key, converter) in env_mappings.items():
        if env_var in os.environ:
            try:
                config_dict[config_key] = converter(os.environ[env_var])
                logger.debug(
                    f"Applied environment override: {config_key} = {config_dict[config_key]}")
            except (ValueError, TypeError) as e:
                logger.warning(
                    f"Invalid value for {env_var}: {os.environ[env_var]} ({e})")

    return SyncConfig.from_dict(config_dict)


def load_sync_config(config_path: Optional[str] = None) -> SyncConfig:
    """
    Resolve the configuration for a run.

    An explicit file wins; otherwise config/sync_config.yaml is used when it
    exists, else the defaults. Environment overrides are applied last.
    """
    if config_path:
        config = load_config_from_file(config_path)
    elif Path(DEFAULT_CONFIG_PATH).exists():
        config = load_config_from_file(DEFAULT_CONFIG_PATH)
    else:
        config = SyncConfig()
    return apply_env_overrides(config)


def apply_cli_overrides(config: SyncConfig, args: argparse.Namespace) -> SyncConfig:
    """Apply command-line argument overrides to configuration."""
    config_dict = config.to_dict()

    if getattr(args, 'data_dir', None):
        config_dict['data_dir'] = args.data_dir
    if getattr(args, 'log_level', None):
        config_dict['log_level'] = args.log_level
    if getattr(args, 'base_url', None):
        config_dict['base_url'] = args.base_url

    return SyncConfig.from_dict(config_dict)


def _prepare(args: argparse.Namespace) -> SyncConfig:
    config = apply_cli_overrides(load_sync_config(getattr(args, 'config', None)), args)
    setup_logging(config.log_level, config.log_file)
    return config


def _print_report(report: SyncReport) -> None:
    print(f"{report.direction.capitalize()} finished: "
          f"{report.node_count} nodes, {report.path_count} paths")
    for path in report.files_written:
        print(f"  written: {path}")
    for path in report.files_skipped:
        print(f"  skipped: {path}")
    for source, rows in report.dropped_rows.items():
        print(f"  dropped rows in {source}: {', '.join(str(r) for r in rows)}")
    if report.warnings:
        print(f"  {report.warning_count} warning(s)")


def cmd_export(args: argparse.Namespace) -> int:
    """Execute the export command."""
    try:
        config = _prepare(args)
        report = export_dataset(config)
        if getattr(args, 'report', None):
            report.save_json(args.report)
        _print_report(report)
        return 0
    except Exception as e:
        logger.error(f"Error exporting data: {e}")
        return 1


def cmd_import(args: argparse.Namespace) -> int:
    """Execute the import command."""
    try:
        config = _prepare(args)
        report = import_dataset(config)
        if getattr(args, 'report', None):
            report.save_json(args.report)
        _print_report(report)
        return 0
    except Exception as e:
        logger.error(f"Error updating data: {e}")
        return 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute the validate command."""
    try:
        config = _prepare(args)
        report = validate_dataset(config)
    except DatasetReadError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Validation failed: {e}")
        return 1

    _print_report(report)
    for warning in report.warnings:
        print(f"  {warning}")
    if not report.warnings and not report.dropped_rows:
        print("  no integrity problems found")
    return 0


def _print_statistics(stats: dict) -> None:
    print("Career graph statistics:")
    for key, value in stats.items():
        if isinstance(value, list):
            value = ', '.join(value) if value else '-'
        elif isinstance(value, dict):
            value = ', '.join(f"{k or '(none)'}: {v}" for k, v in sorted(value.items())) or '-'
        print(f"  {key}: {value}")


def cmd_summary(args: argparse.Namespace) -> int:
    """Execute the summary command."""
    try:
        config = _prepare(args)
        dataset = load_json_dataset(config)
        graph = build_career_graph(dataset)
        _print_statistics(get_graph_statistics(graph))
        if args.gexf:
            save_graph(graph, args.gexf)
            print(f"Graph saved to: {args.gexf}")
        return 0
    except Exception as e:
        logger.error(f"Summary failed: {e}")
        return 1


def cmd_fetch(args: argparse.Namespace) -> int:
    """Execute the fetch command."""
    try:
        config = _prepare(args)
        loader = CareerDataLoader(config.base_url, timeout=config.request_timeout,
                                  nodes_file=config.nodes_json,
                                  paths_file=config.paths_json)
        dataset = loader.load()
        _print_statistics(get_graph_statistics(build_career_graph(dataset)))
        return 0
    except CareerDataLoaderError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Fetch failed: {e}")
        return 1


def cmd_generate_config(args: argparse.Namespace) -> int:
    """Execute the generate-config command."""
    try:
        config = SyncConfig()
        if args.format == 'json':
            config.save_json(args.output)
        else:
            config.save_yaml(args.output)
        print(f"Configuration written to: {args.output}")
        return 0
    except (OSError, ValueError) as e:
        print(f"Error writing configuration: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Execute command
    if args.command == 'export':
        return cmd_export(args)
    elif args.command == 'import':
        return cmd_import(args)
    elif args.command == 'validate':
        return cmd_validate(args)
    elif args.command == 'summary':
        return cmd_summary(args)
    elif args.command == 'fetch':
        return cmd_fetch(args)
    elif args.command == 'generate-config':
        return cmd_generate_config(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


def export_main() -> int:
    """Entry point of the no-argument JSON -> CSV export script."""
    return main(['export'])


def import_main() -> int:
    """Entry point of the no-argument CSV -> JSON import script."""
    return main(['import'])


if __name__ == '__main__':
    sys.exit(main())
