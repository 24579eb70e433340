"""
Command-line front end: convert a PostgreSQL columns JSON file.

    psql2ch columns.json [--output result.json] [--indent 2] [--log-level INFO]
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import configure_logging
from .converter import convert_columns
from .exceptions import Psql2ChError
from .loader import load_columns, result_to_dict
from .logging_utils import app_logger

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='psql2ch',
        description='Convert PostgreSQL columns to ClickHouse, Kafka engine and Athena schemas',
    )
    parser.add_argument(
        'columns_file',
        help='JSON file with a postgres_columns list (or a bare list of columns)',
    )
    parser.add_argument(
        '--output', '-o',
        help='Write the result to this file instead of stdout',
    )
    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help='JSON indentation (default: 2)',
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help='Log level for the psql2ch logger (default: WARNING)',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    options = build_parser().parse_args(argv)
    configure_logging(options.log_level)

    try:
        columns = load_columns(options.columns_file)
        result = convert_columns(columns)
    except Psql2ChError as e:
        app_logger.debug(f"Conversion of {options.columns_file} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = json.dumps(result_to_dict(result), indent=options.indent)
    if options.output:
        with open(options.output, 'w') as f:
            f.write(output + '\n')
        app_logger.info(f"Wrote {len(result.clickhouse_columns)} column(s) to {options.output}")
    else:
        print(output)
    return 0
