#!/usr/bin/env python3
"""Small CLI to download asset history and print it as CSV.

Usage: python scripts/export_history.py "S&P 500" Gold > history.csv
"""
import sys
import logging

from data_pipeline.data_service import DataService
from utils.constants import ASSET_SYMBOLS

logging.basicConfig(level=logging.INFO, stream=sys.stderr)

def main():
    if len(sys.argv) < 2:
        print("Usage: export_history.py <ASSET> [ASSET ...]", file=sys.stderr)
        print(f"Assets: {', '.join(ASSET_SYMBOLS)}", file=sys.stderr)
        sys.exit(2)
    assets = sys.argv[1:]
    unknown = [a for a in assets if a not in ASSET_SYMBOLS]
    if unknown:
        print(f"Unknown assets: {', '.join(unknown)}", file=sys.stderr)
        sys.exit(2)
    sys.stdout.write(DataService().export(assets))

if __name__ == '__main__':
    main()
