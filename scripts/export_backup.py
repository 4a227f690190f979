#!/usr/bin/env python3
"""
Backup Export Script

Writes the saved store snapshot to a JSON backup file, using the storage
backend configured in the environment (.env).

Usage:
    python export_backup.py
    python export_backup.py --output-dir backups/
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import load_settings
from services.persistence_service import build_gateway
from services.store_service import StoreController


def main() -> int:
    parser = argparse.ArgumentParser(description="Export the store snapshot to a JSON backup file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the backup file (default: current directory)",
    )

    args = parser.parse_args()

    try:
        controller = StoreController.bootstrap(build_gateway(load_settings()))
        backup = controller.export_backup()

        args.output_dir.mkdir(parents=True, exist_ok=True)
        output = args.output_dir / backup.filename
        output.write_bytes(backup.content)

        state = controller.state
        print("=" * 60)
        print("BACKUP SUMMARY")
        print("=" * 60)
        print(f"Clients:    {len(state.clients)}")
        print(f"Products:   {len(state.products)}")
        print(f"Sales:      {len(state.sales)}")
        print(f"Deliveries: {len(state.deliveries)}")
        print(f"Deliverers: {len(state.deliverers)}")
        print()
        print(f"Output file: {output}")
        print("=" * 60)
        return 0

    except KeyboardInterrupt:
        print("\n\nExport interrupted by user")
        return 130

    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
