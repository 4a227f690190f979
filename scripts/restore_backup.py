#!/usr/bin/env python3
"""
Backup Restore Script

Replaces the saved store snapshot with the contents of a JSON backup file.
An invalid file is rejected and the saved snapshot is left untouched.

Usage:
    python restore_backup.py h-agua-backup-2025-01-31.json
    python restore_backup.py h-agua-backup-2025-01-31.json --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import load_settings
from services.persistence_service import RestoreError, build_gateway


def main() -> int:
    parser = argparse.ArgumentParser(description="Restore the store from a JSON backup file")
    parser.add_argument("backup", type=Path, help="Backup file produced by the export")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the file without replacing the saved snapshot",
    )

    args = parser.parse_args()

    try:
        gateway = build_gateway(load_settings())
        content = args.backup.read_bytes()

        # The current snapshot is not loaded, so a corrupt one can be replaced
        if args.dry_run:
            state = gateway.parse_backup(content)
        else:
            state = gateway.restore(content)

        print(f"{'Valid backup' if args.dry_run else 'Restored'}: {args.backup}")
        print(f"  Clients:    {len(state.clients)}")
        print(f"  Products:   {len(state.products)}")
        print(f"  Sales:      {len(state.sales)}")
        print(f"  Deliveries: {len(state.deliveries)}")
        return 0

    except RestoreError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        print("\n\nRestore interrupted by user")
        return 130

    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
