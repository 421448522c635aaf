#!/usr/bin/env python3
"""
Student Register Exporter

Reads the registry configuration from config.json and the stored student
records, then writes the (optionally filtered) register to CSV, JSON or Excel.

Usage:
    python export_students.py                         # students.csv, all records
    python export_students.py --format json           # students.json
    python export_students.py --format xlsx --course "Computer Science"
    python export_students.py --search smith --output exports/
"""

import argparse
import sys
from pathlib import Path

from registry import (
    EXPORT_FORMATS,
    LocalStorage,
    RegistryError,
    configure_logging,
    export_records,
    filter_records,
    load_config,
    load_records,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export registered students.")
    parser.add_argument("--config", default="config.json", help="Path to the configuration JSON")
    parser.add_argument("--format", dest="fmt", choices=sorted(EXPORT_FORMATS), default="csv")
    parser.add_argument("--search", default="", help="Case-insensitive search over name, email, ID and contact")
    parser.add_argument("--course", default="", help="Only students in this course")
    parser.add_argument("--year", default="", help="Only students in this year")
    parser.add_argument("--output", default=".", help="Directory to write the export into")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    print("🎓 Student Register Exporter")
    print("=" * 40)

    config = load_config(args.config)
    configure_logging(config)

    storage_path = Path(config["storage"]["path"])
    if not storage_path.exists():
        print(f"❌ Error: {storage_path} not found!")
        print("   Register students in the app first, or point storage.path at your storage file.")
        return 1

    storage = LocalStorage(storage_path, config["storage"].get("quota_bytes"))
    records = load_records(storage, config["storage"]["key"])
    print(f"✓ Loaded {len(records)} students from {storage_path}")

    view = filter_records(records, search_term=args.search, course=args.course, year=args.year)
    if len(view) != len(records):
        print(f"✓ {len(view)} students match the filters")

    export_config = config["export"]
    filenames = {
        "csv": export_config.get("csv_filename"),
        "json": export_config.get("json_filename"),
        "xlsx": export_config.get("xlsx_filename"),
    }

    try:
        export = export_records(view, args.fmt, export_config["date_format"], filenames)
    except RegistryError as e:
        print(f"❌ Error: {e.message}")
        return 1

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / export.filename
    if isinstance(export.data, bytes):
        output_file.write_bytes(export.data)
    else:
        output_file.write_text(export.data, encoding="utf-8")
    print(f"✓ Saved to {output_file}")

    # Summary
    print("\n" + "=" * 40)
    print("📋 Summary:")
    print(f"   Students exported: {len(view)}")
    print(f"   Format: {args.fmt.upper()} ({export.mime})")
    for label, value in (("Search", args.search), ("Course", args.course), ("Year", args.year)):
        if value:
            print(f"   {label}: {value}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
