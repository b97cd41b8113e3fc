from __future__ import annotations

import argparse
import json
from pathlib import Path

from .export import OUTPUT_FILENAMES, build_skills_export, build_summary, write_dataframe, write_json
from .grouping import classify
from .ingest import load_records
from .naming import naming_record_ids, resolve_label
from .runtime import assert_runtime_compatibility, configure_logging, sheet_config_from_dict
from .view import build_sheet_view


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dcc-class-sheet",
        description="Group and sort a character's custom class skills the way the custom class tab shows them.",
    )
    parser.add_argument("--input", required=True, help="Actor export (.json) or records table (.csv)")
    parser.add_argument("--output-dir", default=None, help="Write skills.csv and summary.json here")
    parser.add_argument("--json", action="store_true", help="Print the tab view as JSON")
    parser.add_argument("--list-naming", action="store_true", help="Print ids of every naming record")
    parser.add_argument("--fallback-label", default=None)
    parser.add_argument("--occupational-label", default=None)
    parser.add_argument("--default-icon", default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    assert_runtime_compatibility()
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = sheet_config_from_dict(
        {
            "fallback_label": args.fallback_label,
            "occupational_label": args.occupational_label,
            "default_icon": args.default_icon,
        }
    )

    try:
        records = load_records(Path(args.input))
    except (FileNotFoundError, ValueError) as exc:
        print(f"Could not load records: {exc}")
        raise SystemExit(2) from exc

    if args.list_naming:
        for record_id in naming_record_ids(records, config.naming_token):
            print(record_id)
        return

    view = build_sheet_view(records, config)

    if args.output_dir:
        output_dir = Path(args.output_dir)
        skills_df = build_skills_export(
            classify(records, config.naming_token),
            resolve_label(records, config.naming_token),
            config.occupational_label,
        )
        write_dataframe(skills_df, output_dir / OUTPUT_FILENAMES["skills"])
        write_json(build_summary(records, config), output_dir / OUTPUT_FILENAMES["summary"])

    if args.json:
        print(json.dumps(view.to_dict(), indent=2, ensure_ascii=False))
        return

    print(f"=== {view.tab_label} ({view.tab_icon}) ===")
    if not view.has_groups:
        print("No class skills found.")
    for group in view.groups:
        print(f"\n{group.class_name}")
        for entry in group.skills:
            print(f"- {entry.display_name}")
    if view.extra_naming_records:
        print(f"\nWarning: ignored {view.extra_naming_records} extra naming record(s).")
    if args.output_dir:
        print("\nGenerated files:")
        for key, name in OUTPUT_FILENAMES.items():
            print(f"- {key}: {Path(args.output_dir) / name}")


if __name__ == "__main__":
    main()
