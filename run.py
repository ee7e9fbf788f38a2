"""
Portal Scout — job portal scraper
CLI entry point for scanning roles on the supported portals.
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.settings import settings
from graph.workflow import scan_roles
from models.listing import Portal
from tools.file_handler import load_roles, save_scan_report, save_to_csv, generate_summary
from tools.job_store import JobStore
from tools.slug import slugify


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Portal Scout — job portal scraper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --role "Embedded Software Engineer"
  python run.py --role "C++ Developer" --portal stepstone
  python run.py --config config/roles.yaml --report --export-csv
        """,
    )

    parser.add_argument(
        "--role",
        action="append",
        default=[],
        help="Role to scan (repeatable). Overrides --config.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/roles.yaml",
        help="Path to roles YAML config (default: config/roles.yaml)",
    )
    parser.add_argument(
        "--portal",
        action="append",
        choices=[portal.value for portal in Portal],
        default=[],
        help="Portal to scan (repeatable, default: all)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help=f"SQLite database path (default: {settings.db_path})",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help=f"Output directory for reports (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Write a JSON scan report to the output directory",
    )
    parser.add_argument(
        "--export-csv",
        action="store_true",
        help="Export the stored listings of the scanned roles to CSV",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for the scanner."""
    args = build_parser().parse_args(argv)

    if args.db:
        settings.db_path = args.db
    if args.output_dir:
        settings.output_dir = args.output_dir

    roles = args.role
    if not roles:
        if not os.path.exists(args.config):
            print(f"❌ Config file not found: {args.config}")
            return 1
        roles = load_roles(args.config)
    if not roles:
        print("❌ No roles to scan.")
        return 1

    portals = [Portal(name) for name in args.portal] or list(Portal)

    print("=" * 60)
    print("  🔍 Portal Scout — job portal scraper")
    print("=" * 60)
    print(f"  Roles:   {', '.join(roles)}")
    print(f"  Portals: {', '.join(portal.value for portal in portals)}")
    print(f"  DB:      {settings.db_path}")
    print("=" * 60)
    print()

    with JobStore(settings.db_path) as store:
        store.init_db()
        print(f"📦 Job store initialized: {store.count()} stored jobs")

        try:
            results = scan_roles(roles, portals, store, settings=settings)
        except KeyboardInterrupt:
            print("\n\n⛔ Scan interrupted by user.")
            return 1

        report = {
            "roles": {role: [stats.to_dict() for stats in stats_list] for role, stats_list in results.items()},
        }
        print()
        print(generate_summary(report))

        if args.report:
            path = save_scan_report(report, settings.output_dir)
            print(f"📝 Report written to {path}")

        if args.export_csv:
            role_slugs = [slug for slug in dict.fromkeys(slugify(role) for role in roles) if slug]
            jobs = [job for slug in role_slugs for job in store.list_jobs(role_slug=slug)]
            path = save_to_csv(jobs, settings.output_dir)
            print(f"📝 {len(jobs)} listings exported to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
