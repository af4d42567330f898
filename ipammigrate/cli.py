"""CLI entry point for the legacy phpIPAM migrator.

Commands:
  migrate  Copy VLANs, subnets and IPv4 addresses into the new phpIPAM
  plan     Show the subnet creation order and expected parents (read-only)

Examples:
  ipammigrate migrate --dbhost legacy-db.example.com --dbuser phpipam \\
      --endpoint https://phpipam.example.com/api --appid migrator --user Admin

  ipammigrate plan --dbhost legacy-db.example.com --ordering forest

The phpIPAM connection also reads PHPIPAM_ENDPOINT_ADDR, PHPIPAM_APP_ID,
PHPIPAM_USER_NAME and PHPIPAM_PASSWORD from the environment. Missing
passwords are prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

from loguru import logger
from tabulate import tabulate

from ipammigrate import __version__, configure_logging
from ipammigrate.config import DatabaseConfig, MigrationConfig, PHPIPAMConfig
from ipammigrate.exceptions import MigrationError
from ipammigrate.hierarchy.ordering import OrderingStrategy
from ipammigrate.legacy.extractor import LegacyExtractor, connect_legacy_db
from ipammigrate.phpipam.client import PHPIPAMClient
from ipammigrate.pipeline import MigrationPipeline, MigrationSummary, PlannedSubnet, plan_subnets


def _print_startup_banner(command: str) -> None:
    startup_rows = [
        ["version", __version__],
        ["command", command],
    ]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "ipammigrate starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    logger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the migrator."""
    db_args = argparse.ArgumentParser(add_help=False)
    db_args.add_argument("--dbhost", default="", help="The database host to connect to (default: localhost)")
    db_args.add_argument("--dbport", type=int, default=3306, help="The database port (default: 3306)")
    db_args.add_argument("--dbuser", default="phpipam", help="The database user to use")
    db_args.add_argument("--dbpassword", default="", help="The password for the database user (prompted if omitted)")
    db_args.add_argument("--dbname", default="phpipam", help="The name of the database to import data from")
    db_args.add_argument(
        "--ordering",
        choices=[s.value for s in OrderingStrategy],
        default=OrderingStrategy.LEXICOGRAPHIC.value,
        help="Subnet ordering strategy (default: lexicographic)",
    )
    db_args.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="ipammigrate",
        description="Migrate VLANs, subnets and IPv4 addresses from a legacy phpIPAM database to phpIPAM 1.2+",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    migrate = subparsers.add_parser("migrate", parents=[db_args], help="Run the migration")
    migrate.add_argument("--endpoint", help="The phpIPAM API endpoint (e.g. https://phpipam.example.com/api)")
    migrate.add_argument("--appid", help="The phpIPAM application ID to use")
    migrate.add_argument("--user", help="The user to use when connecting to phpIPAM")
    migrate.add_argument("--password", help="The password for the phpIPAM user (prompted if omitted)")
    migrate.add_argument("--sectionid", type=int, default=1, help="The section ID to add subnets to (default: 1)")
    migrate.add_argument("--verify-ssl", action="store_true", help="Verify SSL certificates")

    subparsers.add_parser("plan", parents=[db_args], help="Show subnet creation order without writing anything")

    return parser


def config_from_args(parsed: argparse.Namespace) -> MigrationConfig:
    """Merge CLI flags over environment defaults, prompting for missing passwords."""
    db_password = parsed.dbpassword
    if not db_password:
        db_password = getpass.getpass(
            f"Enter the database password for {parsed.dbuser}@{parsed.dbhost or 'localhost'}/{parsed.dbname}: "
        )
    database = DatabaseConfig(
        host=parsed.dbhost,
        port=parsed.dbport,
        user=parsed.dbuser,
        password=db_password,
        name=parsed.dbname,
    )

    overrides = {
        "endpoint": getattr(parsed, "endpoint", None),
        "app_id": getattr(parsed, "appid", None),
        "username": getattr(parsed, "user", None),
        "password": getattr(parsed, "password", None),
    }
    phpipam = PHPIPAMConfig(
        verify_ssl=getattr(parsed, "verify_ssl", False),
        **{k: v for k, v in overrides.items() if v},
    )
    if parsed.command == "migrate" and not phpipam.password:
        phpipam.password = getpass.getpass("Enter the phpIPAM password: ")

    return MigrationConfig(
        database=database,
        phpipam=phpipam,
        section_id=getattr(parsed, "sectionid", 1),
        strategy=OrderingStrategy(parsed.ordering),
    )


def cmd_migrate(config: MigrationConfig) -> MigrationSummary:
    """Run the full migration."""
    conn = connect_legacy_db(config.database)
    try:
        with PHPIPAMClient(
            endpoint=config.phpipam.endpoint,
            app_id=config.phpipam.app_id,
            username=config.phpipam.username,
            password=config.phpipam.password,
            verify_ssl=config.phpipam.verify_ssl,
        ) as client:
            pipeline = MigrationPipeline(client, section_id=config.section_id, strategy=config.strategy)
            summary = pipeline.run(LegacyExtractor(conn))
    finally:
        conn.close()

    rows = [
        ["VLANs", summary.vlans],
        ["Subnets", summary.subnets],
        ["  with master subnet", summary.subnets_with_parent],
        ["IP addresses", summary.addresses],
    ]
    print(tabulate(rows, headers=["Migrated", "Count"], tablefmt="simple"))
    return summary


def format_plan(planned: list[PlannedSubnet]) -> str:
    rows = [
        [
            i,
            p.subnet.cidr,
            p.parent.cidr if p.parent is not None else "-",
            p.subnet.vlan_number or "-",
            p.subnet.description,
        ]
        for i, p in enumerate(planned, start=1)
    ]
    return tabulate(rows, headers=["#", "Subnet", "Parent", "VLAN", "Description"], tablefmt="simple")


def cmd_plan(config: MigrationConfig) -> list[PlannedSubnet]:
    """Print the subnet creation order with the parent each subnet would get."""
    conn = connect_legacy_db(config.database)
    try:
        subnets = LegacyExtractor(conn).fetch_subnets()
    finally:
        conn.close()

    planned = plan_subnets(subnets, config.strategy)
    print(format_plan(planned))
    orphans = sum(1 for p in planned if p.parent is None)
    logger.info(f"{len(planned)} subnets, {orphans} top-level ({config.strategy.value} order)")
    return planned


def main(args: list[str] | None = None) -> None:
    """Main entry point for the migrator CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    configure_logging("DEBUG" if parsed.verbose else None)
    _print_startup_banner(parsed.command)

    try:
        config = config_from_args(parsed)
        if parsed.command == "migrate":
            cmd_migrate(config)
        elif parsed.command == "plan":
            cmd_plan(config)
    except MigrationError as e:
        logger.error(f"Migration aborted: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
