"""
Command-line interface for SMS archive ingestion.

Usage:
    momo-ingest process --input <archive> [options]
    momo-ingest bootstrap --input <archive> [options]
"""

import argparse
import sys

from momo_pipeline.batch import RunReportWriter, SmsBatchPipeline, UnprocessedLogWriter
from momo_pipeline.config import IngestionSettings
from momo_pipeline.core.errors import ArchiveReadError
from momo_pipeline.core.record_builder import RecordBuilder
from momo_pipeline.observability.logger import configure_logging, get_logger
from momo_pipeline.observability.metrics import start_metrics_server
from momo_pipeline.warehouse import (
    DatabaseConnectionPool,
    InMemoryTransactionStore,
    PostgresTransactionStore,
)

logger = get_logger(__name__)


def load_settings(args) -> IngestionSettings:
    """Merge YAML, environment and command-line settings."""
    return IngestionSettings.load(
        config_path=args.config,
        archive_path=args.input,
        archive_format=args.format,
        batch_size=args.batch_size,
        unprocessed_log_path=args.unprocessed_log,
        report_path=args.report,
        db_host=args.db_host,
        db_port=args.db_port,
        db_name=args.db_name,
        db_user=args.db_user,
        db_password=args.db_password,
    )


def run_command(args) -> int:
    """
    Execute the process or bootstrap command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        settings = load_settings(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(level=settings.log_level, format_type=settings.log_format)

    if args.metrics_port:
        start_metrics_server(args.metrics_port)
        logger.info(f"Metrics server started on port {args.metrics_port}")

    pool = None
    unprocessed_log = None

    try:
        unprocessed_log = UnprocessedLogWriter(settings.unprocessed_log_path)

        if args.dry_run:
            logger.info("DRY RUN MODE: records are kept in memory only")
            store = InMemoryTransactionStore()
        else:
            logger.info("Initializing database connection...")
            pool = DatabaseConnectionPool(
                host=settings.database.host,
                port=settings.database.port,
                database=settings.database.name,
                user=settings.database.user,
                password=settings.database.password,
                max_size=settings.batch_size,
            )
            pool.open()
            store = PostgresTransactionStore(pool)

        pipeline = SmsBatchPipeline(
            store=store,
            unprocessed_log=unprocessed_log,
            report_writer=RunReportWriter(settings.report_path),
            builder=RecordBuilder(currency=settings.currency, account_label=settings.account_label),
            batch_size=settings.batch_size,
        )

        if args.command == "bootstrap":
            summary = pipeline.populate_if_empty(settings.archive_path, settings.archive_format)
        else:
            summary = pipeline.run(settings.archive_path, settings.archive_format)

        if summary is not None:
            logger.info("=" * 60)
            logger.info("PROCESSING COMPLETE")
            logger.info("=" * 60)
            logger.info(f"Total messages: {summary.total_messages}")
            logger.info(f"Processed: {summary.processed_count}")
            logger.info(f"Ignored: {summary.ignored_count}")
            logger.info("=" * 60)

    except ArchiveReadError as e:
        logger.error(f"SMS Processing Error: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"Error during ingestion: {e}", exc_info=True)
        return 1
    finally:
        if unprocessed_log is not None:
            unprocessed_log.close()
        if pool is not None:
            pool.close()

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mobile-money SMS ingestion pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ingest an SMS backup into PostgreSQL
  momo-ingest process --input data/modified_sms_v2.xml --db-password secret

  # Ingest only if the database is still empty
  momo-ingest bootstrap --input data/modified_sms_v2.xml

  # Parse and classify without writing to the database
  momo-ingest process --input data/modified_sms_v2.xml --dry-run
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser("process", help="Ingest an SMS archive")
    bootstrap_parser = subparsers.add_parser(
        "bootstrap", help="Ingest an SMS archive only if the store is empty"
    )

    for sub in (process_parser, bootstrap_parser):
        sub.add_argument("--input", help="Path to the SMS archive")
        sub.add_argument(
            "--format",
            choices=["xml", "json"],
            help="Archive format (default: inferred from the file suffix)"
        )
        sub.add_argument("--config", help="Path to a YAML settings file")
        sub.add_argument("--batch-size", type=int, help="Messages per batch (default: 50)")
        sub.add_argument("--unprocessed-log", help="Path of the unprocessed-message log")
        sub.add_argument("--report", help="Path of the run report")
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Keep records in memory instead of writing to the database"
        )
        sub.add_argument("--metrics-port", type=int, help="Expose Prometheus metrics on this port")

        sub.add_argument("--db-host", help="Database host")
        sub.add_argument("--db-port", type=int, help="Database port")
        sub.add_argument("--db-name", help="Database name")
        sub.add_argument("--db-user", help="Database user")
        sub.add_argument("--db-password", help="Database password")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(run_command(args))


if __name__ == "__main__":
    main()
