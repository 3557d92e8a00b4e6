import argparse
import sys

from mongoadmin.core.config import MONGO_DB_NAME, PRUNE_COLLECTION
from mongoadmin.core.errors import StoreConnectionError
from mongoadmin.core.logging_config import get_logger
from mongoadmin.db.mongo.mongo_connection import MongoDBConnection
from mongoadmin.ops.collection_census import collect_census, write_report
from mongoadmin.ops.null_field_pruner import prune_null_fields

logger = get_logger()

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_FATAL = 2


def run_prune(args, out=None):
    out = out if out is not None else sys.stdout
    collection_name = args.collection or PRUNE_COLLECTION
    if not collection_name:
        logger.error("no collection given and prune_collection is not configured")
        return EXIT_FATAL

    with MongoDBConnection(uri=args.uri, db_name=args.db) as connection:
        summary = prune_null_fields(connection.get_collection(collection_name), dry_run=args.dry_run)

    mode = "(dry-run) " if summary.dry_run else ""
    print(
        f"{mode}{args.db or MONGO_DB_NAME}.{summary.collection}: scanned {summary.scanned}, "
        f"pruned {summary.pruned} documents, removed {summary.fields_removed} fields, "
        f"{len(summary.failures)} failures",
        file=out,
    )
    return EXIT_PARTIAL if summary.failures else EXIT_OK


def run_census(args, out=None, err=None):
    with MongoDBConnection(uri=args.uri) as connection:
        entries = collect_census(connection.get_client())
        _, failures = write_report(entries, out=out, err=err)
    return EXIT_PARTIAL if failures else EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(prog="mongoadmin", description="MongoDB administrative routines")
    parser.add_argument("--uri", default=None, help="MongoDB URI (default: MONGO_URI env or configuration)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    prune = subparsers.add_parser("prune", help="Remove null and empty-string fields from every document of a collection")
    prune.add_argument("collection", nargs="?", default=None, help="Collection to clean (default: prune_collection from configuration)")
    prune.add_argument("--db", default=None, help=f"Database name (default: {MONGO_DB_NAME})")
    prune.add_argument("--dry-run", action="store_true", help="Report what would be removed without writing")
    prune.set_defaults(handler=run_prune)

    census = subparsers.add_parser("census", help="Print document and index counts for every collection of every user database")
    census.set_defaults(handler=run_census)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except StoreConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
