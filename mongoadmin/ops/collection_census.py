import sys
from itertools import chain
from typing import Iterable, Iterator, List, Optional, Union

from pydantic import BaseModel
from pymongo.errors import PyMongoError

from mongoadmin.core.errors import PerCollectionQueryError, StoreConnectionError
from mongoadmin.core.logging_config import get_logger

logger = get_logger()

# Administrative databases never show up in the report
RESERVED_DATABASES = frozenset({"admin", "local", "config"})

HEADER = "Database Name | Collection Name | # Docs | # Indices"


class CensusRow(BaseModel):
    database: str
    collection: str
    document_count: int
    index_count: int


class CensusFailure(BaseModel):
    database: str
    collection: Optional[str] = None
    error: str


CensusEntry = Union[CensusRow, CensusFailure]


def format_row(row: CensusRow) -> str:
    return f"{row.database}|{row.collection}|{row.document_count}|{row.index_count}"


def format_failure(failure: CensusFailure) -> str:
    collection = failure.collection if failure.collection is not None else "*"
    return f"ERROR|{failure.database}|{collection}|{failure.error}"


def list_user_databases(client) -> List[str]:
    try:
        names = client.list_database_names()
    except PyMongoError as e:
        logger.error(f"cannot list databases, error_info:{e}")
        raise StoreConnectionError(f"cannot list databases: {e}") from e
    return [name for name in names if name not in RESERVED_DATABASES]


def _count_collection(db, name) -> CensusRow:
    collection = db[name]
    try:
        document_count = collection.count_documents({})
        index_count = len(list(collection.list_indexes()))
    except PyMongoError as e:
        raise PerCollectionQueryError(db.name, name, e) from e
    return CensusRow(database=db.name, collection=name, document_count=document_count, index_count=index_count)


def census_database(client, database_name: str) -> Iterator[CensusEntry]:
    """Yield one entry per collection of `database_name`, sorted by collection name."""
    db = client[database_name]
    try:
        names = sorted(db.list_collection_names())
    except PyMongoError as e:
        error = PerCollectionQueryError(database_name, None, e)
        logger.warning(str(error))
        yield CensusFailure(database=database_name, error=str(e))
        return

    for name in names:
        try:
            yield _count_collection(db, name)
        except PerCollectionQueryError as error:
            logger.warning(str(error))
            yield CensusFailure(database=database_name, collection=name, error=str(error.cause))


def collect_census(client) -> Iterator[CensusEntry]:
    # Databases are listed up front so a dead connection fails before any output
    database_names = list_user_databases(client)
    return chain.from_iterable(census_database(client, name) for name in database_names)


def write_report(entries: Iterable[CensusEntry], out=None, err=None):
    """
    Print the header and one pipe-delimited line per collection to `out`.
    Failures go to `err` so `out` stays machine-parseable.
    Returns (rows written, failures written).
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    rows = failures = 0

    print(HEADER, file=out)
    for entry in entries:
        if isinstance(entry, CensusFailure):
            print(format_failure(entry), file=err)
            failures += 1
        else:
            print(format_row(entry), file=out)
            rows += 1
    return rows, failures
