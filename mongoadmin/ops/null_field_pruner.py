from typing import Any, List, Mapping

from pydantic import BaseModel, Field
from pymongo.errors import PyMongoError

from mongoadmin.core.errors import PerDocumentUpdateError, StoreConnectionError
from mongoadmin.core.logging_config import get_logger

logger = get_logger()

ID_FIELD = "_id"


class PruneFailure(BaseModel):
    document_id: Any
    error: str


class PruneSummary(BaseModel):
    collection: str
    scanned: int = 0
    pruned: int = Field(0, description="Documents that had at least one field removed")
    fields_removed: int = 0
    failures: List[PruneFailure] = []
    dry_run: bool = False


def is_empty_value(value) -> bool:
    """True for exactly None or exactly the empty string."""
    if value is None:
        return True
    return isinstance(value, str) and value == ""


def empty_fields(document: Mapping[str, Any]) -> List[str]:
    # _id is never a candidate, whatever it holds
    return [key for key, value in document.items() if key != ID_FIELD and is_empty_value(value)]


def prune_document(collection, document: Mapping[str, Any]) -> List[str]:
    """
    Unset the empty fields of one document, addressed by its _id only.
    Returns the removed field names; no update is issued when there are none.
    """
    fields = empty_fields(document)
    if not fields:
        return []

    document_id = document[ID_FIELD]
    try:
        result = collection.update_one({ID_FIELD: document_id}, {"$unset": {field: "" for field in fields}})
    except PyMongoError as e:
        raise PerDocumentUpdateError(document_id, e) from e

    if result.matched_count == 0:
        raise PerDocumentUpdateError(document_id, "document no longer exists")
    return fields


def prune_null_fields(collection, dry_run: bool = False) -> PruneSummary:
    """
    Scan every document of `collection` and remove fields whose value is null
    or the empty string.

    A failed update is logged and recorded on the summary; the scan carries on
    with the next document. Nothing is written when `dry_run` is set.
    """
    summary = PruneSummary(collection=collection.name, dry_run=dry_run)
    logger.info(f"pruning null/empty fields, collection:{collection.name}, dry_run:{dry_run}")

    try:
        for document in collection.find():
            summary.scanned += 1
            if dry_run:
                fields = empty_fields(document)
                if fields:
                    logger.info(f"(dry-run) would unset {fields} on document {document[ID_FIELD]!r}")
            else:
                try:
                    fields = prune_document(collection, document)
                except PerDocumentUpdateError as e:
                    logger.warning(f"skipping document {e.document_id!r}, error_info:{e.cause}")
                    summary.failures.append(PruneFailure(document_id=e.document_id, error=str(e.cause)))
                    continue
            if fields:
                summary.pruned += 1
                summary.fields_removed += len(fields)
    except PyMongoError as e:
        # Update errors are wrapped per document above; this is the scan itself
        logger.error(f"scan of {collection.name} aborted after {summary.scanned} documents, error_info:{e}")
        raise StoreConnectionError(f"scan of {collection.name} failed: {e}") from e

    logger.info(
        f"pruning finished, collection:{collection.name}, scanned:{summary.scanned}, "
        f"pruned:{summary.pruned}, fields_removed:{summary.fields_removed}, failures:{len(summary.failures)}"
    )
    return summary
