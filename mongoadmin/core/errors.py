class MongoAdminError(Exception):
    """Base class for errors raised by the admin routines."""


class StoreConnectionError(MongoAdminError):
    """The document store could not be reached or authenticated against. Fatal."""


class PerDocumentUpdateError(MongoAdminError):
    def __init__(self, document_id, cause):
        self.document_id = document_id
        self.cause = cause
        super().__init__(f"update failed for document {document_id!r}: {cause}")


class PerCollectionQueryError(MongoAdminError):
    def __init__(self, database, collection, cause):
        self.database = database
        self.collection = collection
        self.cause = cause
        target = f"{database}.{collection}" if collection is not None else database
        super().__init__(f"query failed for {target}: {cause}")
