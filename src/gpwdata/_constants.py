"""Internal constants shared across the library."""

#: Collection holding the single wrapper document. Shared by readers and writers.
COLLECTION_NAME = "location_content_views_wrapper"
DATABASE_NAME = "gpw_data_storage"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

# ------------------------------------------------------------------
# Remotely callable operation names
# ------------------------------------------------------------------

OP_IS_SERVICE_READY = "IsServiceReady"
OP_IS_STORAGE_READY = "IsStorageReady"
OP_HAS_LOCATION_CONTENT_VIEWS = "HasLocationContentViews"
OP_GET_LOCATION_CONTENT_VIEWS = "GetLocationContentViews"
OP_CREATE_LOCATION_CONTENT_VIEWS = "CreateLocationContentViews"

OPERATIONS: tuple[str, ...] = (
    OP_IS_SERVICE_READY,
    OP_IS_STORAGE_READY,
    OP_HAS_LOCATION_CONTENT_VIEWS,
    OP_GET_LOCATION_CONTENT_VIEWS,
    OP_CREATE_LOCATION_CONTENT_VIEWS,
)
