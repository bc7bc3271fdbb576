class CrmBrowserError(Exception):
    """Base exception for all crm_browser errors"""
    pass

class ConfigError(CrmBrowserError):
    """Invalid or inconsistent global.json"""
    pass

class UnknownCollectionError(CrmBrowserError, KeyError):
    """A record kind / collection name that the app does not know about"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown collection '{name}'")

    def __str__(self) -> str:
        return f"Unknown collection '{self.name}'"

class RecordNotFoundError(CrmBrowserError):
    """
    An operation targeted an id that does not exist in the collection.
    Kept distinct from validation failures so callers can map it to 404.
    """

    def __init__(self, kind: str, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No record {record_id} in {kind}")
