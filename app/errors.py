"""Data layer errors."""


class StoreError(Exception):
    """Cache storage write or delete failed."""

    def __init__(self, message: str = "Cache storage failed", key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class LoadSkipped(Exception):
    """A load was abandoned because the session it was issued for has ended."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Load of {key} skipped: session ended")
