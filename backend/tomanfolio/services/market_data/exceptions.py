"""Price source exceptions."""


class PriceSourceError(Exception):
    """A provider responded with unusable content or is not configured."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")
