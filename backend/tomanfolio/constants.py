"""Application constants to avoid magic strings."""


class AssetType:
    """Asset type constants."""

    FIAT = "FIAT"
    GOLD = "GOLD"
    CRYPTO = "CRYPTO"


class BuyCurrency:
    """Currencies a purchase can be recorded in."""

    TOMAN = "TOMAN"
    USD = "USD"


class PriceCategory:
    """Price snapshot categories, one fallback chain each."""

    FIAT = "fiat"
    CRYPTO = "crypto"
    GOLD = "gold"


class SourceLabel:
    """Labels recorded for the source that served a category."""

    PRIMARY = "primary"
    NONE = "none"
    MANUAL = "manual"

    @staticmethod
    def backup(position: int) -> str:
        """Label for the backup at 1-based ``position``."""
        return f"backup{position}"


# Canonical 18-karat gold symbol and the provider codes that alias to it
GOLD18_SYMBOL = "GOLD18"
GOLD18_ALIASES = ("GOLD18", "18AYAR")
