"""Portfolio valuation and history services."""

from .asset_catalog import AssetDetail, get_asset_detail
from .snapshot_service import PortfolioSnapshotService
from .valuation_service import PortfolioValuationService
from .valuation_types import AssetSummary, PortfolioSummary

__all__ = [
    "AssetDetail",
    "AssetSummary",
    "PortfolioSnapshotService",
    "PortfolioSummary",
    "PortfolioValuationService",
    "get_asset_detail",
]
