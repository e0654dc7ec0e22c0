"""Ordered primary/backup resolution for one price category."""

import logging
from collections.abc import Sequence

from tomanfolio.constants import SourceLabel
from tomanfolio.services.market_data.price_types import CategoryResult, PriceSource

logger = logging.getLogger(__name__)


class FallbackResolver:
    """Tries a primary source then each backup in order until one yields data.

    Attempts are sequential; the first non-empty result wins and later
    sources are never called. A source that raises is logged and skipped,
    so no fetch error ever leaves ``resolve``.
    """

    def resolve(
        self,
        primary: PriceSource,
        backups: Sequence[PriceSource],
        category: str,
    ) -> CategoryResult:
        chain = [(SourceLabel.PRIMARY, primary)]
        chain += [(SourceLabel.backup(position), source) for position, source in enumerate(backups, 1)]

        for label, source in chain:
            try:
                data = dict(source())
            except Exception as e:
                logger.warning(f"{category} source {label} failed: {e}")
                continue
            if data:
                if label != SourceLabel.PRIMARY:
                    logger.info(f"{category} prices served by {label}")
                return CategoryResult(data=data, source_label=label)
            logger.warning(f"{category} source {label} returned no prices")

        logger.warning(f"All {category} sources failed")
        return CategoryResult()
