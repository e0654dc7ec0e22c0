"""Router fixtures: price service wired to fake providers."""

import pytest

from tomanfolio.main import app
from tomanfolio.routers.prices import get_price_refresh_service
from tomanfolio.services.market_data.price_refresh_service import PriceRefreshService
from tomanfolio.services.repositories import PriceSnapshotRepository


@pytest.fixture
def fake_prices(client, session_maker, aggregator):
    """Route every price request through the fake provider aggregator."""

    def override():
        session = session_maker()
        try:
            yield PriceRefreshService(session, aggregator=aggregator)
        finally:
            session.close()

    app.dependency_overrides[get_price_refresh_service] = override
    return aggregator


@pytest.fixture
def stored_prices(db, price_snapshot):
    """Persist the sample snapshot as the current one."""
    PriceSnapshotRepository(db).save(price_snapshot)
    return price_snapshot
