"""Shared test fixtures: in-memory database, API client, users and fake providers."""

import os

# Must be set before tomanfolio.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import UTC, datetime  # noqa: E402
from decimal import Decimal  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tomanfolio import main as main_module  # noqa: E402
from tomanfolio.config import settings  # noqa: E402
from tomanfolio.database import Base, get_db  # noqa: E402
from tomanfolio.main import app  # noqa: E402
from tomanfolio.models import User  # noqa: E402
from tomanfolio.rate_limiter import limiter  # noqa: E402
from tomanfolio.services.auth_service import AuthService  # noqa: E402
from tomanfolio.services.market_data.price_aggregator import PriceAggregator  # noqa: E402
from tomanfolio.services.market_data.price_types import PriceSnapshot  # noqa: E402

USER_PASSWORD = "secret123"


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_maker):
    session = session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine, session_maker, monkeypatch):
    """Test client bound to the in-memory database.

    Startup runs against the same database, so the configured admin exists.
    """
    limiter.reset()
    monkeypatch.setattr(main_module, "engine", engine)
    monkeypatch.setattr(main_module, "SessionLocal", session_maker)

    def override_get_db():
        session = session_maker()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db, username: str, is_admin: bool = False) -> User:
    user = User(
        username=username,
        password_hash=AuthService.hash_password(USER_PASSWORD),
        display_name=username.title(),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {AuthService.create_access_token(user.id)}"}


@pytest.fixture
def user(db):
    return _create_user(db, "alice")


@pytest.fixture
def other_user(db):
    return _create_user(db, "bob")


@pytest.fixture
def admin_user(client, db):
    """The admin account seeded at startup."""
    return db.query(User).filter(User.username == settings.admin_username).one()


@pytest.fixture
def user_headers(user):
    return _headers(user)


@pytest.fixture
def other_user_headers(other_user):
    return _headers(other_user)


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def price_snapshot():
    """A small snapshot with one price per category."""
    return PriceSnapshot(
        usd_to_toman=Decimal("50000"),
        eur_to_toman=Decimal("55000"),
        gold18_to_toman=Decimal("4000000"),
        fiat_prices={"USD": Decimal("50000"), "EUR": Decimal("55000")},
        crypto_prices={"BTC": Decimal("2500000000"), "USDT": Decimal("50000")},
        gold_prices={"GOLD18": Decimal("4000000"), "18AYAR": Decimal("4000000")},
        fetched_at=datetime(2025, 1, 1, 12, 0, tzinfo=UTC),
    )


@pytest.fixture
def fake_providers():
    """Provider clients whose fetches return fixed maps.

    Each attribute is a MagicMock; tests adjust ``return_value`` or
    ``side_effect`` per fetch method.
    """
    alanchand = MagicMock()
    alanchand.fetch_currencies.return_value = {"USD": Decimal("60000"), "EUR": Decimal("65000")}
    alanchand.fetch_crypto.return_value = {"BTC": Decimal("3000000000"), "ETC": Decimal("1200000")}
    alanchand.fetch_gold.return_value = {"18AYAR": Decimal("4500000")}

    telegram = MagicMock()
    telegram.fetch_currencies.return_value = {}
    telegram.fetch_crypto.return_value = {}
    telegram.fetch_gold.return_value = {}

    navasan = MagicMock()
    navasan.fetch_currencies.return_value = {}

    tgju = MagicMock()
    tgju.fetch_gold.return_value = {}

    coingecko = MagicMock()
    coingecko.get_usd_prices.return_value = {}

    return {
        "alanchand": alanchand,
        "telegram": telegram,
        "navasan": navasan,
        "tgju": tgju,
        "coingecko": coingecko,
    }


@pytest.fixture
def aggregator(fake_providers):
    return PriceAggregator(**fake_providers)
