"""Tests for the SQLAlchemy-backed repositories."""

import pytest

from app.errors import RepositoryError
from app.models import (
    BusinessCreate,
    BusinessScore,
    PreferencesInput,
    PreferencesUpdate,
    RankingFactors,
    SearchCriteria,
)
from app.models.database import init_db
from app.storage import (
    BusinessCatalog,
    PreferencesRepository,
    ScoreRepository,
    SearchHistoryRepository,
    UserRepository,
)
from app.storage.scores import upsert_insert


@pytest.fixture
def session_factory(tmp_path):
    return init_db(f"sqlite:///{tmp_path / 'test.db'}")


def make_listing(**kwargs) -> BusinessCreate:
    """Create a listing payload with defaults."""
    defaults = {
        "name": "Test Business",
        "location": "Austin, TX",
        "industry": "Technology",
        "asking_price": 500_000,
        "annual_revenue": 1_000_000,
    }
    defaults.update(kwargs)
    return BusinessCreate(**defaults)


def make_preferences(**kwargs) -> PreferencesInput:
    defaults = {
        "capital_range": (100_000, 600_000),
        "target_income": "100k-200k",
        "risk_tolerance": "medium",
        "involvement": "part-time",
        "location": "Austin, TX",
        "industries": ["Technology"],
    }
    defaults.update(kwargs)
    return PreferencesInput(**defaults)


def make_factors(value: int = 50) -> RankingFactors:
    return RankingFactors(
        price_match=value,
        industry_fit=value,
        risk_alignment=value,
        involvement_fit=value,
        location_score=value,
        financial_health=value,
    )


class TestScoreRepository:
    """Tests for score caching."""

    def setup_store(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        catalog = BusinessCatalog(session_factory)
        return user, catalog, ScoreRepository(session_factory)

    def test_upsert_inserts_then_overwrites(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        business = catalog.create(make_listing())

        first = scores.upsert(BusinessScore(
            user_id=user.id, business_id=business.id, score=40,
            reasoning="first", factors=make_factors(40),
        ))
        second = scores.upsert(BusinessScore(
            user_id=user.id, business_id=business.id, score=75,
            reasoning="second", factors=make_factors(75),
        ))

        assert first.id == second.id
        assert second.score == 75
        assert second.reasoning == "second"
        assert second.factors.price_match == 75
        assert len(scores.get_top_n(user.id)) == 1

    def test_get_missing_pair(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        business = catalog.create(make_listing())
        assert scores.get(user.id, business.id) is None

    def test_get_top_n_orders_by_score(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        for name, value in [("Low", 30), ("High", 90), ("Mid", 60)]:
            business = catalog.create(make_listing(name=name))
            scores.upsert(BusinessScore(user_id=user.id, business_id=business.id, score=value))

        top = scores.get_top_n(user.id, 2)
        assert [r.business.name for r in top] == ["High", "Mid"]
        assert [r.score for r in scores.get_top_n(user.id)] == [90, 60, 30]

    def test_get_top_n_excludes_inactive(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        kept = catalog.create(make_listing(name="Kept"))
        hidden = catalog.create(make_listing(name="Hidden"))
        scores.upsert(BusinessScore(user_id=user.id, business_id=kept.id, score=50))
        scores.upsert(BusinessScore(user_id=user.id, business_id=hidden.id, score=90))

        assert catalog.deactivate(hidden.id) is True

        assert [r.business_id for r in scores.get_top_n(user.id)] == [kept.id]
        assert scores.get(user.id, hidden.id) is not None

    def test_update_never_inserts(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        business = catalog.create(make_listing())

        assert scores.update(user.id, business.id, 70, "new") is None
        assert scores.get(user.id, business.id) is None

        scores.upsert(BusinessScore(user_id=user.id, business_id=business.id, score=10))
        updated = scores.update(user.id, business.id, 70, "new", make_factors(70))
        assert updated.score == 70
        assert updated.reasoning == "new"
        assert updated.factors.location_score == 70

    def test_get_top_n_can_include_inactive(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        hidden = catalog.create(make_listing(name="Hidden"))
        scores.upsert(BusinessScore(user_id=user.id, business_id=hidden.id, score=90))
        catalog.deactivate(hidden.id)

        assert scores.get_top_n(user.id) == []
        everything = scores.get_top_n(user.id, active_only=False)
        assert [r.business_id for r in everything] == [hidden.id]
        assert everything[0].business.is_active is False

    def test_upsert_rejects_unsupported_dialect(self):
        assert upsert_insert("sqlite") is not None
        assert upsert_insert("postgresql") is not None
        with pytest.raises(RepositoryError, match="mysql"):
            upsert_insert("mysql")

    def test_scores_isolated_per_user(self, session_factory):
        user, catalog, scores = self.setup_store(session_factory)
        other = UserRepository(session_factory).create("bob")
        business = catalog.create(make_listing())
        scores.upsert(BusinessScore(user_id=user.id, business_id=business.id, score=80))

        assert scores.get_top_n(other.id) == []

    def test_unknown_user_is_repository_error(self, session_factory):
        _, catalog, scores = self.setup_store(session_factory)
        business = catalog.create(make_listing())
        with pytest.raises(RepositoryError):
            scores.upsert(BusinessScore(user_id="nobody", business_id=business.id, score=50))


class TestCascadingDeletes:

    def test_deleting_user_removes_owned_rows(self, session_factory):
        users = UserRepository(session_factory)
        catalog = BusinessCatalog(session_factory)
        scores = ScoreRepository(session_factory)
        preferences = PreferencesRepository(session_factory)
        history = SearchHistoryRepository(session_factory)

        user = users.create("alice")
        business = catalog.create(make_listing())
        preferences.save(user.id, make_preferences())
        scores.upsert(BusinessScore(user_id=user.id, business_id=business.id, score=50))
        history.record(user.id, "coffee", 3)

        assert users.delete(user.id) is True

        assert users.get(user.id) is None
        assert preferences.get(user.id) is None
        assert scores.get(user.id, business.id) is None
        assert history.list_for_user(user.id) == []
        assert catalog.get(business.id) is not None

    def test_deleting_business_removes_its_scores(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        catalog = BusinessCatalog(session_factory)
        scores = ScoreRepository(session_factory)
        business = catalog.create(make_listing())
        scores.upsert(BusinessScore(user_id=user.id, business_id=business.id, score=50))

        assert catalog.delete(business.id) is True

        assert scores.get(user.id, business.id) is None
        assert catalog.delete(business.id) is False


class TestBusinessCatalog:

    def test_create_round_trips_nested_fields(self, session_factory):
        catalog = BusinessCatalog(session_factory)
        created = catalog.create(make_listing(
            seller_info={"contact_email": "seller@example.com"},
            business_details={"assets": ["van", "tools"], "real_estate_included": False},
        ))

        fetched = catalog.get(created.id)
        assert fetched.seller_info.contact_email == "seller@example.com"
        assert fetched.business_details.assets == ["van", "tools"]
        assert fetched.business_details.real_estate_included is False
        assert fetched.is_active is True

    def test_get_hides_inactive(self, session_factory):
        catalog = BusinessCatalog(session_factory)
        business = catalog.create(make_listing())
        catalog.deactivate(business.id)
        assert catalog.get(business.id) is None
        assert catalog.deactivate("missing") is False

    def test_find_applies_criteria_and_paging(self, session_factory):
        catalog = BusinessCatalog(session_factory)
        catalog.create(make_listing(name="Cheap", asking_price=100_000))
        catalog.create(make_listing(name="Mid", asking_price=300_000))
        catalog.create(make_listing(name="Pricey", asking_price=900_000))

        found = catalog.find(SearchCriteria(price_range=(0, 400_000)))
        assert {b.name for b in found} == {"Cheap", "Mid"}
        assert len(catalog.find(limit=2)) == 2
        assert len(catalog.find(limit=2, offset=2)) == 1

    def test_search_matches_description(self, session_factory):
        catalog = BusinessCatalog(session_factory)
        catalog.create(make_listing(name="Bean Co", description="Specialty coffee roaster"))
        catalog.create(make_listing(name="Fix Co", description="Phone repair"))

        assert [b.name for b in catalog.search("COFFEE")] == ["Bean Co"]


class TestPreferencesRepository:

    def test_save_creates_then_replaces(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        preferences = PreferencesRepository(session_factory)

        assert preferences.get(user.id) is None
        saved = preferences.save(user.id, make_preferences())
        assert saved.capital_range == (100_000, 600_000)
        assert saved.industries == ["Technology"]

        replaced = preferences.save(user.id, make_preferences(industries=["Retail"], location="any"))
        assert replaced.industries == ["Retail"]
        assert replaced.location == "any"

    def test_patch_updates_only_given_fields(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        preferences = PreferencesRepository(session_factory)
        preferences.save(user.id, make_preferences())

        patched = preferences.patch(user.id, PreferencesUpdate(location="Denver, CO"))
        assert patched.location == "Denver, CO"
        assert patched.industries == ["Technology"]
        assert patched.risk_tolerance == "medium"

    def test_patch_without_record(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        preferences = PreferencesRepository(session_factory)
        assert preferences.patch(user.id, PreferencesUpdate(location="Denver, CO")) is None


class TestSearchHistoryRepository:

    def test_newest_first_with_filters(self, session_factory):
        user = UserRepository(session_factory).create("alice")
        history = SearchHistoryRepository(session_factory)

        history.record(user.id, "coffee", 2)
        history.record(user.id, "cleaning", 1, SearchCriteria(location="Phoenix"))

        entries = history.list_for_user(user.id)
        assert [e.query for e in entries] == ["cleaning", "coffee"]
        assert entries[0].filters.location == "Phoenix"
        assert entries[1].filters is None
        assert len(history.list_for_user(user.id, limit=1)) == 1
