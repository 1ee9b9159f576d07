"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from app.api.main import create_app
from app.config import Settings
from app.context import AppContext
from app.errors import RepositoryError
from app.models import BusinessCreate
from app.models.database import init_db
from app.storage import ScoreRepository

PREFERENCES = {
    "capital_range": [200_000, 800_000],
    "target_income": "100k-200k",
    "risk_tolerance": "medium",
    "involvement": "part-time",
    "location": "any",
    "industries": ["Technology"],
}


def make_client(tmp_path, **kwargs):
    """Build an app on a fresh database; returns (client, context)."""
    defaults = {
        "db_url": f"sqlite:///{tmp_path / 'api.db'}",
        "scorer": "heuristic",
        "rank_delay": 0,
        "refresh_delay": 0,
    }
    defaults.update(kwargs)
    settings = Settings(**defaults)
    ctx = AppContext.build(settings, session_factory=init_db(settings.database_url))
    return TestClient(create_app(settings, ctx)), ctx


@pytest.fixture
def api(tmp_path):
    return make_client(tmp_path)


def add_listing(ctx: AppContext, **kwargs):
    defaults = {
        "name": "TechFix Solutions",
        "location": "Austin, TX",
        "industry": "Technology",
        "asking_price": 500_000,
        "annual_revenue": 1_000_000,
    }
    defaults.update(kwargs)
    return ctx.catalog.create(BusinessCreate(**defaults))


def onboard(client: TestClient) -> dict:
    user = client.post("/api/users", json={"username": "alice"}).json()
    headers = {"X-User-Id": user["id"]}
    response = client.post("/api/user/preferences", json=PREFERENCES, headers=headers)
    assert response.status_code == 200
    return headers


class TestHealth:

    def test_health(self, api):
        client, _ = api
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["scorer"] == "heuristic"


class TestAuthentication:

    def test_missing_header_is_401(self, api):
        client, _ = api
        assert client.get("/api/businesses/ranked").status_code == 401
        assert client.get("/api/user/preferences").status_code == 401

    def test_unknown_user_is_404(self, api):
        client, _ = api
        response = client.get("/api/user/preferences", headers={"X-User-Id": "ghost"})
        assert response.status_code == 404
        assert response.json()["type"] == "NotFoundError"


class TestPreferences:

    def test_save_and_read(self, api):
        client, _ = api
        headers = onboard(client)

        body = client.get("/api/user/preferences", headers=headers).json()
        assert body["preferences"]["capital_range"] == [200_000, 800_000]
        assert body["preferences"]["industries"] == ["Technology"]

    def test_inverted_capital_range_rejected(self, api):
        client, _ = api
        user = client.post("/api/users", json={"username": "alice"}).json()
        bad = dict(PREFERENCES, capital_range=[900_000, 100_000])
        response = client.post(
            "/api/user/preferences", json=bad, headers={"X-User-Id": user["id"]}
        )
        assert response.status_code == 422

    def test_put_without_preferences_is_404(self, api):
        client, _ = api
        user = client.post("/api/users", json={"username": "alice"}).json()
        response = client.put(
            "/api/user/preferences",
            json={"location": "Denver, CO"},
            headers={"X-User-Id": user["id"]},
        )
        assert response.status_code == 404

    def test_put_refreshes_cached_scores(self, api):
        client, ctx = api
        headers = onboard(client)
        business = add_listing(ctx, industry="Retail")
        before = client.post(f"/api/businesses/{business.id}/rank", headers=headers).json()

        response = client.put(
            "/api/user/preferences", json={"industries": ["Retail"]}, headers=headers
        )
        assert response.status_code == 200

        after = ctx.scores.get(headers["X-User-Id"], business.id)
        assert after.score > before["score"]["score"]


class TestRanking:

    def test_ranked_without_preferences_is_400(self, api):
        client, ctx = api
        add_listing(ctx)
        user = client.post("/api/users", json={"username": "alice"}).json()

        response = client.get("/api/businesses/ranked", headers={"X-User-Id": user["id"]})

        assert response.status_code == 400
        assert response.json()["type"] == "PreferencesRequired"

    def test_ranked_listings(self, api):
        client, ctx = api
        headers = onboard(client)
        add_listing(ctx, name="Match")
        add_listing(ctx, name="Miss", industry="Mining", asking_price=3_000_000)

        body = client.get("/api/businesses/ranked", params={"limit": 5}, headers=headers).json()

        assert body["count"] == 2
        assert [r["business"]["name"] for r in body["businesses"]] == ["Match", "Miss"]
        assert body["businesses"][0]["factors"]["priceMatch"] == 90

    def test_rank_single_business(self, api):
        client, ctx = api
        headers = onboard(client)
        business = add_listing(ctx)

        body = client.post(f"/api/businesses/{business.id}/rank", headers=headers).json()

        assert body["ranking"]["source"] == "heuristic"
        assert body["score"]["business_id"] == business.id
        assert body["score"]["score"] == body["ranking"]["score"]

    def test_rank_unknown_business_is_404(self, api):
        client, _ = api
        headers = onboard(client)
        assert client.post("/api/businesses/missing/rank", headers=headers).status_code == 404

    def test_rank_batch_skips_unknown_ids(self, api):
        client, ctx = api
        headers = onboard(client)
        business = add_listing(ctx)

        body = client.post(
            "/api/businesses/rank-batch",
            json={"business_ids": [business.id, "missing"]},
            headers=headers,
        ).json()

        assert body["count"] == 1
        assert body["rankings"][0]["business_id"] == business.id

    def test_business_detail_includes_score(self, api):
        client, ctx = api
        headers = onboard(client)
        business = add_listing(ctx)
        client.post(f"/api/businesses/{business.id}/rank", headers=headers)

        anonymous = client.get(f"/api/businesses/{business.id}").json()
        assert anonymous["score"] is None

        body = client.get(f"/api/businesses/{business.id}", headers=headers).json()
        assert body["business"]["name"] == "TechFix Solutions"
        assert body["score"]["business_id"] == business.id

    def test_storage_failure_is_503(self, api):
        class UnavailableScores(ScoreRepository):
            def upsert(self, score):
                raise RepositoryError("database is locked")

        client, ctx = api
        headers = onboard(client)
        business = add_listing(ctx)
        ctx.ranking.scores = UnavailableScores(ctx.scores._session_factory)

        response = client.post(f"/api/businesses/{business.id}/rank", headers=headers)

        assert response.status_code == 503
        assert response.json()["type"] == "RepositoryError"
        assert response.json()["success"] is False


class TestCatalog:

    def test_list_with_filters(self, api):
        client, ctx = api
        add_listing(ctx, name="Cheap", asking_price=100_000)
        add_listing(ctx, name="Pricey", asking_price=900_000)

        body = client.get("/api/businesses", params={"price_max": 500_000}).json()

        assert body["count"] == 1
        assert body["businesses"][0]["name"] == "Cheap"

    def test_short_query_is_400(self, api):
        client, _ = api
        assert client.get("/api/businesses/search", params={"q": "a"}).status_code == 400

    def test_search_records_history(self, api):
        client, ctx = api
        headers = onboard(client)
        add_listing(ctx, name="Bean Co", industry="Food & Beverage", description="Coffee roaster")

        body = client.get("/api/businesses/search", params={"q": "coffee"}, headers=headers).json()
        assert body["count"] == 1

        history = client.get("/api/user/search-history", headers=headers).json()
        assert history["count"] == 1
        assert history["history"][0]["query"] == "coffee"
        assert history["history"][0]["results_count"] == 1


class TestAdminRoutes:

    def test_hidden_when_disabled(self, api):
        client, _ = api
        assert client.post("/api/admin/businesses/seed").status_code == 404

    def test_seed_and_deactivate(self, tmp_path):
        client, ctx = make_client(tmp_path, enable_admin_routes=True)

        seeded = client.post("/api/admin/businesses/seed").json()
        assert seeded["count"] == 4

        business_id = seeded["businesses"][0]["id"]
        response = client.post(f"/api/admin/businesses/{business_id}/deactivate")
        assert response.status_code == 200
        assert client.get(f"/api/businesses/{business_id}").status_code == 404
