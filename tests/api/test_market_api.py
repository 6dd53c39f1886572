"""
API tests for market data endpoints.
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from tests.conftest import make_pair


class TestAutofillAPI:
    """Tests for GET /market/autofill."""

    def test_resolves_token_address(self, client: TestClient):
        response = client.get("/market/autofill", params={"query": "0xaaa"})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price_usd"]) == Decimal("1.50")
        assert data["base_token_symbol"] == "AAA"
        assert data["quote_token_symbol"] == "WETH"

    def test_resolves_pair_address(self, client, fake_provider):
        """
        GIVEN a query only known to the pair endpoint
        WHEN I GET /market/autofill
        THEN the pair endpoint result is returned
        """
        fake_provider.pair_pairs["0xpool"] = [
            make_pair("0xddd", price_usd="4.20", pair_address="0xpool", symbol="DDD")
        ]

        response = client.get("/market/autofill", params={"query": " 0xpool "})

        assert response.status_code == 200
        assert response.json()["pair_address"] == "0xpool"

    def test_unknown_query_is_404(self, client):
        response = client.get("/market/autofill", params={"query": "0xnothing"})

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_missing_query_rejected(self, client):
        assert client.get("/market/autofill").status_code == 422


class TestRefreshAPI:
    """Tests for POST /market/refresh."""

    def test_refresh_picks_up_new_prices(self, client, fake_provider, app_context):
        """
        GIVEN a trade priced at 1.50
        WHEN the price moves to the target and the cache has been cleared
        THEN a manual refresh auto-closes the trade
        """
        trade = client.post("/trades", json={
            "coin_slug_or_address": "0xaaa",
            "entry_price": "1",
            "target_price": "1.80",
            "stop_loss": "0.5",
            "quantity": "10",
        }).json()
        fake_provider.set_price("0xaaa", "1.90")
        app_context.market_data.clear_cache()

        response = client.post("/market/refresh")

        assert response.status_code == 200
        assert response.json() == {"updated_count": 1, "open_count": 0}
        assert client.get(f"/trades/{trade['trade_id']}").json()["status"] == "closed-profit"

    def test_refresh_without_trades(self, client, fake_provider):
        response = client.post("/market/refresh")

        assert response.json() == {"updated_count": 0, "open_count": 0}
        assert fake_provider.token_calls == []
