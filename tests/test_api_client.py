"""Tests for PartnerApiClient - envelope normalisation against a mocked backend."""
import httpx
import pytest

from partner_app.schemas.order import RestaurantOrder
from partner_app.utils.api_client import parse_envelope
from partner_app.schemas.envelope import ApiResponse

from conftest import api_url, restaurant_order


class TestAuthHeaders:

    @pytest.mark.asyncio
    async def test_bearer_token_read_from_storage(self, api_client, token_store, mock_api):
        await token_store.set_access_token("tok-123")
        route = mock_api.get(api_url("/orders/restaurant/pending")).mock(
            return_value=httpx.Response(200, json={"orders": [], "total_count": 0})
        )

        await api_client.get("/orders/restaurant/pending")

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer tok-123"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, api_client, mock_api):
        route = mock_api.get(api_url("/orders/restaurant/pending")).mock(
            return_value=httpx.Response(200, json={"orders": []})
        )

        await api_client.get("/orders/restaurant/pending")

        assert "Authorization" not in route.calls.last.request.headers


class TestSuccessEnvelope:

    @pytest.mark.asyncio
    async def test_data_member_is_unwrapped(self, api_client, mock_api):
        mock_api.get(api_url("/orders/O-1")).mock(
            return_value=httpx.Response(200, json={"data": {"order_id": "O-1"}, "message": "ok"})
        )

        response = await api_client.get("/orders/O-1")

        assert response.success is True
        assert response.data == {"order_id": "O-1"}
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_plain_body_is_returned_as_is(self, api_client, mock_api):
        body = {"orders": [], "total_count": 0}
        mock_api.get(api_url("/orders/restaurant/active")).mock(return_value=httpx.Response(200, json=body))

        response = await api_client.get("/orders/restaurant/active")

        assert response.data == body

    @pytest.mark.asyncio
    async def test_common_response_code_decides_success(self, api_client, mock_api):
        mock_api.get(api_url("/orders/O-1")).mock(
            return_value=httpx.Response(200, json={"code": 404, "data": None, "message": "Order not found"})
        )

        response = await api_client.get("/orders/O-1")

        assert response.success is False
        assert response.error == "Order not found"
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_body_is_success_without_data(self, api_client, mock_api):
        mock_api.post(api_url("/orders/O-2/reject")).mock(return_value=httpx.Response(204))

        response = await api_client.post("/orders/O-2/reject", json={"rejection_reason": "closed"})

        assert response.success is True
        assert response.data is None


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_detail_field_becomes_error(self, api_client, mock_api):
        mock_api.post(api_url("/orders/O-1/accept")).mock(
            return_value=httpx.Response(409, json={"detail": "Order already accepted"})
        )

        response = await api_client.post("/orders/O-1/accept", json={"prep_time_minutes": 20})

        assert response.success is False
        assert response.error == "Order already accepted"
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_message_field_used_when_no_detail(self, api_client, mock_api):
        mock_api.get(api_url("/orders/delivery/active")).mock(
            return_value=httpx.Response(403, json={"message": "Not a delivery partner"})
        )

        response = await api_client.get("/orders/delivery/active")

        assert response.error == "Not a delivery partner"
        assert response.is_auth_error

    @pytest.mark.asyncio
    async def test_validation_detail_list_uses_first_message(self, api_client, mock_api):
        mock_api.post(api_url("/orders/O-1/accept")).mock(
            return_value=httpx.Response(422, json={"detail": [{"loc": ["body"], "msg": "field required"}]})
        )

        response = await api_client.post("/orders/O-1/accept", json={})

        assert response.error == "field required"

    @pytest.mark.asyncio
    async def test_generic_fallback_for_non_json_error(self, api_client, mock_api):
        mock_api.get(api_url("/orders/restaurant/pending")).mock(
            return_value=httpx.Response(502, text="<html>Bad Gateway</html>")
        )

        response = await api_client.get("/orders/restaurant/pending")

        assert response.success is False
        assert response.error == "Request failed"
        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_network_failure_has_status_zero(self, api_client, mock_api):
        mock_api.get(api_url("/orders/restaurant/pending")).mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        response = await api_client.get("/orders/restaurant/pending")

        assert response.success is False
        assert response.status_code == 0
        assert response.is_network_error
        assert "Connection refused" in response.error

    @pytest.mark.asyncio
    async def test_undecodable_success_body_has_status_zero(self, api_client, mock_api):
        mock_api.get(api_url("/orders/restaurant/pending")).mock(
            return_value=httpx.Response(200, text="not json")
        )

        response = await api_client.get("/orders/restaurant/pending")

        assert response.success is False
        assert response.status_code == 0


class TestParseEnvelope:

    def test_valid_payload_becomes_model(self):
        response = ApiResponse(success=True, data=restaurant_order("O-1", "confirmed"), status_code=200)

        parsed = parse_envelope(response, RestaurantOrder)

        assert isinstance(parsed.data, RestaurantOrder)
        assert parsed.data.order_id == "O-1"

    def test_malformed_payload_is_a_failure(self):
        response = ApiResponse(success=True, data={"order_status": "confirmed"}, status_code=200)

        parsed = parse_envelope(response, RestaurantOrder)

        assert parsed.success is False
        assert parsed.status_code == 200
        assert "RestaurantOrder" in parsed.error

    def test_failures_pass_through(self):
        response = ApiResponse(success=False, error="boom", status_code=500)

        assert parse_envelope(response, RestaurantOrder) is response
