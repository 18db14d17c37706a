import logging
import httpx
from typing import Any, Dict, Optional
from pydantic import ValidationError
from partner_app.core.config import settings
from partner_app.schemas.envelope import ApiResponse
from partner_app.utils.storage import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Request failed"


class PartnerApiClient:
    """
    JSON-over-HTTP client for the order backend.

    Every call resolves to an ApiResponse envelope; transport errors and non-2xx
    statuses are folded into it so callers never see an httpx exception.
    """

    def __init__(
            self,
            http_client: httpx.AsyncClient,
            token_store: TokenStore,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
    ):
        self.client = http_client
        self.tokens = token_store
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS

    async def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        access_token = await self.tokens.get_access_token()
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def request(
            self,
            method: str,
            endpoint: str,
            json: Optional[Dict[str, Any]] = None,
            params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"API request: {method} {url}")
        try:
            headers = await self._get_headers()
            response = await self.client.request(
                method, url, headers=headers, json=json, params=params, timeout=self.timeout
            )
        except Exception as e:
            logger.error(f"API request error: {method} {url}: {e}", exc_info=True)
            return ApiResponse(success=False, error=str(e) or "Network error", status_code=0)

        if not response.is_success:
            error = self._extract_error(self._safe_json(response))
            logger.warning(f"API request failed: {method} {url} -> {response.status_code} {error}")
            return ApiResponse(success=False, error=error, status_code=response.status_code)

        try:
            body = response.json() if response.content else None
        except ValueError as e:
            logger.error(f"Undecodable response from {method} {url}: {e}")
            return ApiResponse(success=False, error=f"Invalid response: {e}", status_code=0)

        return self._unwrap(body, response.status_code)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, json: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("POST", endpoint, json=json)

    @staticmethod
    def _safe_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _extract_error(body: Any) -> str:
        if not isinstance(body, dict):
            return DEFAULT_ERROR
        detail = body.get("detail") or body.get("message")
        # FastAPI validation errors carry a list of {"msg": ...}
        if isinstance(detail, list) and detail:
            first = detail[0]
            detail = first.get("msg") if isinstance(first, dict) else first
        return str(detail) if detail else DEFAULT_ERROR

    @staticmethod
    def _unwrap(body: Any, status_code: int) -> ApiResponse:
        if isinstance(body, dict):
            code = body.get("code")
            if isinstance(code, int) and "data" in body:
                success = 200 <= code < 300
                return ApiResponse(
                    success=success,
                    data=body["data"],
                    error=None if success else (body.get("message") or DEFAULT_ERROR),
                    status_code=code,
                )
            payload = body.get("data")
            return ApiResponse(success=True, data=payload if payload else body, status_code=status_code)
        return ApiResponse(success=True, data=body, status_code=status_code)


def parse_envelope(response: ApiResponse, model: Any) -> ApiResponse:
    """Validates a successful envelope's data against a pydantic model."""
    if not response.success or response.data is None:
        return response
    try:
        data = model.model_validate(response.data)
    except ValidationError as e:
        logger.error(f"Malformed {model.__name__} payload: {e}")
        return ApiResponse(
            success=False,
            error=f"Malformed response: expected {model.__name__}",
            status_code=response.status_code,
        )
    return response.model_copy(update={"data": data})
