from typing import Any, Dict, List, Optional
import requests

from . import config


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def _err(resp: requests.Response) -> str:
    try:
        j = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(j, dict) and "detail" in j:
        return str(j["detail"])
    return str(j)


class OrdersApi:
    """REST side of the order chat: listing orders and status transitions."""

    def __init__(self, token: str, base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.http = requests.Session()
        self.http.headers["Authorization"] = f"Bearer {token}"

    def _url(self, p: str) -> str:
        return f"{self.base_url}{p}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        r = self.http.request(method, self._url(path), timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            raise ApiError(_err(r), r.status_code)
        return r.json()

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/users/me/")

    def list_orders(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        data = self._request("GET", "/api/orders/", params=params)
        return data["results"]

    def get_order(self, order_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/orders/{order_id}/")

    def create_order(self, gig_id: int, initial_message: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/orders/",
            json={"gig": gig_id, "initial_message": initial_message},
        )

    def update_status(self, order_id: int, status: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/orders/{order_id}/status/", json={"status": status})
