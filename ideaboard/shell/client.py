"""HTTP client for the Idea Board API, built on requests."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

DEFAULT_BASE_URL = "http://localhost:5000/api"


@dataclass
class ApiResponse:
    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.data.get("success"))

    @property
    def message(self) -> Optional[str]:
        return self.data.get("message")


class ApiClient:
    """
    Thin wrapper over the JSON endpoints.

    Every method returns an ``ApiResponse`` for any HTTP status; transport
    problems (connection errors, timeouts, non-JSON bodies) propagate as
    ``requests.RequestException``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> ApiResponse:
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            timeout=self.timeout,
        )
        return ApiResponse(status_code=resp.status_code, data=resp.json())

    # ── Accounts ──
    def register(self, full_name: str, phone_number: str, password: str) -> ApiResponse:
        return self._request(
            "POST",
            "/register",
            {"fullName": full_name, "phoneNumber": phone_number, "password": password},
        )

    def login(self, phone_number: str, password: str) -> ApiResponse:
        return self._request("POST", "/login", {"phoneNumber": phone_number, "password": password})

    def list_users(self) -> ApiResponse:
        return self._request("GET", "/users")

    # ── Ideas ──
    def submit_idea(
        self,
        text: str,
        project: str,
        module: str,
        section: str,
        submitted_by: str,
        user_id: int,
    ) -> ApiResponse:
        return self._request(
            "POST",
            "/ideas",
            {
                "text": text,
                "project": project,
                "module": module,
                "section": section,
                "submittedBy": submitted_by,
                "userId": user_id,
            },
        )

    def list_ideas(self) -> ApiResponse:
        return self._request("GET", "/ideas")

    def list_user_ideas(self, user_id: int) -> ApiResponse:
        return self._request("GET", f"/ideas/user/{user_id}")

    def user_idea_stats(self, user_id: int) -> ApiResponse:
        return self._request("GET", f"/ideas/user/{user_id}/stats")

    def update_status(self, idea_id: int, status: str) -> ApiResponse:
        return self._request("PATCH", f"/ideas/{idea_id}/status", {"status": status})
