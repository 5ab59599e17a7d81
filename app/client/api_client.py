"""
HTTP client for the JobPortal API.

Thin wrapper over the REST endpoints. Any non-2xx answer, timeout or
connection failure is raised as ApiError carrying the server's
`message`/`error` text.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import JOBPORTAL_API_URL

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 45.0


class ApiError(Exception):
    """A request that did not succeed. status_code is None for network errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return response.text or fallback

    if isinstance(data, dict):
        message = data.get("message") or data.get("error") or data.get("detail")
        if message:
            return message if isinstance(message, str) else str(message)
    return fallback


class ApiClient:
    """
    Client for the job board API.

    Args:
        base_url: API origin, defaults to JOBPORTAL_API_URL
        http: Preconfigured httpx.Client (e.g. a FastAPI TestClient)
        timeout: Per-request timeout in seconds
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self._owns_http = http is None
        self.http = http or httpx.Client(
            base_url=base_url or JOBPORTAL_API_URL,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def close(self):
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None, user_id: Optional[str] = None) -> Any:
        headers = {"user-id": user_id} if user_id else None
        logger.debug(f"[API] {method} {path}")
        try:
            response = self.http.request(method, path, json=json, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise ApiError("Request timeout - please try again") from e
        except httpx.HTTPError as e:
            raise ApiError(f"Network request failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"[API] {method} {path} failed: {response.status_code} {message}")
            raise ApiError(message, status_code=response.status_code)

        return response.json()

    # Jobs

    def list_jobs(self, user_id: Optional[str] = None, experience_level: Optional[str] = None, location: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {
            key: value
            for key, value in {"experienceLevel": experience_level, "location": location, "search": search}.items()
            if value
        }
        return self._request("GET", "/api/jobs", params=params or None, user_id=user_id)

    def soft_delete_job(self, job_id: str, user_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/api/jobs/{job_id}/soft-delete", json={"userId": user_id}, user_id=user_id)

    # Deleted posts

    def get_deleted_posts(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/deleted-posts/user/{user_id}")

    def restore_deleted_post(self, deleted_post_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/api/deleted-posts/{deleted_post_id}/restore")

    def permanently_delete_post(self, deleted_post_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/deleted-posts/{deleted_post_id}/permanent")

    # Applications

    def create_application(self, user_id: str, job_id: str) -> Dict[str, Any]:
        return self._request("POST", "/api/applications", json={"userId": user_id, "jobId": job_id})

    def get_user_applications(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/applications/user/{user_id}")

    def delete_application(self, application_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/applications/{application_id}")

    # Companies

    def list_companies(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/companies", user_id=user_id)

    def soft_delete_company(self, company_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
        body = {"userId": user_id} if user_id else None
        return self._request("POST", f"/api/companies/{company_id}/soft-delete", json=body, user_id=user_id)

    def get_deleted_companies(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/deleted-companies", params={"userId": user_id} if user_id else None)

    def restore_deleted_company(self, deleted_company_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/api/deleted-companies/{deleted_company_id}/restore")

    def update_deleted_company(self, deleted_company_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/deleted-companies/{deleted_company_id}", json=fields)

    def permanently_delete_company(self, deleted_company_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/deleted-companies/{deleted_company_id}")
