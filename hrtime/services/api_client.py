"""
Async client for the upstream HR REST API.

Every call takes the caller's bearer token explicitly; the client keeps no
ambient authorization header. Responses come wrapped as
{"success": ..., "message": ..., "data": ...} and are unwrapped here.
"""

from typing import Any, Dict, List, Optional

import httpx

from hrtime.core.config import settings
from hrtime.core.exceptions import UpstreamAPIError
from hrtime.core.logging import get_logger
from hrtime.schemas.auth import Identity

logger = get_logger("upstream")


def unwrap(payload: Any) -> Any:
    """Return the "data" member of an API envelope, or the payload itself."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class HRApiClient:
    """Thin wrapper around httpx.AsyncClient for the HR backend endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls) -> "HRApiClient":
        timeout = httpx.Timeout(settings.UPSTREAM_TIMEOUT_SECONDS)
        return cls(httpx.AsyncClient(base_url=settings.UPSTREAM_API_URL, timeout=timeout))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Any = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info(f"Upstream {method} {path}")
        try:
            response = await self.client.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Upstream {method} {path} failed: {str(e)}")
            raise UpstreamAPIError(f"HR backend unreachable: {str(e)}")

        try:
            payload = response.json() if response.content else None
        except ValueError:
            payload = None

        if response.is_error or (isinstance(payload, dict) and payload.get("success") is False):
            message = "HR backend request failed"
            if isinstance(payload, dict) and payload.get("message"):
                message = payload["message"]
            status_code = response.status_code if response.is_error else 400
            logger.error(f"Upstream {method} {path} returned {status_code}: {message}")
            raise UpstreamAPIError(message, status_code=status_code)

        return payload

    # Auth

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and return {"token": ..., "user": Identity}."""
        data = unwrap(await self.request("POST", "/api/auth/login", json={"email": email, "password": password}))
        if not isinstance(data, dict) or not data.get("token") or not data.get("user"):
            raise UpstreamAPIError("Login response did not include a token", status_code=502)
        return {"token": data["token"], "user": Identity.model_validate(data["user"])}

    async def register(self, user_data: Dict[str, Any]) -> Any:
        return unwrap(await self.request("POST", "/api/auth/register", json=user_data))

    # Timesheets

    async def list_timesheets(self, identity: Identity, token: str) -> List[Dict[str, Any]]:
        """Fetch the timesheets visible to identity's role."""
        if identity.is_manager():
            path = "/api/manager/timesheets"
        elif identity.is_hr():
            path = "/api/hr/timesheets"
        elif identity.is_admin():
            path = "/api/admin/timesheets"
        else:
            path = "/api/timesheets"
        return _as_list(unwrap(await self.request("GET", path, token=token)))

    async def list_pending_grouped(self, token: str) -> List[Dict[str, Any]]:
        return _as_list(unwrap(await self.request("GET", "/api/manager/timesheets/pending/grouped", token=token)))

    async def list_assigned_projects(self, token: str) -> List[Dict[str, Any]]:
        return _as_list(unwrap(await self.request("GET", "/api/timesheets/projects", token=token)))

    async def submit_entry(self, token: str, entry: Dict[str, Any]) -> Dict[str, Any]:
        data = unwrap(await self.request("POST", "/api/timesheets", token=token, json=entry))
        return data if isinstance(data, dict) else {}

    async def change_status(self, token: str, day_id, status: str, comment: Optional[str] = None) -> Any:
        body: Dict[str, Any] = {"status": status}
        if comment:
            body["comment"] = comment
        return unwrap(await self.request("PUT", f"/api/manager/timesheets/{day_id}/status", token=token, json=body))

    # Manager

    async def list_managed_projects(self, token: str) -> List[Dict[str, Any]]:
        return _as_list(unwrap(await self.request("GET", "/api/manager/projects", token=token)))

    async def list_managed_employees(self, token: str) -> List[Dict[str, Any]]:
        return _as_list(unwrap(await self.request("GET", "/api/manager/employees", token=token)))

    # HR

    async def list_projects(self, identity: Identity, token: str) -> List[Dict[str, Any]]:
        if identity.is_admin():
            path = "/api/admin/projects"
        elif identity.is_hr():
            path = "/api/hr/projects"
        else:
            path = "/api/projects"
        return _as_list(unwrap(await self.request("GET", path, token=token)))

    async def create_project(self, token: str, project: Dict[str, Any]) -> Any:
        return unwrap(await self.request("POST", "/api/hr/projects", token=token, json=project))

    async def list_project_assignments(self, token: str, project_id) -> List[Dict[str, Any]]:
        return _as_list(unwrap(await self.request("GET", f"/api/hr/assignments/project/{project_id}", token=token)))

    async def create_assignment(self, token: str, project_id, employee_id) -> Any:
        body = {"projectId": project_id, "employeeId": employee_id}
        return unwrap(await self.request("POST", "/api/hr/assignments", token=token, json=body))

    async def delete_assignment(self, token: str, project_id, employee_id) -> Any:
        path = f"/api/hr/assignments/project/{project_id}/employee/{employee_id}"
        return unwrap(await self.request("DELETE", path, token=token))

    async def assign_manager(self, token: str, employee_id, manager_id) -> Any:
        path = f"/api/hr/users/{employee_id}/manager"
        return unwrap(await self.request("PUT", path, token=token, json={"managerId": manager_id}))

    # Users

    async def list_users(self, identity: Identity, token: str) -> List[Dict[str, Any]]:
        path = "/api/hr/users" if identity.is_hr() else "/api/admin/users"
        return _as_list(unwrap(await self.request("GET", path, token=token)))

    async def create_user(self, token: str, user: Dict[str, Any]) -> Any:
        return unwrap(await self.request("POST", "/api/admin/users", token=token, json=user))

    async def delete_user(self, token: str, user_id) -> Any:
        return unwrap(await self.request("DELETE", f"/api/admin/users/{user_id}", token=token))
