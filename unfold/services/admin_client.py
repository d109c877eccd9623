"""HTTP client for the admin API, used by the Streamlit console."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import httpx

logger = logging.getLogger(__name__)


def _item_path(section_id: str, item_id: str) -> str:
    # Skill categories key their items, so the id may hold "/" or "#".
    return f"/api/admin/cv/sections/{quote(section_id, safe='')}/items/{quote(item_id, safe='')}"


class AdminAPIError(Exception):
    """The admin API answered with an error status."""

    def __init__(self, status_code: int, detail: str, code: Optional[str] = None):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.code = code


class AdminClient:
    """
    Thin wrapper around the ``/api/admin`` endpoints.

    Args:
        base_url: Server URL, e.g. ``http://localhost:8000``
        client: Pre-built httpx client (tests pass FastAPI's TestClient)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0
    ):
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.client.request(method, path, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {"detail": response.text}
            detail = body.get("detail", response.reason_phrase)
            if not isinstance(detail, str):
                detail = str(detail)
            logger.warning("%s %s -> %d: %s", method, path, response.status_code, detail)
            raise AdminAPIError(response.status_code, detail, body.get("code"))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def health(self) -> bool:
        """Return True when the server answers its health check."""
        try:
            return self.client.get("/health").status_code == 200
        except httpx.HTTPError:
            return False

    # Site
    def get_data(self) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/data")

    def update_profile(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", "/api/admin/profile", json=patch)

    def update_settings(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", "/api/admin/settings", json=patch)

    def update_landing_page(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", "/api/admin/landing-page", json=patch)

    def create_call_to_action(self, text: str, url: str, style: Optional[str] = None) -> str:
        body = self._request(
            "POST",
            "/api/admin/landing-page/call-to-actions",
            json={"text": text, "url": url, "style": style},
        )
        return body["id"]

    def delete_call_to_action(self, cta_id: str) -> None:
        self._request("DELETE", f"/api/admin/landing-page/call-to-actions/{cta_id}")

    # Projects
    def list_projects(self, **filters: str) -> List[Dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value}
        return self._request("GET", "/api/admin/projects", params=params)

    def create_project(self, project: Dict[str, Any]) -> str:
        return self._request("POST", "/api/admin/projects", json=project)["slug"]

    def update_project(self, slug: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/admin/projects/{slug}", json=patch)

    def delete_project(self, slug: str) -> None:
        self._request("DELETE", f"/api/admin/projects/{slug}")

    # Vocabularies ("technologies" or "roles")
    def list_vocabulary(self, vocabulary: str) -> List[str]:
        return self._request("GET", f"/api/admin/{vocabulary}")

    def add_vocabulary_entry(self, vocabulary: str, name: str) -> List[str]:
        return self._request("POST", f"/api/admin/{vocabulary}", json={"name": name})

    def rename_vocabulary_entry(self, vocabulary: str, name: str, new_name: str) -> List[str]:
        return self._request(
            "PUT", f"/api/admin/{vocabulary}", json={"name": name, "newName": new_name}
        )

    def remove_vocabulary_entry(self, vocabulary: str, name: str) -> List[str]:
        return self._request("DELETE", f"/api/admin/{vocabulary}", params={"name": name})

    # CV
    def get_cv(self) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/cv")

    def update_cv(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", "/api/admin/cv", json=patch)

    def create_section(
        self,
        section_type: str,
        title: Optional[str] = None,
        items: Optional[List[Dict[str, Any]]] = None
    ) -> str:
        payload: Dict[str, Any] = {"type": section_type, "items": items or []}
        if title:
            payload["title"] = title
        return self._request("POST", "/api/admin/cv/sections", json=payload)["id"]

    def update_section(self, section_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/admin/cv/sections/{section_id}", json=patch)

    def delete_section(self, section_id: str) -> None:
        self._request("DELETE", f"/api/admin/cv/sections/{section_id}")

    def reorder_sections(self, section_ids: List[str]) -> List[Dict[str, Any]]:
        return self._request("PUT", "/api/admin/cv/sections/order", json={"ids": section_ids})

    def toggle_section_visibility(self, section_id: str) -> bool:
        body = self._request("POST", f"/api/admin/cv/sections/{section_id}/visibility")
        return body["isVisible"]

    def create_item(self, section_id: str, item: Dict[str, Any]) -> str:
        return self._request("POST", f"/api/admin/cv/sections/{section_id}/items", json=item)["id"]

    def update_item(self, section_id: str, item_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", _item_path(section_id, item_id), json=patch)

    def delete_item(self, section_id: str, item_id: str) -> None:
        self._request("DELETE", _item_path(section_id, item_id))

    def reorder_items(
        self,
        section_id: str,
        item_ids: List[str],
        drop_omitted: bool = False
    ) -> List[Dict[str, Any]]:
        return self._request(
            "PUT",
            f"/api/admin/cv/sections/{section_id}/items/order",
            json={"ids": item_ids, "dropOmitted": drop_omitted},
        )

    # Uploads
    def upload_image(self, filename: str, content: bytes, content_type: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/upload", files={"image": (filename, content, content_type)}
        )
