"""Tests for FastAPI endpoints."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import UploadFile
from unfold.dependencies import datastore_dependency, settings_dependency
from unfold.main import app


@pytest.fixture
def overrides(store, settings):
    app.dependency_overrides[datastore_dependency] = lambda: store
    app.dependency_overrides[settings_dependency] = lambda: settings
    yield settings
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(overrides):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health_endpoint(client):
    """Test health endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_public_pages(client):
    """Landing, portfolio and CV pages render from the datastore."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "Jane builds things" in response.text

    response = await client.get("/portfolio", params={"sort": "title_asc"})
    assert response.status_code == 200
    assert response.text.index("Alpha") < response.text.index("Beta")

    response = await client.get("/portfolio", params={"sort": "bogus", "technology": "react"})
    assert response.status_code == 200
    assert 'id="project-beta"' in response.text
    assert 'id="project-alpha"' not in response.text

    response = await client.get("/curriculum-vitae")
    assert response.status_code == 200
    assert "Built the billing system" in response.text


@pytest.mark.asyncio
async def test_project_page_and_not_found(client):
    response = await client.get("/portfolio/alpha")
    assert response.status_code == 200
    assert "The first project." in response.text

    response = await client.get("/portfolio/missing")
    assert response.status_code == 404
    assert "Page not found" in response.text


@pytest.mark.asyncio
async def test_cv_pdf(client):
    """Test CV PDF download."""
    response = await client.get("/curriculum-vitae/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="Jane Doe - CV - ' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_admin_requires_admin_mode(client, overrides):
    overrides.admin_mode = False

    response = await client.get("/api/admin/cv")
    assert response.status_code == 403

    response = await client.post(
        "/api/upload", files={"image": ("a.png", b"data", "image/png")}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_section_lifecycle(client):
    response = await client.post("/api/admin/cv/sections", json={"type": "publications"})
    assert response.status_code == 201
    section_id = response.json()["id"]

    response = await client.post(
        f"/api/admin/cv/sections/{section_id}/items",
        json={"title": "A paper", "authors": "J. Doe", "date": "2022"},
    )
    assert response.status_code == 201
    item_id = response.json()["id"]

    response = await client.patch(
        f"/api/admin/cv/sections/{section_id}/items/{item_id}",
        json={"url": "https://example.com/paper"},
    )
    assert response.status_code == 200
    assert response.json()["kind"] == "publications"

    response = await client.post(f"/api/admin/cv/sections/{section_id}/visibility")
    assert response.json() == {"isVisible": False}

    response = await client.get(f"/api/admin/cv/sections/{section_id}")
    assert response.json()["title"] == "Publications"

    response = await client.delete(f"/api/admin/cv/sections/{section_id}")
    assert response.status_code == 204

    response = await client.get(f"/api/admin/cv/sections/{section_id}")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_error_status_codes(client):
    response = await client.post("/api/admin/cv/sections", json={"type": "education"})
    assert response.status_code == 409
    assert response.json()["code"] == "conflict"

    response = await client.post("/api/admin/cv/sections/sec-edu/items", json={"degree": "x"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation"

    response = await client.post("/api/admin/cv/sections", json={"type": "custom"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation"


@pytest.mark.asyncio
async def test_malformed_datastore_is_a_storage_error(client, data_file):
    data_file.write_text('{"schemaVersion": 1, "cv": {"sections": ["oops"]}}', encoding="utf-8")

    response = await client.get("/api/admin/cv")
    assert response.status_code == 500
    assert response.json()["code"] == "storage"


@pytest.mark.asyncio
async def test_untitled_section_keeps_items_and_visibility(client):
    response = await client.post(
        "/api/admin/cv/sections",
        json={
            "type": "languages",
            "isVisible": False,
            "items": [{"language": "French", "proficiency": "Fluent"}],
        },
    )
    assert response.status_code == 201

    section = (await client.get(f"/api/admin/cv/sections/{response.json()['id']}")).json()
    assert section["title"] == "Languages"
    assert section["isVisible"] is False
    assert [item["language"] for item in section["items"]] == ["French"]


@pytest.mark.asyncio
async def test_reorder_endpoints(client):
    response = await client.put("/api/admin/cv/sections/order", json={"ids": ["sec-skills"]})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["sec-skills", "sec-work", "sec-edu", "sec-awards"]

    response = await client.put(
        "/api/admin/cv/sections/sec-work/items/order",
        json={"ids": ["work-2"], "dropOmitted": True},
    )
    assert [item["id"] for item in response.json()] == ["work-2"]


@pytest.mark.asyncio
async def test_project_and_vocabulary_endpoints(client):
    response = await client.post("/api/admin/projects", json={"title": "New Thing", "date": "2025"})
    assert response.status_code == 201
    assert response.json() == {"slug": "new-thing"}

    response = await client.post("/api/admin/technologies", json={"name": "go"})
    assert response.status_code == 201
    assert response.json() == ["go", "Python", "React"]

    response = await client.put(
        "/api/admin/technologies", json={"name": "go", "newName": "python"}
    )
    assert response.status_code == 409

    response = await client.delete("/api/admin/roles", params={"name": "Developer"})
    assert response.json() == []

    response = await client.delete("/api/admin/projects/new-thing")
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_upload_endpoint(client, overrides):
    response = await client.post(
        "/api/upload", files={"image": ("me.png", b"\x89PNG", "image/png")}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["path"].startswith("/images/uploads/")
    assert (overrides.uploads_dir / body["fileName"]).exists()

    response = await client.post(
        "/api/upload", files={"image": ("big.png", b"0" * (6 * 1024 * 1024), "image/png")}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "File size must be less than 5MB"

    response = await client.post("/api/upload")
    assert response.status_code == 400
    assert response.json()["detail"] == "No file provided"


@pytest.mark.asyncio
async def test_oversized_upload_is_rejected_before_reading(client, overrides, monkeypatch):
    """The declared size is checked before any of the body is read."""
    reads = []
    original_read = UploadFile.read

    async def recording_read(self, size=-1):
        reads.append(size)
        return await original_read(self, size)

    monkeypatch.setattr(UploadFile, "read", recording_read)
    overrides.max_upload_bytes = 1024

    response = await client.post(
        "/api/upload", files={"image": ("big.png", b"0" * 4096, "image/png")}
    )
    assert response.status_code == 400
    assert reads == []

    response = await client.post(
        "/api/upload", files={"image": ("small.png", b"0" * 512, "image/png")}
    )
    assert response.status_code == 200
    assert reads == [1025]
