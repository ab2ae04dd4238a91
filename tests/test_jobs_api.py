import pytest
from fastapi import status
from jobtracker.models.job import Job as JobRow

def _create(client, **overrides):
    payload = {"title": "Backend Engineer", "company": "Acme"}
    payload.update(overrides)
    return client.post("/api/jobs", json=payload)

def test_create_job_assigns_id(client):
    """POST returns 201 with the stored record and a server-assigned id."""
    response = _create(client, status="applied", salary=1200, date_applied="2024-03-15T00:00:00.000Z")
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["title"] == "Backend Engineer"
    assert data["status"] == "applied"
    assert data["salary"] == 1200
    assert data["date_applied"] == "2024-03-15T00:00:00.000Z"

def test_create_job_without_status_leaves_it_unset(client):
    """An absent status stays null instead of defaulting to 'applied'."""
    data = _create(client).json()
    assert data["status"] is None
    assert data["notes"] is None

def test_create_job_rejects_empty_title(client):
    response = _create(client, title="   ")
    assert response.status_code == 422
    assert response.json()["success"] is False
    assert response.json()["errors"][0]["field"] == "title"

def test_create_job_rejects_negative_salary_and_unknown_status(client):
    assert _create(client, salary=-1).status_code == 422
    assert _create(client, status="ghosted").status_code == 422

def test_list_jobs(client):
    _create(client, title="First")
    _create(client, title="Second")
    response = client.get("/api/jobs")
    assert response.status_code == 200
    assert [job["title"] for job in response.json()] == ["First", "Second"]

def test_update_job_replaces_fields(client):
    job_id = _create(client, notes="call back", place="Pune").json()["id"]
    response = client.put(
        f"/api/jobs/{job_id}",
        json={"title": "Senior Backend Engineer", "company": "Acme", "status": "offer"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == job_id
    assert data["title"] == "Senior Backend Engineer"
    assert data["status"] == "offer"
    # Full payload update: omitted optional fields are cleared
    assert data["notes"] is None
    assert data["place"] is None

def test_update_missing_job_returns_404(client):
    response = client.put("/api/jobs/9999", json={"title": "x", "company": "y"})
    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "JOB_NOT_FOUND"

def test_delete_job_is_soft(client, db_session):
    """Deleted jobs vanish from the API but the row is kept with deleted_at set."""
    job_id = _create(client).json()["id"]
    response = client.delete(f"/api/jobs/{job_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""

    assert client.get("/api/jobs").json() == []
    assert client.get(f"/api/jobs/{job_id}").status_code == 404
    assert client.delete(f"/api/jobs/{job_id}").status_code == 404

    row = db_session.get(JobRow, job_id)
    assert row is not None
    assert row.deleted_at is not None

def test_get_job(client):
    job_id = _create(client, source="LinkedIn").json()["id"]
    response = client.get(f"/api/jobs/{job_id}")
    assert response.status_code == 200
    assert response.json()["source"] == "LinkedIn"
