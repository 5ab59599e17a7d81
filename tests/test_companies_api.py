"""
Integration tests for company soft delete and /api/deleted-companies.
"""


def _company_ids(client, user_id=None):
    headers = {"user-id": user_id} if user_id else {}
    return [company["id"] for company in client.get("/api/companies", headers=headers).json()]


def test_create_and_get_company(client):
    response = client.post("/api/companies", json={"id": "company-9", "name": "Initech", "linkedinUrl": "https://linkedin.com/initech"})

    assert response.status_code == 201
    assert response.json()["linkedinUrl"] == "https://linkedin.com/initech"
    assert client.get("/api/companies/company-9").json()["name"] == "Initech"
    assert client.get("/api/companies/nope").status_code == 404


def test_soft_delete_defaults_to_admin_trash(client, company):
    response = client.post("/api/companies/company-1/soft-delete")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["alreadyDeleted"] is False
    assert data["deletedCompany"]["userId"] == "admin"
    assert data["deletedCompany"]["daysLeft"] == 5

    assert _company_ids(client) == []
    assert _company_ids(client, "u1") == ["company-1"]


def test_soft_delete_for_header_user(client, company):
    client.post("/api/companies/company-1/soft-delete", headers={"user-id": "u1"})
    repeat = client.post("/api/companies/company-1/soft-delete", json={"userId": "u1"})

    assert repeat.json()["alreadyDeleted"] is True
    assert _company_ids(client, "u1") == []
    assert _company_ids(client) == ["company-1"]


def test_soft_delete_unknown_company(client):
    response = client.post("/api/companies/nope/soft-delete")

    assert response.status_code == 404
    assert response.json()["message"] == "Company not found"


def test_list_edit_and_restore(client, company):
    deleted_id = client.post("/api/companies/company-1/soft-delete").json()["deletedCompany"]["id"]

    listed = client.get("/api/deleted-companies").json()
    assert [record["id"] for record in listed] == [deleted_id]
    assert listed[0]["company"]["name"] == "Acme Corp"
    assert client.get("/api/deleted-companies", params={"userId": "u1"}).json() == []

    edited = client.put(f"/api/deleted-companies/{deleted_id}", json={"name": "Acme Holdings", "size": "51-200"})
    assert edited.status_code == 200
    assert edited.json()["company"]["company"]["name"] == "Acme Holdings"

    restored = client.post(f"/api/deleted-companies/{deleted_id}/restore")
    assert restored.status_code == 200
    assert restored.json()["message"] == "Company restored successfully"
    assert restored.json()["company"]["name"] == "Acme Holdings"
    assert restored.json()["company"]["size"] == "51-200"

    assert client.get("/api/deleted-companies").json() == []
    assert _company_ids(client) == ["company-1"]


def test_edit_unknown_record_is_404(client):
    response = client.put("/api/deleted-companies/nope", json={"name": "Nobody"})

    assert response.status_code == 404
    assert response.json()["error"] == "Deleted company not found"


def test_permanent_delete_twice(client, company):
    deleted_id = client.post("/api/companies/company-1/soft-delete").json()["deletedCompany"]["id"]

    assert client.delete(f"/api/deleted-companies/{deleted_id}").status_code == 200
    second = client.delete(f"/api/deleted-companies/{deleted_id}")
    assert second.status_code == 404
    assert client.post(f"/api/deleted-companies/{deleted_id}/restore").status_code == 404


def test_company_stays_hidden_after_permanent_delete(client, company):
    deleted_id = client.post("/api/companies/company-1/soft-delete").json()["deletedCompany"]["id"]

    assert client.delete(f"/api/deleted-companies/{deleted_id}").status_code == 200

    assert _company_ids(client) == []
    assert _company_ids(client, "u1") == ["company-1"]
    assert client.get("/api/deleted-companies").json() == []
    assert client.put(f"/api/deleted-companies/{deleted_id}", json={"name": "Back Again"}).status_code == 404
