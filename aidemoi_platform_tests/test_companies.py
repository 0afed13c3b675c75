def create_company(client, **fields):
    data = {"name": "Acme", "address": "1 Main St", "email": "contact@acme.com", "phone": "555-0100"}
    data.update(fields)
    resp = client.post("/api/v1/companies", json=data)
    assert resp.status_code == 201
    return resp.json()


def test_create_and_get_company(client):
    company = create_company(client)
    assert len(company["id"]) == 36
    assert company["name"] == "Acme"

    resp = client.get(f"/api/v1/companies/{company['id']}")
    assert resp.status_code == 200
    assert resp.json() == company


def test_create_company_requires_name(client):
    resp = client.post("/api/v1/companies", json={"address": "nowhere"})
    assert resp.status_code == 400


def test_create_company_with_only_name(client):
    company = create_company(client, address=None, email=None, phone=None)
    assert company["address"] is None


def test_list_companies(client):
    create_company(client, name="Beta")
    create_company(client, name="Alpha")

    names = [company["name"] for company in client.get("/api/v1/companies").json()]
    assert names == ["Alpha", "Beta"]


def test_partial_update_keeps_other_fields(client):
    company = create_company(client)

    resp = client.put(f"/api/v1/companies/{company['id']}", json={"phone": "555-0199"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["phone"] == "555-0199"
    assert updated["name"] == "Acme"
    assert updated["address"] == "1 Main St"


def test_update_missing_company_returns_404(client):
    resp = client.put("/api/v1/companies/does-not-exist", json={"name": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Company not found", "statusCode": 404}}


def test_delete_company(client):
    company = create_company(client)

    assert client.delete(f"/api/v1/companies/{company['id']}").status_code == 204
    assert client.get(f"/api/v1/companies/{company['id']}").status_code == 404
    assert client.delete(f"/api/v1/companies/{company['id']}").status_code == 404
