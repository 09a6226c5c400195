from conftest import auth_headers

USER = auth_headers("editor")


def test_company_crud(client):
    response = client.post(
        "/api/v1/companies",
        json={"nombre": "Rancho El Roble", "slug": "rancho-el-roble", "is_published": True},
        headers=USER,
    )
    assert response.status_code == 201
    company_id = response.json()["id"]

    duplicate = client.post(
        "/api/v1/companies", json={"nombre": "Otro", "slug": "rancho-el-roble"}, headers=USER
    )
    assert duplicate.status_code == 409

    client.post("/api/v1/companies", json={"nombre": "Agro Norte", "slug": "agro-norte"}, headers=USER)
    names = [c["nombre"] for c in client.get("/api/v1/companies").json()["items"]]
    assert names == ["Agro Norte", "Rancho El Roble"]
    published = client.get("/api/v1/companies", params={"published": True}).json()
    assert [c["slug"] for c in published["items"]] == ["rancho-el-roble"]

    updated = client.put(
        f"/api/v1/companies/{company_id}", json={"descripcion": "Criadores de Holstein"}, headers=USER
    )
    assert updated.json()["descripcion"] == "Criadores de Holstein"

    assert client.delete(f"/api/v1/companies/{company_id}").status_code == 401
    assert client.delete(f"/api/v1/companies/{company_id}", headers=USER).status_code == 204
    assert client.get(f"/api/v1/companies/{company_id}").status_code == 404


def test_company_requires_slug(client):
    response = client.post("/api/v1/companies", json={"nombre": "Sin slug"}, headers=USER)
    assert response.status_code == 422


def test_ganado_crud_and_filters(client):
    criador = client.post(
        "/api/v1/criadores", json={"nombre": "Juan", "apellido": "Pérez"}, headers=USER
    ).json()
    assert client.get("/api/v1/criadores", headers=USER).json()["total"] == 1

    toro = client.post(
        "/api/v1/ganado",
        json={
            "nombre": "Campeón",
            "slug": "campeon",
            "sexo": "MACHO",
            "raza": "Holstein",
            "criador_id": criador["id"],
        },
        headers=USER,
    )
    assert toro.status_code == 201
    client.post(
        "/api/v1/ganado",
        json={"nombre": "Perla", "slug": "perla", "sexo": "HEMBRA", "raza": "Jersey"},
        headers=USER,
    )

    machos = client.get("/api/v1/ganado", params={"sexo": "MACHO"}).json()
    assert [g["nombre"] for g in machos["items"]] == ["Campeón"]
    jersey = client.get("/api/v1/ganado", params={"raza": "jersey"}).json()
    assert [g["nombre"] for g in jersey["items"]] == ["Perla"]
    by_breeder = client.get("/api/v1/ganado", params={"criador_id": criador["id"]}).json()
    assert by_breeder["total"] == 1

    ganado_id = toro.json()["id"]
    updated = client.put(f"/api/v1/ganado/{ganado_id}", json={"puntaje": 92.5}, headers=USER)
    assert updated.json()["puntaje"] == 92.5

    duplicate = client.post(
        "/api/v1/ganado", json={"nombre": "Otro", "slug": "perla", "sexo": "HEMBRA"}, headers=USER
    )
    assert duplicate.status_code == 409

    assert client.delete(f"/api/v1/ganado/{ganado_id}", headers=USER).status_code == 204
    assert client.get(f"/api/v1/ganado/{ganado_id}").status_code == 404


def test_ganado_with_unknown_criador(client):
    response = client.post(
        "/api/v1/ganado",
        json={
            "nombre": "Huérfano",
            "slug": "huerfano",
            "sexo": "MACHO",
            "criador_id": "00000000-0000-0000-0000-000000000000",
        },
        headers=USER,
    )
    assert response.status_code == 404
