SLIDES_URL = "/api/v1/admin/slides"


def slide_payload(**overrides):
    payload = {
        "title": "Elegancia Sin Esfuerzo",
        "subtitle": "Nueva colección de piezas minimalistas",
        "button_text": "Ver Colección",
        "button_link": "#products",
        "image": "https://images.example.com/hero-1.jpg",
        "badge": "Nueva Colección",
    }
    payload.update(overrides)
    return payload


def test_create_slide_defaults_order_to_end(client):
    first = client.post(SLIDES_URL, json=slide_payload()).json()["slide"]
    second = client.post(SLIDES_URL, json=slide_payload(title="Temporada de Ofertas")).json()["slide"]

    assert first["order"] == 1
    assert second["order"] == 2
    assert second["is_active"] is True


def test_list_slides_sorted_by_order(client):
    client.post(SLIDES_URL, json=slide_payload(title="Tercero", order=3))
    client.post(SLIDES_URL, json=slide_payload(title="Primero", order=1))
    client.post(SLIDES_URL, json=slide_payload(title="Empate", order=1))

    titles = [s["title"] for s in client.get(SLIDES_URL).json()["slides"]]

    assert titles == ["Primero", "Empate", "Tercero"]


def test_update_slide_partial_and_clear_badge(client):
    slide = client.post(SLIDES_URL, json=slide_payload()).json()["slide"]

    response = client.put(f"{SLIDES_URL}/{slide['id']}", json={"title": "Nuevo Título", "badge": None})

    updated = response.json()["slide"]
    assert updated["title"] == "Nuevo Título"
    assert updated["badge"] is None
    assert updated["button_text"] == "Ver Colección"


def test_toggle_slide(client):
    slide = client.post(SLIDES_URL, json=slide_payload()).json()["slide"]

    toggled = client.post(f"{SLIDES_URL}/{slide['id']}/toggle").json()["slide"]
    assert toggled["is_active"] is False

    toggled = client.post(f"{SLIDES_URL}/{slide['id']}/toggle").json()["slide"]
    assert toggled["is_active"] is True


def test_delete_slide(client):
    slide = client.post(SLIDES_URL, json=slide_payload()).json()["slide"]

    assert client.delete(f"{SLIDES_URL}/{slide['id']}").status_code == 200
    assert client.get(SLIDES_URL).json()["slides"] == []


def test_unknown_slide(client):
    response = client.post(f"{SLIDES_URL}/99/toggle")

    assert response.status_code == 404
    assert response.json()["code"] == "slide_not_found"
