"""
Tests for the saved user state endpoints
"""

from conftest import VALID_ADDRESS


def test_requires_session(client):
    assert client.get("/api/user/state").status_code == 401
    assert client.put("/api/user/state", json={"wishlist": []}).status_code == 401


def test_fresh_account_state(client, register):
    register()
    response = client.get("/api/user/state")
    assert response.status_code == 200
    assert response.json() == {"cart": [], "wishlist": [], "addresses": [], "orders": []}


def test_wishlist_update_leaves_cart_untouched(client, register, create_livestock):
    register()
    goat = create_livestock()
    saved = client.put(
        "/api/user/state",
        json={"cart": [{"livestockId": goat["id"], "selected": True}], "addresses": [VALID_ADDRESS]},
    )
    assert saved.status_code == 200

    response = client.put("/api/user/state", json={"wishlist": ["id1"]})
    assert response.status_code == 200
    state = response.json()
    assert [entry["livestockId"] for entry in state["cart"]] == [goat["id"]]
    assert state["addresses"] == [VALID_ADDRESS]
    assert [entry["livestockId"] for entry in state["wishlist"]] == ["id1"]
    assert client.get("/api/user/state").json() == state


def test_identical_updates_are_idempotent(client, register, create_livestock):
    register()
    goat = create_livestock()
    payload = {
        "cart": [{"livestockId": goat["id"], "selected": False}],
        "wishlist": [goat["id"]],
        "addresses": [VALID_ADDRESS],
    }
    first = client.put("/api/user/state", json=payload).json()
    second = client.put("/api/user/state", json=payload).json()
    assert first == second


def test_cart_is_joined_with_catalog(client, register, create_livestock):
    register()
    goat = create_livestock(name="Sirohi Goat", breed="Sirohi", price=18000, image="sirohi.jpg")
    state = client.put(
        "/api/user/state",
        json={"cart": [{"livestockId": goat["id"]}, {"livestockId": "deleted-listing"}]},
    ).json()

    joined, dangling = state["cart"]
    assert joined == {
        "livestockId": goat["id"],
        "selected": True,
        "name": "Sirohi Goat",
        "type": "Goat",
        "breed": "Sirohi",
        "price": 18000,
        "image": "sirohi.jpg",
        "available": True,
    }
    assert dangling == {
        "livestockId": "deleted-listing",
        "selected": True,
        "name": "",
        "type": "",
        "breed": "",
        "price": 0,
        "image": "",
        "available": False,
    }


def test_state_view_round_trips(client, register, create_livestock):
    register()
    goat = create_livestock()
    state = client.put("/api/user/state", json={"cart": [{"livestockId": goat["id"]}], "wishlist": [goat["id"]]}).json()
    again = client.put("/api/user/state", json={"cart": state["cart"], "wishlist": state["wishlist"]}).json()
    assert again == state


def test_non_list_fields_are_ignored(client, register):
    register()
    client.put("/api/user/state", json={"wishlist": ["id1"]})
    response = client.put("/api/user/state", json={"wishlist": "id2", "cart": None})
    assert response.status_code == 200
    assert [entry["livestockId"] for entry in response.json()["wishlist"]] == ["id1"]


def test_invalid_elements_rejected(client, register):
    register()
    client.put("/api/user/state", json={"wishlist": ["id1"]})
    response = client.put(
        "/api/user/state",
        json={"wishlist": ["id2"], "addresses": [{"name": "Asha Rao", "phone": "98765"}]},
    )
    assert response.status_code == 400
    assert "addresses[0].line1 is required" in response.json()["detail"]
    assert [entry["livestockId"] for entry in client.get("/api/user/state").json()["wishlist"]] == ["id1"]


def test_non_object_body_rejected(client, register):
    register()
    assert client.put("/api/user/state", json=["id1"]).status_code == 400


def test_state_includes_order_history(client, register):
    register()
    created = client.post(
        "/api/orders",
        json={
            "items": [{"id": "l1", "name": "Sojat Goat", "price": 15000}],
            "total": 15000,
            "address": VALID_ADDRESS,
        },
    ).json()
    orders = client.get("/api/user/state").json()["orders"]
    assert [order["id"] for order in orders] == [created["id"]]


def test_states_are_per_user(client, register):
    register(email="first@example.com")
    client.put("/api/user/state", json={"wishlist": ["id1"]})
    register(email="second@example.com")
    assert client.get("/api/user/state").json()["wishlist"] == []
