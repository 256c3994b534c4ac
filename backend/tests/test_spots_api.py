from __future__ import annotations

import uuid

import pytest

from app.api.deps import get_spot_repository
from app.core.errors import StoreError
from app.main import app
from app.schemas.spots import SpotOut


def test_create_and_list_spots(client, make_spot):
    created = make_spot(name="Beach Gate", category="tourism", type="Beach")

    assert uuid.UUID(created["id"])
    assert created["created_at"]
    assert created["updated_at"]
    assert created["name"] == "Beach Gate"

    resp = client.get("/spots")
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()] == [created["id"]]


def test_get_spot_by_id(client, make_spot):
    created = make_spot()
    resp = client.get(f"/spots/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_create_spot_rejects_missing_fields(client):
    resp = client.post("/spots", json={"name": "No coords", "category": "facility", "type": "ATM"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid request payload: latitude")


def test_create_spot_rejects_malformed_json(client):
    resp = client.post("/spots", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request payload"}


def test_create_spot_rejects_long_category(client):
    resp = client.post(
        "/spots",
        json={"name": "x", "category": "c" * 21, "type": "ATM", "latitude": 0, "longitude": 0},
    )
    assert resp.status_code == 400


def test_put_merges_only_present_fields(client, make_spot):
    created = make_spot()

    resp = client.put(f"/spots/{created['id']}", json={"type": "Bank", "id": str(uuid.uuid4())})

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["type"] == "Bank"
    for field in ("name", "description", "category", "latitude", "longitude", "address", "image_url", "created_at"):
        assert body[field] == created[field]


def test_put_missing_spot_is_404(client):
    resp = client.put(f"/spots/{uuid.uuid4()}", json={"name": "ghost"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Spot not found"}


def test_put_with_bad_id_is_400(client):
    resp = client.put("/spots/not-a-uuid", json={"name": "ghost"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid ID"}


def test_delete_spot(client, make_spot):
    created = make_spot()

    resp = client.delete(f"/spots/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/spots/{created['id']}").status_code == 404


def test_delete_unknown_spot_still_succeeds(client):
    resp = client.delete(f"/spots/{uuid.uuid4()}")
    assert resp.status_code == 204


def test_nearby_example(client, make_spot):
    make_spot(name="origin-far", latitude=1.0, longitude=1.0)
    near = make_spot(name="near", latitude=0.001, longitude=0.0)

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "200"})
    assert resp.status_code == 200
    body = resp.json()
    assert [s["id"] for s in body] == [near["id"]]
    assert body[0]["distance"] == pytest.approx(111.0, abs=1.0)
    # Spot fields are flattened next to the distance.
    assert body[0]["name"] == "near"
    assert body[0]["category"] == near["category"]

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "50"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_nearby_is_sorted_by_distance(client, make_spot):
    for i, lat in enumerate([0.004, 0.001, 0.003, 0.002]):
        make_spot(name=f"s{i}", latitude=lat, longitude=0.0)

    body = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "1000"}).json()

    distances = [s["distance"] for s in body]
    assert len(distances) == 4
    assert distances == sorted(distances)


class _ExplodingRepository:
    def __getattr__(self, name):
        raise AssertionError(f"store accessed via {name}")


@pytest.mark.parametrize(
    "params",
    [
        {"lng": "abc", "lat": "0", "distance": "100"},
        {"lng": "0", "lat": "0", "distance": "1.5"},
        {"lng": "0", "lat": "0"},
    ],
)
def test_nearby_bad_params_never_touch_store(client, params):
    app.dependency_overrides[get_spot_repository] = lambda: _ExplodingRepository()

    resp = client.get("/spots/nearby", params=params)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid query parameters"}


class _BrokenRepository:
    def find_nearby(self, lng, lat, radius_m):
        raise StoreError('function st_dwithin(geography, geography, integer) does not exist')


def test_nearby_store_failure_passes_message_through(client):
    app.dependency_overrides[get_spot_repository] = lambda: _BrokenRepository()

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "100"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "function st_dwithin(geography, geography, integer) does not exist"}


def test_spot_round_trips_through_json(client, make_spot):
    created = make_spot()
    parsed = SpotOut.model_validate_json(client.get(f"/spots/{created['id']}").text)
    assert parsed.model_dump(mode="json") == created


def test_nearby_negative_distance_matches_nothing(client, make_spot):
    make_spot(latitude=0.0, longitude=0.0)

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "-5"})

    assert resp.status_code == 200
    assert resp.json() == []


def test_nearby_oversized_distance_is_400(client, make_spot):
    make_spot()

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "99999999999999999999"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid query parameters"}


def test_nearby_largest_int64_distance_returns_everything(client, make_spot):
    make_spot(name="here", latitude=0.0, longitude=0.0)
    make_spot(name="antipode", latitude=0.0, longitude=180.0)

    resp = client.get("/spots/nearby", params={"lng": "0", "lat": "0", "distance": "9223372036854775807"})

    assert resp.status_code == 200
    assert [s["name"] for s in resp.json()] == ["here", "antipode"]
