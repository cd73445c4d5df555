from app.db.models.favorite import Favorite
from app.db.models.user import User

FAN = {"X-User-Email": "fan@example.com"}


def test_favorite_requires_identity(client, make_cafe):
    cafe = make_cafe("Corner")

    assert client.post(f"/api/cafes/{cafe.id}/favorite").status_code == 401
    assert client.delete(f"/api/cafes/{cafe.id}/favorite").status_code == 401


def test_anonymous_status_is_not_favorited(client, make_cafe):
    cafe = make_cafe("Corner")

    response = client.get(f"/api/cafes/{cafe.id}/favorite")

    assert response.status_code == 200
    assert response.json() == {"isFavorited": False}


def test_favoriting_twice_keeps_one_row(client, db, make_cafe):
    cafe = make_cafe("Corner")

    first = client.post(f"/api/cafes/{cafe.id}/favorite", headers=FAN)
    second = client.post(f"/api/cafes/{cafe.id}/favorite", headers=FAN)

    assert first.status_code == 200
    assert second.json() == {"isFavorited": True}
    assert db.query(Favorite).filter(Favorite.cafe_id == cafe.id).count() == 1
    assert client.get(f"/api/cafes/{cafe.id}/favorite", headers=FAN).json() == {"isFavorited": True}


def test_first_contact_creates_the_local_user(client, db, make_cafe):
    cafe = make_cafe("Corner")

    client.post(f"/api/cafes/{cafe.id}/favorite", headers={"X-User-Email": "New@Example.com", "X-User-Name": "Newbie"})

    user = db.query(User).filter(User.email == "new@example.com").one()
    assert user.name == "Newbie"


def test_unfavorite_is_idempotent(client, db, make_cafe):
    cafe = make_cafe("Corner")
    client.post(f"/api/cafes/{cafe.id}/favorite", headers=FAN)

    first = client.delete(f"/api/cafes/{cafe.id}/favorite", headers=FAN)
    second = client.delete(f"/api/cafes/{cafe.id}/favorite", headers=FAN)

    assert first.json() == {"isFavorited": False}
    assert second.status_code == 200
    assert db.query(Favorite).count() == 0


def test_favoriting_an_unknown_cafe_is_not_found(client):
    response = client.post("/api/cafes/missing/favorite", headers=FAN)

    assert response.status_code == 404
    assert response.json() == {"detail": "cafe not found"}
