from app.db.models.favorite import Favorite
from app.db.models.review import Review
from app.schemas.review import ReviewCreate
from app.services import favorites, reviews


def _miss_once(monkeypatch, module):
    real_find = module._find
    calls = []

    def _find(db, user_id, cafe_id):
        calls.append((user_id, cafe_id))
        if len(calls) == 1:
            return None
        return real_find(db, user_id, cafe_id)

    monkeypatch.setattr(module, "_find", _find)
    return calls


def test_review_insert_that_loses_the_race_updates_the_winner(db, monkeypatch, make_cafe, make_user, add_review):
    cafe = make_cafe("Contested")
    user = make_user("racer@example.com")
    winner = add_review(cafe, 2, user=user)
    winner_id = winner.id
    calls = _miss_once(monkeypatch, reviews)

    payload = ReviewCreate(cafe_id=cafe.id, taste_rating=5, aesthetic_rating=4, study_rating=3, text_comment="second")
    saved = reviews.upsert_review(db, user, payload)

    assert len(calls) == 2
    assert saved.id == winner_id
    rows = db.query(Review).filter(Review.cafe_id == cafe.id).all()
    assert len(rows) == 1
    assert (rows[0].taste_rating, rows[0].aesthetic_rating, rows[0].study_rating) == (5, 4, 3)
    assert rows[0].text_comment == "second"


def test_favorite_insert_that_loses_the_race_keeps_one_row(db, monkeypatch, make_cafe, make_user, add_favorite):
    cafe = make_cafe("Contested")
    user = make_user("racer@example.com")
    add_favorite(user, cafe)
    calls = _miss_once(monkeypatch, favorites)

    favorites.add_favorite(db, user, cafe.id)

    assert len(calls) == 1
    assert db.query(Favorite).filter(Favorite.cafe_id == cafe.id).count() == 1
    assert favorites.is_favorited(db, user.id, cafe.id)
