from app.services.catalog import CafeQuery, parse_city_filters, search_cafes
from app.services.favorites import favorited_cafe_ids
from app.services.ranking import SORT_NAME_ASC


def test_city_filters_split_dedupe_and_drop_all():
    assert parse_city_filters(None) == []
    assert parse_city_filters(["All"]) == []
    assert parse_city_filters(["LA, SF", " ", "LA"]) == ["LA", "SF"]


def test_bay_and_bay_area_are_aliases():
    assert parse_city_filters(["Bay"]) == ["Bay", "Bay Area"]
    assert parse_city_filters(["Bay Area", "Bay"]) == ["Bay", "Bay Area"]


def test_search_filters_city_and_visibility(db, make_cafe):
    make_cafe("Alpha", city="LA")
    make_cafe("Bravo", city="SF")
    make_cafe("Charlie", city="Bay Area")
    make_cafe("Hidden", city="LA", hidden=True)

    page = search_cafes(db, CafeQuery(cities=parse_city_filters(["LA,Bay"]), sort=SORT_NAME_ASC))

    assert [item.cafe.name for item in page.items] == ["Alpha", "Charlie"]

    page = search_cafes(db, CafeQuery(cities=["LA"], include_hidden=True, sort=SORT_NAME_ASC))
    assert [item.cafe.name for item in page.items] == ["Alpha", "Hidden"]


def test_text_search_runs_on_fetched_candidates(db, make_cafe):
    make_cafe("Phê House")
    make_cafe("Matcha Corner")

    page = search_cafes(db, CafeQuery(text="phe"))

    assert [item.cafe.name for item in page.items] == ["Phê House"]


def test_favorite_lookup_skips_anonymous_and_empty_pages(db, make_cafe, make_user, add_favorite):
    class ExplodingSession:
        def query(self, *args, **kwargs):
            raise AssertionError("no query expected")

    assert favorited_cafe_ids(ExplodingSession(), None, ["x"]) == set()
    assert favorited_cafe_ids(ExplodingSession(), "user-id", []) == set()

    cafe = make_cafe("Liked")
    other = make_cafe("Not Liked")
    user = make_user("fan@example.com")
    add_favorite(user, cafe)

    assert favorited_cafe_ids(db, user.id, [cafe.id, other.id]) == {cafe.id}
