from confplanner.favorites import Favorites
from confplanner.models import Session


def test_add_remove_toggle():
    favorites = Favorites()
    assert not favorites.has_favorite("Keynote")

    favorites.add_favorite("Keynote")
    assert favorites.has_favorite("Keynote")

    assert favorites.toggle("Keynote") is False
    assert not favorites.has_favorite("Keynote")
    assert favorites.toggle("Keynote") is True

    favorites.remove_favorite("Keynote")
    favorites.remove_favorite("never added")
    assert len(favorites) == 0


def test_favorites_property_is_a_copy():
    favorites = Favorites(["A"])
    names = favorites.favorites
    names.add("B")
    assert not favorites.has_favorite("B")


def test_get_favorite_sessions_keeps_order():
    sessions = [Session(name="C"), Session(name="A"), Session(name="B")]
    favorites = Favorites(["A", "C"])
    assert [s.name for s in favorites.get_favorite_sessions(sessions)] == ["C", "A"]
