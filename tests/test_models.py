import pytest

from movez.models import CachedMovieService, Genre, ListItem


class FakeCache:
    def __init__(self, genres=None, movies=None, fail_get=False, fail_set=False):
        self.genres = list(genres or [])
        self.movies = list(movies or [])
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_genres_calls = []
        self.set_movies_calls = []
        self.get_movies_calls = 0

    def get_genres(self):
        if self.fail_get:
            raise RuntimeError("broken cache")
        return list(self.genres)

    def set_genres(self, genres):
        self.set_genres_calls.append(list(genres))
        if self.fail_set:
            raise RuntimeError("broken cache")
        self.genres = list(genres)

    def get_movies(self):
        self.get_movies_calls += 1
        if self.fail_get:
            raise RuntimeError("broken cache")
        return list(self.movies)

    def set_movies(self, movies):
        self.set_movies_calls.append(list(movies))
        if self.fail_set:
            raise RuntimeError("broken cache")
        self.movies = list(movies)


class FakeService:
    def __init__(self, genres=None, movies=None, error=None):
        self.genres = list(genres or [])
        self.movies = list(movies or [])
        self.error = error
        self.genre_calls = 0
        self.movie_searches = []

    def get_genres(self):
        self.genre_calls += 1
        if self.error:
            raise self.error
        return list(self.genres)

    def get_movies(self, search):
        self.movie_searches.append(search)
        if self.error:
            raise self.error
        return list(self.movies)


GENRES = [Genre(28, "Action"), Genre(18, "Drama")]
MOVIES = [
    ListItem("Alpha", "first", 8.1, [28], "/a.jpg", 1999),
    ListItem("Beta", "second", 7.4, [18, 28], "/b.jpg", 2005),
]


def test_genres_from_cache_skip_service():
    cache = FakeCache(genres=GENRES)
    service = FakeService(genres=[Genre(1, "Other")])
    result = CachedMovieService(service, cache).get_genres()
    assert result == GENRES
    assert service.genre_calls == 0


def test_genres_miss_fills_cache():
    cache = FakeCache()
    service = FakeService(genres=GENRES)
    result = CachedMovieService(service, cache).get_genres()
    assert result == GENRES
    assert cache.set_genres_calls == [GENRES]


def test_genres_cache_error_falls_back():
    cache = FakeCache(genres=GENRES, fail_get=True)
    service = FakeService(genres=[Genre(5, "Fallback")])
    result = CachedMovieService(service, cache).get_genres()
    assert result == [Genre(5, "Fallback")]
    assert service.genre_calls == 1


def test_genres_cache_set_failure_is_ignored():
    cache = FakeCache(fail_set=True)
    service = FakeService(genres=GENRES)
    assert CachedMovieService(service, cache).get_genres() == GENRES


def test_genres_service_error_propagates():
    cache = FakeCache()
    service = FakeService(error=ConnectionError("down"))
    with pytest.raises(ConnectionError):
        CachedMovieService(service, cache).get_genres()
    assert cache.set_genres_calls == []


def test_default_movies_from_cache():
    cache = FakeCache(movies=MOVIES)
    service = FakeService(movies=[])
    result = CachedMovieService(service, cache).get_movies("")
    assert result == MOVIES
    assert service.movie_searches == []


def test_default_movies_miss_fills_cache():
    cache = FakeCache()
    service = FakeService(movies=MOVIES)
    result = CachedMovieService(service, cache).get_movies("")
    assert result == MOVIES
    assert service.movie_searches == [""]
    assert cache.set_movies_calls == [MOVIES]


def test_search_bypasses_cache():
    cache = FakeCache(movies=MOVIES)
    found = [ListItem("Gamma", "third", 6.0, [], "", 2010)]
    service = FakeService(movies=found)
    result = CachedMovieService(service, cache).get_movies("gamma")
    assert result == found
    assert service.movie_searches == ["gamma"]
    assert cache.get_movies_calls == 0
    assert cache.set_movies_calls == []


def test_search_error_propagates():
    service = FakeService(error=TimeoutError("slow"))
    with pytest.raises(TimeoutError):
        CachedMovieService(service, FakeCache()).get_movies("x")


@pytest.mark.parametrize("service, cache", [(FakeService(), None), (None, FakeCache())])
def test_constructor_requires_both(service, cache):
    with pytest.raises(ValueError):
        CachedMovieService(service, cache)