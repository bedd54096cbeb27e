# movez

A small web server that shows a list of movies fetched from The Movie
Database (TMDB) API. With no search term it shows the top-rated movies
(sorted by vote average, at least 1000 votes, no adult titles), and it caches
that default list and the genre names in a SQLite database so that later
requests need no API call. A search term always goes to the API and is never
cached.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## What you must provide

The package ships no HTML templates and no SQL migration files. Before the
server can start you need:

- a templates directory holding `movies.html` and `movie_list.html`
  (Jinja2 templates, autoescaped);
- a migrations directory of numbered SQL files that create the cache tables:
  `genres(id, name)` and
  `movies(overview, poster_src, title_en, genre_ids_csv, release_year, vote_avg)`.

## Running the server

You need a TMDB API read access token. Start the server with it:

```
movez --token token
```

Options (each also accepted with a single dash, e.g. `-token`):

- `--token` – TMDB access token (required; without it the usage is printed
  and the command exits with status 1).
- `--sqlite_path` – path of the SQLite cache database (default `testar`).
- `--migrations_dir` – directory of migration files (default `migrations`).
- `--templates_dir` – directory of the templates (default `templates`).

Before the server starts, pending migrations are applied to the database.
The server then listens on `localhost:1337` and shuts down on Ctrl-C or
SIGTERM, closing the database connection.

## Routes

- `GET /movies` renders `movies.html` with no context.
- `GET /movie-list` renders `movie_list.html` with a `movies` variable, a
  list of `movez.handler.MovieView` objects with the fields `title_en`,
  `overview`, `vote_average` (rounded to one decimal), `genres` (genre
  names), `poster_src` (the poster path as the API returns it) and
  `release_year`. Add `?search=<title>` to search instead of showing the
  cached top list.

When the movies or genres cannot be fetched, or a template fails to render,
the text `SORRY! :D` is written into the response. Unknown paths get a 404,
a wrong method a 405 with an `Allow` header, and an exception in a route
handler a 500. `HEAD` is answered for `GET` routes.

## Migrations

`movez.migrate.up(db_path, migrations_dir)` applies migrations in one
transaction and returns the applied `Migration` objects. Every file in the
directory must be named with an integer version before its first dot (for
example `1.create_tables.sql`); otherwise `ValueError` is raised. Files with
a version higher than the last one recorded in the `migrations` table are run
in version order. Each file is split on semicolons; text after the last
semicolon is ignored. The highest applied version is then recorded.

Helpers: `split_statements(body)`, `migration_version(name)` and
`pending_migrations(migrations_dir, current_version)`.

## Using it as a library

- `movez.tmdb.TmdbService(access_token)` talks to the TMDB API with
  `get_genres()` and `get_movies(search)`, raising `movez.tmdb.TmdbError`
  on failure. Movies whose release date is not `YYYY-MM-DD` are skipped.
  `genres_from_response`, `movies_from_response`, `build_movies_url` and
  `parse_release_date` are available on their own.
- `movez.cache.SqliteCache(path)` stores genres and movies in SQLite
  (`get_genres`, `set_genres`, `get_movies`, `set_movies`, `close`; also a
  context manager). The getters raise `movez.cache.CacheMiss` when nothing
  is cached. Setters append rows; they do not clear earlier ones.
- `movez.models.CachedMovieService(service, cache)` reads genres and the
  default movie list from the cache first and falls back to the service,
  filling the cache. Cache errors are logged, never raised.
- `movez.models.ListItem` and `movez.models.Genre` are the data types.
- `movez.csvutil.csv_to_ints` and `ints_to_csv` convert genre id lists to
  and from comma-separated text.
- `movez.handler.MovieHandler(data, templates_dir)` renders the pages
  (`render_movies`, `render_movie_list(search)`) and gives its `routes()`;
  `to_view_items(movies, genres)` builds the view objects.
- `movez.server.ApiServer(routes, host, port)` serves `Route` objects in a
  background thread (`run`, `close`); with port `0` the bound port is
  stored in `port` after `run()`.