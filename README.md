# movieapi

A small JSON web API that serves a movie catalogue from an SQL database,
built on Flask and SQLAlchemy.

## Installing

```
pip install .
```

The database is reached through SQLAlchemy with a `postgresql` URL, so a
PostgreSQL driver that SQLAlchemy supports must be installed alongside
the package.

## Running the server

```
movieapi
```

The command connects to the database (checking it with `SELECT 1`), then
serves the API on port 8080 on all interfaces. If the database cannot be
reached, the error is logged and the command exits with status 1.

Options may be written with one dash or two:

| Option            | Meaning                          | Default                     |
|-------------------|----------------------------------|-----------------------------|
| `--dsn`           | database connection string       | a local `movies` database   |
| `--jwt-secret`    | accepted, not used yet           | `secret`                    |
| `--jwt-issuer`    | accepted, not used yet           | `example.com`               |
| `--jwt-audience`  | accepted, not used yet           | `example.com`               |
| `--cookie-domain` | accepted, not used yet           | `localhost`                 |
| `--domain`        | accepted, not used yet           | `example.com`               |

The connection string is either a URL or `key=value` pairs, for example:

```
movieapi --dsn "host=localhost port=5432 user=user password=password dbname=movies sslmode=disable timezone=UTC"
```

`host`, `port`, `user`, `password` and `dbname` become parts of the URL;
`timezone` is passed on as a `-c timezone=...` connection option; any
other key is passed to the driver as is. Values may be quoted with
single quotes.

## Endpoints

| Method | Path          | What it does                                        |
|--------|---------------|-----------------------------------------------------|
| GET    | `/`           | status, message and version of the service          |
| GET    | `/movies`     | every movie, ordered by title                       |
| POST   | `/movie`      | one movie, body `{"id": 1}`; 404 if there is none   |
| GET    | `/static/...` | files from the `static` directory                   |

Movie runtimes are stored in minutes and returned split into `runtime`
(hours) and `runtime_minutes`. Poster file names are returned as full
URLs under `http://localhost:8080/static/images/`.

Errors come back as JSON of the form:

```json
{"error": true, "message": "movie not found"}
```

Request bodies must hold exactly one JSON object, at most 1 MB, with no
fields other than the ones listed above. Field names match without
regard to case, and `null` values count as absent.

Every response allows the origin `http://localhost:5173` with
credentials; `OPTIONS` requests are answered at once with the allowed
methods and headers.

## What it does not do

There is no sign-in: the package has no authentication, token refresh or
logout endpoints, and issues no tokens or cookies. The `--jwt-*`,
`--cookie-domain` and `--domain` options are read into the configuration
but nothing uses them. `User.validate_password` compares plain-text
passwords; passwords are not hashed.

## Using it as a library

- `movieapi.server.create_app(repo, static_folder="static")` builds the
  Flask application around any implementation of
  `movieapi.repository.DatabaseRepo`.
- `movieapi.repository.SqlDatabaseRepo(engine)` is the SQL-backed
  repository; lookups of missing rows raise `RecordNotFoundError`.
- `movieapi.db.open_db(dsn)` returns a checked SQLAlchemy engine;
  `movieapi.db.dsn_to_url(dsn)` only converts the connection string.
- `movieapi.models` holds the `Movie` and `User` records; their
  `to_dict()` gives the JSON form, without timestamps.
- `movieapi.jsonutil` holds `write_json`, `read_json` and `error_json`.
- `movieapi.cli.parse_args(argv)` returns a `Config`, and
  `movieapi.cli.main(argv)` runs the server.

## Running the tests

```
pip install ".[test]"
pytest
```