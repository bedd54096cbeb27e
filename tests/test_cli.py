import sqlite3
from contextlib import closing

from movez.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.token == ""
    assert args.sqlite_path == "testar"


def test_parser_accepts_single_and_double_dash():
    parser = build_parser()
    assert parser.parse_args(["-token", "token"]).token == "token"
    assert parser.parse_args(["--token", "token"]).token == "token"
    assert parser.parse_args(["-sqlite_path", "db.sqlite"]).sqlite_path == "db.sqlite"


def test_main_without_token_fails(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_fails_on_missing_migrations(tmp_path):
    code = main(
        [
            "-token",
            "token",
            "-sqlite_path",
            str(tmp_path / "db.sqlite"),
            "-migrations_dir",
            str(tmp_path / "missing"),
        ]
    )
    assert code == 1


def test_main_fails_on_missing_templates_after_migrating(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "1.genres.sql").write_text("create table genres(id int, name text);")
    db = tmp_path / "db.sqlite"
    code = main(
        [
            "--token",
            "token",
            "--sqlite_path",
            str(db),
            "--migrations_dir",
            str(migrations),
            "--templates_dir",
            str(tmp_path / "no-templates"),
        ]
    )
    assert code == 1
    with closing(sqlite3.connect(db)) as conn:
        assert [row[0] for row in conn.execute("select version from migrations")] == [1]