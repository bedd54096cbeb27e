"""Applies numbered SQL migration files to a SQLite database."""

from __future__ import annotations

import logging
import re
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Migration:
    """A migration file and the version its name carries."""

    version: int
    name: str
    path: Path


def split_statements(body: str) -> list[str]:
    """Split SQL text on semicolons.

    Text after the last semicolon is ignored, as are empty statements.
    """
    pieces = body.split(";")[:-1]
    return [piece.strip() for piece in pieces if piece.strip()]


def migration_version(name: str) -> int:
    """The integer before the first dot of a migration file name."""
    prefix = name.split(".", 1)[0] if "." in name else ""
    if not _INTEGER.fullmatch(prefix):
        raise ValueError(f"migration {name!r} has no version prefix")
    return int(prefix)


def pending_migrations(migrations_dir: str | Path, current_version: int) -> list[Migration]:
    """Migrations newer than ``current_version``, oldest first."""
    directory = Path(migrations_dir)
    found = [
        Migration(version=migration_version(entry.name), name=entry.name, path=entry)
        for entry in sorted(directory.iterdir())
    ]
    return sorted(
        (m for m in found if m.version > current_version),
        key=lambda m: m.version,
    )


def up(db_path: str | Path, migrations_dir: str | Path) -> list[Migration]:
    """Apply all pending migrations in one transaction and return them."""
    pending: list[Migration] = []
    with closing(sqlite3.connect(str(db_path), isolation_level=None)) as conn:
        try:
            conn.execute("create table if not exists migrations(version int not null)")
            conn.execute("begin")
            try:
                row = conn.execute(
                    "select version from migrations order by version desc limit 1"
                ).fetchone()
                current = int(row[0]) if row else 0
                pending = pending_migrations(migrations_dir, current)
                for migration in pending:
                    for statement in split_statements(migration.path.read_text()):
                        conn.execute(statement)
                if pending:
                    conn.execute(
                        "insert into migrations(version) values(?)",
                        (pending[-1].version,),
                    )
            except BaseException:
                conn.execute("rollback")
                raise
            conn.execute("commit")
        finally:
            log.info("migrations for db %s up done", db_path)
    return pending