# -*- test-case-name: nntpstore.test.test_schema -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Schema management for the SQLite article store.

The schema is a sequence of versioned migration scripts kept in the
C{migrations} directory next to this module.  L{migrate} applies the ones a
database has not seen yet, so it is safe to call on every start up.
"""

from __future__ import annotations

from twisted.logger import Logger
from twisted.python.filepath import FilePath
from yoyo import get_backend, read_migrations

MIGRATIONS = FilePath(__file__).sibling("migrations")

_log = Logger()


def migrate(path: str, migrations: FilePath = MIGRATIONS) -> int:
    """
    Bring the schema of the database at C{path} up to date.

    This blocks; call it before the store's connection pool starts.

    @param path: The filesystem path of the SQLite database.  It is created
        if it does not exist.
    @param migrations: The directory holding the migration scripts.

    @return: The number of migrations applied.
    """
    backend = get_backend(f"sqlite:///{path}")
    scripts = read_migrations(migrations.path)
    with backend.lock():
        pending = backend.to_apply(scripts)
        backend.apply_migrations(pending)
    _log.info(
        "Applied {count} schema migrations to {path}",
        count=len(pending),
        path=path,
    )
    return len(pending)


__all__ = ["MIGRATIONS", "migrate"]
