# -*- test-case-name: nntpstore.test.test_tap -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Configuration of an article store, for embedding in a news server's
C{twistd} plugin.
"""

from __future__ import annotations

from twisted.internet import defer
from twisted.internet.defer import Deferred
from twisted.python import usage

from nntpstore import database, schema
from nntpstore.error import NotFound


class Options(usage.Options):
    synopsis = "[options]"

    optParameters = [
        ["database", "d", "news.sqlite", "SQLite database file"],
        ["min-connections", None, 3, "Minimum number of pooled connections", int],
        ["max-connections", None, 5, "Maximum number of pooled connections", int],
        [
            "busy-timeout",
            None,
            5.0,
            "Seconds a writer waits for a locked database",
            float,
        ],
    ]

    optFlags = [
        ["no-migrate", None, "Do not bring the database schema up to date"],
    ]

    compData = usage.Completions(optActions={"database": usage.CompleteFiles()})

    def __init__(self):
        usage.Options.__init__(self)
        self.groups = []

    def opt_group(self, group):
        """
        The name of a newsgroup to carry (may be repeated).
        """
        self.groups.append(group.strip())

    opt_g = opt_group

    def postOptions(self):
        if self["min-connections"] < 1:
            raise usage.UsageError("--min-connections must be at least 1")
        if self["max-connections"] < self["min-connections"]:
            raise usage.UsageError(
                "--max-connections must not be less than --min-connections"
            )
        if self["busy-timeout"] < 0:
            raise usage.UsageError("--busy-timeout must not be negative")


@defer.inlineCallbacks
def _ensureGroups(store: database.ArticleStore, names):
    for name in names:
        try:
            yield store.getGroup(name)
        except NotFound:
            yield store.addGroup(name)


def makeStore(config: Options) -> Deferred[database.ArticleStore]:
    """
    Build the article store described by C{config}.

    The schema is migrated first unless C{--no-migrate} was given, then the
    connection pool is started and any groups named with C{--group} which do
    not exist yet are created.

    @return: A L{Deferred} firing with the started
        L{database.ArticleStore}.
    """
    if not config["no-migrate"]:
        schema.migrate(config["database"])
    pool = database.connectionPool(
        config["database"],
        minConnections=config["min-connections"],
        maxConnections=config["max-connections"],
        busyTimeout=config["busy-timeout"],
    )
    pool.start()
    store = database.ArticleStore(pool)
    d = _ensureGroups(store, config.groups)

    def failed(reason):
        store.close()
        return reason

    d.addCallbacks(lambda ignored: store, failed)
    return d


__all__ = ["Options", "makeStore"]
