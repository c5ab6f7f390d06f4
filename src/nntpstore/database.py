# -*- test-case-name: nntpstore.test.test_database -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
An L{IArticleStore} kept in SQLite, using Twisted's asynchronous DB-API.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from zope.interface import implementer

from twisted.enterprise import adbapi
from twisted.internet import defer
from twisted.internet.defer import Deferred
from twisted.internet.interfaces import IReactorTime
from twisted.logger import Logger
from twisted.python.failure import Failure

from nntpstore import threads, watermarks, wildmat
from nntpstore.article import (
    Article,
    Attachment,
    Group,
    parseHeader,
    serializeHeader,
)
from nntpstore.error import NoSuchGroup, NotFound, StoreError, WildmatError
from nntpstore.interfaces import IArticleStore

GROUP_COLUMNS = "newsgroups.id, newsgroups.group_name, newsgroups.created_at"

ARTICLE_COLUMNS = (
    "articles.id, articles.header, articles.body, articles.thread, "
    "articles.created_at"
)

# One statement, so the maximum is read and the new number written under the
# same write lock.
NUMBER_ARTICLE = """
    INSERT INTO articles_to_groups (article_id, group_id, article_number)
    SELECT ?, ?, COALESCE(MAX(article_number), 0) + 1
    FROM articles_to_groups
    WHERE group_id = ?
"""


def _regexp(expression: str, value: Optional[str]) -> bool:
    """
    Implementation of the SQLite C{REGEXP} operator.
    """
    if value is None:
        return False
    return re.search(expression, value) is not None


def _openConnection(connection) -> None:
    connection.create_function("REGEXP", 2, _regexp, deterministic=True)
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")


def connectionPool(
    path: str,
    minConnections: int = 3,
    maxConnections: int = 5,
    busyTimeout: float = 5.0,
) -> adbapi.ConnectionPool:
    """
    Create a connection pool for the SQLite database at C{path}.

    Writers which find the database locked wait up to C{busyTimeout} seconds
    for it, so concurrent posts are serialized rather than failed.
    """
    return adbapi.ConnectionPool(
        "sqlite3",
        path,
        timeout=busyTimeout,
        check_same_thread=False,
        cp_min=minConnections,
        cp_max=maxConnections,
        cp_openfun=_openConnection,
        cp_noisy=False,
    )


def _group(row) -> Group:
    return Group(id=row[0], name=row[1], createdAt=row[2])


def _article(row, number: Optional[int]) -> Article:
    return Article(
        header=parseHeader(row[1]),
        body=row[2],
        thread=row[3],
        id=row[0],
        number=number,
        createdAt=row[4],
    )


def _attachments(txn: adbapi.Transaction, articleID: int) -> List[Attachment]:
    txn.execute(
        "SELECT content_type, attachment_id FROM attachments_articles_mapping "
        "WHERE article_id = ?",
        (articleID,),
    )
    return [Attachment(contentType, ref) for (contentType, ref) in txn.fetchall()]


def _numbered(txn: adbapi.Transaction, missing: str) -> Article:
    """
    Build an article from a row of C{ARTICLE_COLUMNS} followed by its
    article number.
    """
    row = txn.fetchone()
    if row is None:
        raise NotFound(missing)
    article = _article(row, row[5])
    article.attachments = _attachments(txn, article.id)
    return article


@implementer(IArticleStore)
class ArticleStore:
    """
    Groups and articles kept in a relational database.

    @ivar dbpool: The L{adbapi.ConnectionPool} the store queries through.
    """

    _log = Logger()

    def __init__(
        self, dbpool: adbapi.ConnectionPool, clock: Optional[IReactorTime] = None
    ) -> None:
        """
        @param clock: The source of creation times, the global reactor by
            default.
        """
        if clock is None:
            from twisted.internet import reactor as clock
        self.dbpool = dbpool
        self._clock = clock

    def close(self) -> None:
        """
        Close the connection pool.
        """
        self.dbpool.close()

    def _storeFailure(self, failure: Failure) -> Failure:
        if failure.check(self.dbpool.dbapi.Error):
            self._log.failure("Database failure", failure)
            raise StoreError(failure.value) from failure.value
        return failure

    def _run(self, interaction, *args) -> Deferred:
        d = self.dbpool.runInteraction(interaction, *args)
        d.addErrback(self._storeFailure)
        return d

    # Groups

    def addGroup(self, name: str) -> Deferred[Group]:
        name = name.strip()
        d = self._run(self._addGroup, name, self._clock.seconds())

        def added(group: Group) -> Group:
            self._log.info("Created newsgroup {name}", name=group.name)
            return group

        return d.addCallback(added)

    def _addGroup(self, txn: adbapi.Transaction, name: str, createdAt: float) -> Group:
        txn.execute(
            "INSERT INTO newsgroups (group_name, created_at) VALUES (?, ?)",
            (name, createdAt),
        )
        return Group(id=txn.lastrowid, name=name, createdAt=createdAt)

    def listGroups(self) -> Deferred[List[Group]]:
        return self._run(self._listGroups)

    def _listGroups(self, txn: adbapi.Transaction) -> List[Group]:
        txn.execute(f"SELECT {GROUP_COLUMNS} FROM newsgroups ORDER BY group_name")
        return [_group(row) for row in txn.fetchall()]

    def listGroupsByPattern(self, pattern: str) -> Deferred[List[Group]]:
        try:
            matcher = wildmat.compile(pattern)
        except WildmatError:
            return defer.fail()
        return self._run(self._listGroupsByPattern, matcher.expression)

    def _listGroupsByPattern(
        self, txn: adbapi.Transaction, expression: str
    ) -> List[Group]:
        txn.execute(
            f"SELECT {GROUP_COLUMNS} FROM newsgroups "
            "WHERE group_name REGEXP ? ORDER BY group_name",
            (expression,),
        )
        return [_group(row) for row in txn.fetchall()]

    def getGroup(self, name: str) -> Deferred[Group]:
        return self._run(self._getGroup, name)

    def _getGroup(self, txn: adbapi.Transaction, name: str) -> Group:
        txn.execute(
            f"SELECT {GROUP_COLUMNS} FROM newsgroups WHERE group_name = ?", (name,)
        )
        row = txn.fetchone()
        if row is None:
            raise NotFound(f"no such newsgroup: {name!r}")
        return _group(row)

    def getNewGroupsSince(self, timestamp: float) -> Deferred[List[Group]]:
        return self._run(self._getNewGroupsSince, timestamp)

    def _getNewGroupsSince(
        self, txn: adbapi.Transaction, timestamp: float
    ) -> List[Group]:
        txn.execute(
            f"SELECT {GROUP_COLUMNS} FROM newsgroups WHERE created_at > ? "
            "ORDER BY created_at, id",
            (timestamp,),
        )
        return [_group(row) for row in txn.fetchall()]

    # Watermarks

    def getArticlesCount(self, group: Group) -> Deferred[int]:
        return self._run(watermarks.articlesCount, group.id)

    def getGroupHighWaterMark(self, group: Group) -> Deferred[int]:
        return self._run(watermarks.highWaterMark, group.id)

    def getGroupLowWaterMark(self, group: Group) -> Deferred[int]:
        return self._run(watermarks.lowWaterMark, group.id)

    def getGroupInfo(self, group: Group) -> Deferred[Tuple[int, int, int]]:
        return self._run(watermarks.groupInfo, group.id)

    # Posting

    def saveArticle(
        self, article: Article, groupNames: Iterable[str]
    ) -> Deferred[None]:
        names: List[str] = []
        for name in groupNames:
            name = name.strip()
            if name not in names:
                names.append(name)
        d = self._run(self._saveArticle, article, names, self._clock.seconds())

        def saved(messageID: str) -> None:
            self._log.info(
                "Stored article {messageID} in {groups}",
                messageID=messageID,
                groups=", ".join(names),
            )

        return d.addCallback(saved)

    def _saveArticle(
        self,
        txn: adbapi.Transaction,
        article: Article,
        names: List[str],
        createdAt: float,
    ) -> str:
        messageID = article.messageID

        # Take the write lock up front; numbering in every group and the
        # article itself then commit or roll back together.
        txn.execute("BEGIN IMMEDIATE")
        txn.execute(
            """
            INSERT INTO articles (message_id, header, body, thread, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                messageID,
                serializeHeader(article.header),
                article.body,
                article.thread or None,
                createdAt,
            ),
        )
        articleID = txn.lastrowid

        for name in names:
            txn.execute("SELECT id FROM newsgroups WHERE group_name = ?", (name,))
            row = txn.fetchone()
            if row is None:
                raise NoSuchGroup(name)
            txn.execute(NUMBER_ARTICLE, (articleID, row[0], row[0]))

        for attachment in article.attachments:
            txn.execute(
                """
                INSERT INTO attachments_articles_mapping
                    (article_id, content_type, attachment_id)
                VALUES (?, ?, ?)
                """,
                (articleID, attachment.contentType, attachment.attachmentID),
            )
        return messageID

    # Articles

    def articleExists(self, messageID: str) -> Deferred[bool]:
        return self._run(self._articleExists, messageID)

    def _articleExists(self, txn: adbapi.Transaction, messageID: str) -> bool:
        txn.execute("SELECT COUNT(*) FROM articles WHERE message_id = ?", (messageID,))
        return bool(txn.fetchone()[0])

    def getArticle(self, messageID: str) -> Deferred[Article]:
        return self._run(self._getArticle, messageID)

    def _getArticle(self, txn: adbapi.Transaction, messageID: str) -> Article:
        txn.execute(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE message_id = ?",
            (messageID,),
        )
        row = txn.fetchone()
        if row is None:
            raise NotFound(f"no article {messageID}")
        txn.execute(
            "SELECT article_number FROM articles_to_groups WHERE article_id = ? "
            "ORDER BY rowid LIMIT 1",
            (row[0],),
        )
        membership = txn.fetchone()
        article = _article(row, membership[0] if membership else None)
        article.attachments = _attachments(txn, article.id)
        return article

    def getArticleByNumber(self, group: Group, number: int) -> Deferred[Article]:
        return self._run(self._getArticleByNumber, group.id, number)

    def _getArticleByNumber(
        self, txn: adbapi.Transaction, groupID: int, number: int
    ) -> Article:
        txn.execute(
            f"""
            SELECT {ARTICLE_COLUMNS}, atg.article_number
            FROM articles
            INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
            WHERE atg.group_id = ? AND atg.article_number = ?
            """,
            (groupID, number),
        )
        return _numbered(txn, f"no article {number} in group {groupID}")

    def getArticleNumbers(
        self, group: Group, low: int, high: int
    ) -> Deferred[List[int]]:
        return self._run(self._getArticleNumbers, group.id, low, high)

    def _getArticleNumbers(
        self, txn: adbapi.Transaction, groupID: int, low: int, high: int
    ) -> List[int]:
        sql = "SELECT article_number FROM articles_to_groups WHERE group_id = ?"
        if low == 0 and high == 0:
            args: Tuple[int, ...] = (groupID,)
        elif low == -1 and high == -1:
            return []
        elif low == -1:
            sql += " AND article_number = ?"
            args = (groupID, high)
        elif high == -1:
            sql += " AND article_number > ?"
            args = (groupID, low)
        else:
            sql += " AND article_number > ? AND article_number < ?"
            args = (groupID, low, high)
        txn.execute(sql + " ORDER BY article_number", args)
        return [number for (number,) in txn.fetchall()]

    def getLastArticleByNum(self, group: Group, article: Article) -> Deferred[Article]:
        return self._run(self._neighbour, group.id, article.id, "<", "DESC")

    def getNextArticleByNum(self, group: Group, article: Article) -> Deferred[Article]:
        return self._run(self._neighbour, group.id, article.id, ">", "ASC")

    def _neighbour(
        self,
        txn: adbapi.Transaction,
        groupID: int,
        articleID: int,
        comparison: str,
        order: str,
    ) -> Article:
        # A cross-posted article has a different number in each group, so
        # the starting point is its number in the group being walked.
        txn.execute(
            "SELECT article_number FROM articles_to_groups "
            "WHERE article_id = ? AND group_id = ?",
            (articleID, groupID),
        )
        row = txn.fetchone()
        if row is None:
            raise NotFound(f"article {articleID} is not in group {groupID}")
        number = row[0]
        txn.execute(
            f"""
            SELECT {ARTICLE_COLUMNS}, atg.article_number
            FROM articles
            INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
            WHERE atg.group_id = ? AND atg.article_number {comparison} ?
            ORDER BY atg.article_number {order}
            LIMIT 1
            """,
            (groupID, number),
        )
        return _numbered(txn, f"no article {comparison} {number} in group {groupID}")

    def getArticlesByRange(
        self, group: Group, low: int, high: int
    ) -> Deferred[List[Article]]:
        return self._run(self._getArticlesByRange, group.id, low, high)

    def _getArticlesByRange(
        self, txn: adbapi.Transaction, groupID: int, low: int, high: int
    ) -> List[Article]:
        txn.execute(
            f"""
            SELECT {ARTICLE_COLUMNS}, atg.article_number
            FROM articles
            INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
            WHERE atg.group_id = ?
            AND atg.article_number >= ? AND atg.article_number <= ?
            ORDER BY atg.article_number
            """,
            (groupID, low, high),
        )
        articles = [_article(row, row[5]) for row in txn.fetchall()]
        for article in articles:
            article.attachments = _attachments(txn, article.id)
        return articles

    def getNewArticlesSince(self, timestamp: float) -> Deferred[List[str]]:
        return self._run(self._getNewArticlesSince, timestamp)

    def _getNewArticlesSince(
        self, txn: adbapi.Transaction, timestamp: float
    ) -> List[str]:
        txn.execute(
            "SELECT message_id FROM articles WHERE created_at > ? "
            "ORDER BY created_at, id",
            (timestamp,),
        )
        return [messageID for (messageID,) in txn.fetchall()]

    # Threads

    def getNewThreads(
        self, group: Group, perPage: int, pageNum: int
    ) -> Deferred[List[int]]:
        return self._run(threads.newThreads, group.id, perPage, pageNum)

    def getThread(self, group: Group, rootArticleNumber: int) -> Deferred[List[int]]:
        return self._run(threads.thread, group.id, rootArticleNumber)


__all__ = ["ArticleStore", "connectionPool"]
