# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Helpers for tests which need a real article store.
"""

from __future__ import annotations

from typing import Iterable, Optional

from twisted.internet import defer
from twisted.internet.task import Clock

from nntpstore import database, schema
from nntpstore.article import Article, Attachment


def makeArticle(
    messageID: str,
    subject: str = "a test",
    thread: Optional[str] = None,
    attachments: Iterable[Attachment] = (),
) -> Article:
    """
    Create an article with a small but realistic header.
    """
    return Article(
        header={
            "Path": ["not-for-mail"],
            "From": ["<exarkun@somehost.domain.com>"],
            "Subject": [subject],
            "Message-Id": [messageID],
            "X-Trace": ["first hop", "second hop"],
        },
        body="this is a test\r\n...\r\nlala\r\nmoo\r\n",
        thread=thread,
        attachments=list(attachments),
    )


class StoreTestsMixin:
    """
    Set up an L{database.ArticleStore} backed by a freshly migrated SQLite
    file, with creation times taken from C{self.clock}.
    """

    def setUp(self):
        self.path = self.mktemp()
        schema.migrate(self.path)
        self.clock = Clock()
        self.clock.advance(1000)
        pool = database.connectionPool(self.path)
        pool.start()
        self.store = database.ArticleStore(pool, self.clock)
        self.addCleanup(self.store.close)

    @defer.inlineCallbacks
    def post(self, group, count, prefix="article"):
        """
        Post C{count} articles to C{group} one after the other, advancing the
        clock by a second before each.

        @return: A L{Deferred} firing with the message identifiers posted.
        """
        messageIDs = []
        for i in range(count):
            messageID = f"<{prefix}-{i}@example.com>"
            self.clock.advance(1)
            yield self.store.saveArticle(makeArticle(messageID), [group])
            messageIDs.append(messageID)
        return messageIDs
