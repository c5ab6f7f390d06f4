# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{nntpstore.threads}, through L{nntpstore.database.ArticleStore}.
"""

from twisted.internet import defer
from twisted.trial.unittest import TestCase

from nntpstore.error import NotFound
from nntpstore.test.helpers import StoreTestsMixin, makeArticle


class ThreadTests(StoreTestsMixin, TestCase):
    """
    Tests for L{ArticleStore.getNewThreads} and L{ArticleStore.getThread}.

    The group holds, in posting order::

        1 root A
        2 root B
        3   reply to A
        4 root C
        5   reply to B
        6   reply to A
    """

    @defer.inlineCallbacks
    def setUp(self):
        StoreTestsMixin.setUp(self)
        self.group = yield self.store.addGroup("comp.lang.go")
        self.other = yield self.store.addGroup("alt.test")
        for messageID, thread in [
            ("<a@example.com>", None),
            ("<b@example.com>", None),
            ("<a1@example.com>", "<a@example.com>"),
            ("<c@example.com>", None),
            ("<b1@example.com>", "<b@example.com>"),
            ("<a2@example.com>", "<a@example.com>"),
        ]:
            self.clock.advance(1)
            yield self.store.saveArticle(
                makeArticle(messageID, thread=thread), ["comp.lang.go"]
            )

    @defer.inlineCallbacks
    def test_newThreads(self):
        """
        L{ArticleStore.getNewThreads} lists thread roots newest first.
        """
        roots = yield self.store.getNewThreads(self.group, 10, 0)
        self.assertEqual(roots, [4, 2, 1])

    @defer.inlineCallbacks
    def test_newThreadsPaged(self):
        """
        L{ArticleStore.getNewThreads} returns the requested page of roots.
        """
        first = yield self.store.getNewThreads(self.group, 2, 0)
        second = yield self.store.getNewThreads(self.group, 2, 1)
        third = yield self.store.getNewThreads(self.group, 2, 2)
        self.assertEqual((first, second, third), ([4, 2], [1], []))

    @defer.inlineCallbacks
    def test_newThreadsSameTime(self):
        """
        Roots stored at the same time are listed most recently stored first.
        """
        yield self.store.saveArticle(makeArticle("<d@example.com>"), ["alt.test"])
        yield self.store.saveArticle(makeArticle("<e@example.com>"), ["alt.test"])
        roots = yield self.store.getNewThreads(self.other, 10, 0)
        self.assertEqual(roots, [2, 1])

    @defer.inlineCallbacks
    def test_thread(self):
        """
        L{ArticleStore.getThread} lists the replies to a root, oldest first.
        """
        replies = yield self.store.getThread(self.group, 1)
        self.assertEqual(replies, [3, 6])
        replies = yield self.store.getThread(self.group, 2)
        self.assertEqual(replies, [5])

    @defer.inlineCallbacks
    def test_threadWithoutReplies(self):
        """
        A root nobody replied to has an empty thread.
        """
        replies = yield self.store.getThread(self.group, 4)
        self.assertEqual(replies, [])

    def test_threadWithoutRoot(self):
        """
        L{ArticleStore.getThread} fails with L{NotFound} when the group has no
        article with the root number.
        """
        return self.assertFailure(self.store.getThread(self.group, 7), NotFound)

    @defer.inlineCallbacks
    def test_threadWithinGroup(self):
        """
        Replies posted only to other groups are not part of the thread.
        """
        self.clock.advance(1)
        yield self.store.saveArticle(
            makeArticle("<a3@example.com>", thread="<a@example.com>"), ["alt.test"]
        )
        replies = yield self.store.getThread(self.group, 1)
        self.assertEqual(replies, [3, 6])
