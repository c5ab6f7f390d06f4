# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{nntpstore.article}.
"""

from twisted.trial.unittest import SynchronousTestCase

from nntpstore.article import Article, parseHeader, serializeHeader
from nntpstore.error import InvalidArticle


class ArticleTests(SynchronousTestCase):
    """
    Tests for L{Article}.
    """

    def test_getHeader(self):
        """
        L{Article.getHeader} matches header names case-insensitively and
        returns every value in order.
        """
        article = Article(header={"Subject": ["hi"], "X-Trace": ["a", "b"]})
        self.assertEqual(article.getHeader("subject"), ["hi"])
        self.assertEqual(article.getHeader("X-TRACE"), ["a", "b"])
        self.assertEqual(article.getHeader("References"), [])

    def test_messageID(self):
        """
        L{Article.messageID} is the single I{Message-Id} value, however the
        header name is capitalised.
        """
        article = Article(header={"Message-ID": ["<1@example.com>"]})
        self.assertEqual(article.messageID, "<1@example.com>")

    def test_missingMessageID(self):
        """
        An article without a I{Message-Id} has no identity.
        """
        article = Article(header={"Subject": ["hi"]})
        self.assertRaises(InvalidArticle, getattr, article, "messageID")

    def test_ambiguousMessageID(self):
        """
        An article with two I{Message-Id} values has no identity.
        """
        article = Article(
            header={"Message-Id": ["<1@example.com>", "<2@example.com>"]}
        )
        self.assertRaises(InvalidArticle, getattr, article, "messageID")


class HeaderCodecTests(SynchronousTestCase):
    """
    Tests for L{serializeHeader} and L{parseHeader}.
    """

    def test_orderPreserved(self):
        """
        Header names and the values of each header come back in the order
        they were given.
        """
        header = {
            "Path": ["not-for-mail"],
            "Received": ["third", "second", "first"],
            "Message-Id": ["<1@example.com>"],
            "Newsgroups": ["comp.lang.go"],
        }
        parsed = parseHeader(serializeHeader(header))
        self.assertEqual(parsed, header)
        self.assertEqual(list(parsed), list(header))

    def test_nonASCII(self):
        """
        Values outside ASCII survive encoding.
        """
        header = {"From": ["Jürgen <j@example.de>"]}
        data = serializeHeader(header)
        self.assertIn("Jürgen", data)
        self.assertEqual(parseHeader(data), header)
