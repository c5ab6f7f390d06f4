# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{nntpstore.tap}.
"""

from twisted.internet import defer
from twisted.python.usage import UsageError
from twisted.trial.unittest import SynchronousTestCase, TestCase

from nntpstore import tap
from nntpstore.database import ArticleStore


class OptionsTests(SynchronousTestCase):
    """
    Tests for L{tap.Options}.
    """

    def test_defaults(self):
        """
        Without arguments the store uses C{news.sqlite} and a pool of three
        to five connections, and migrates the schema.
        """
        config = tap.Options()
        config.parseOptions([])
        self.assertEqual(config["database"], "news.sqlite")
        self.assertEqual(config["min-connections"], 3)
        self.assertEqual(config["max-connections"], 5)
        self.assertEqual(config["busy-timeout"], 5.0)
        self.assertFalse(config["no-migrate"])
        self.assertEqual(config.groups, [])

    def test_values(self):
        """
        Numeric options are converted and groups collected in order.
        """
        config = tap.Options()
        config.parseOptions(
            [
                "--database", "other.sqlite",
                "--min-connections", "1",
                "--max-connections", "2",
                "--busy-timeout", "0.5",
                "--group", "comp.lang.go",
                "-g", "alt.test",
                "--no-migrate",
            ]
        )
        self.assertEqual(config["database"], "other.sqlite")
        self.assertEqual(config["min-connections"], 1)
        self.assertEqual(config["max-connections"], 2)
        self.assertEqual(config["busy-timeout"], 0.5)
        self.assertTrue(config["no-migrate"])
        self.assertEqual(config.groups, ["comp.lang.go", "alt.test"])

    def test_invalid(self):
        """
        Inconsistent or malformed values are rejected.
        """
        for arguments in [
            ["--min-connections", "0"],
            ["--min-connections", "4", "--max-connections", "2"],
            ["--busy-timeout", "-1"],
            ["--max-connections", "many"],
        ]:
            self.assertRaises(UsageError, tap.Options().parseOptions, arguments)


class MakeStoreTests(TestCase):
    """
    Tests for L{tap.makeStore}.
    """

    @defer.inlineCallbacks
    def test_makeStore(self):
        """
        L{tap.makeStore} migrates the database and creates the configured
        groups, once.
        """
        path = self.mktemp()
        config = tap.Options()
        config.parseOptions(["--database", path, "-g", "comp.lang.go"])

        store = yield tap.makeStore(config)
        self.assertIsInstance(store, ArticleStore)
        store.close()

        store = yield tap.makeStore(config)
        self.addCleanup(store.close)
        groups = yield store.listGroups()
        self.assertEqual([g.name for g in groups], ["comp.lang.go"])
