# -*- test-case-name: nntpstore.test.test_database -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Exceptions raised by L{nntpstore}.
"""

from __future__ import annotations


class NewsStorageError(Exception):
    """
    Base class for all errors raised by the article store.
    """


class NotFound(NewsStorageError):
    """
    No row matched a unique lookup: a group name, a message identifier, a
    (group, article number) pair, or the neighbour of an article at the edge
    of its group.
    """


class NoSuchGroup(NewsStorageError):
    """
    A group named by an article being saved does not exist.

    @ivar group: The group name which did not resolve.
    """

    def __init__(self, group: str) -> None:
        NewsStorageError.__init__(self, group)
        self.group = group

    def __str__(self) -> str:
        return f"no such newsgroup: {self.group!r}"


class WildmatError(NewsStorageError):
    """
    A wildmat pattern could not be parsed.

    @ivar pattern: The pattern text.
    @ivar position: The offset into C{pattern} where parsing failed.
    """

    def __init__(self, pattern: str, position: int, message: str) -> None:
        NewsStorageError.__init__(self, pattern, position, message)
        self.pattern = pattern
        self.position = position
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} at offset {self.position} in {self.pattern!r}"


class InvalidArticle(NewsStorageError):
    """
    An article cannot be stored because its header does not carry exactly
    one I{Message-Id} value.
    """


class StoreError(NewsStorageError):
    """
    The underlying database failed.

    @ivar reason: The DB-API exception raised by the database module.
    """

    def __init__(self, reason: BaseException) -> None:
        NewsStorageError.__init__(self, reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.reason.__class__.__name__}: {self.reason}"


__all__ = [
    "NewsStorageError",
    "NotFound",
    "NoSuchGroup",
    "WildmatError",
    "InvalidArticle",
    "StoreError",
]
