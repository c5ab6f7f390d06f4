# -*- test-case-name: nntpstore.test.test_threads -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Thread queries.

An article's C{thread} column holds the message identifier of the article it
replies to; thread roots leave it empty.  These are adbapi interactions, see
L{nntpstore.watermarks}.
"""

from __future__ import annotations

from typing import List

from twisted.enterprise.adbapi import Transaction

from nntpstore.error import NotFound


def newThreads(
    txn: Transaction, groupID: int, perPage: int, pageNum: int
) -> List[int]:
    """
    List one page of thread roots in a group, newest first.

    @param perPage: The page size.
    @param pageNum: The zero-based page to return.

    @return: The article numbers of the roots on the page.
    """
    txn.execute(
        """
        SELECT atg.article_number
        FROM articles
        INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
        WHERE atg.group_id = ? AND articles.thread IS NULL
        ORDER BY articles.created_at DESC, articles.id DESC
        LIMIT ? OFFSET ?
        """,
        (groupID, perPage, perPage * pageNum),
    )
    return [row[0] for row in txn.fetchall()]


def thread(txn: Transaction, groupID: int, rootNumber: int) -> List[int]:
    """
    List the replies to a thread root, oldest first.

    @param rootNumber: The article number of the root within the group.

    @raise NotFound: If the group has no article numbered C{rootNumber}.

    @return: The article numbers of the replies posted to the group.
    """
    txn.execute(
        """
        SELECT articles.message_id
        FROM articles
        INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
        WHERE atg.group_id = ? AND atg.article_number = ?
        """,
        (groupID, rootNumber),
    )
    row = txn.fetchone()
    if row is None:
        raise NotFound(f"no article {rootNumber} in group {groupID}")

    txn.execute(
        """
        SELECT atg.article_number
        FROM articles
        INNER JOIN articles_to_groups atg ON atg.article_id = articles.id
        WHERE atg.group_id = ? AND articles.thread = ?
        ORDER BY articles.created_at, articles.id
        """,
        (groupID, row[0]),
    )
    return [number for (number,) in txn.fetchall()]


__all__ = ["newThreads", "thread"]
