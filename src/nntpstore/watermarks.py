# -*- test-case-name: nntpstore.test.test_watermarks -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Group watermarks.

The low and high watermarks of a group are the smallest and largest article
numbers it holds, both C{0} while the group is empty.  Each function here is
an adbapi interaction: it takes a L{twisted.enterprise.adbapi.Transaction}
and runs in a pool thread.
"""

from __future__ import annotations

from typing import Tuple

from twisted.enterprise.adbapi import Transaction


def _scalar(txn: Transaction, sql: str, groupID: int) -> int:
    txn.execute(sql, (groupID,))
    return int(txn.fetchone()[0])


def articlesCount(txn: Transaction, groupID: int) -> int:
    """
    Count the articles posted to a group.
    """
    return _scalar(
        txn,
        "SELECT COUNT(*) FROM articles_to_groups WHERE group_id = ?",
        groupID,
    )


def highWaterMark(txn: Transaction, groupID: int) -> int:
    """
    Find the highest article number of a group, C{0} if it is empty.
    """
    return _scalar(
        txn,
        "SELECT COALESCE(MAX(article_number), 0) FROM articles_to_groups "
        "WHERE group_id = ?",
        groupID,
    )


def lowWaterMark(txn: Transaction, groupID: int) -> int:
    """
    Find the lowest article number of a group, C{0} if it is empty.
    """
    return _scalar(
        txn,
        "SELECT COALESCE(MIN(article_number), 0) FROM articles_to_groups "
        "WHERE group_id = ?",
        groupID,
    )


def groupInfo(txn: Transaction, groupID: int) -> Tuple[int, int, int]:
    """
    Compute what an NNTP C{GROUP} response reports in one query.

    @return: The article count, low watermark and high watermark.
    """
    txn.execute(
        """
        SELECT COUNT(*),
            COALESCE(MIN(article_number), 0),
            COALESCE(MAX(article_number), 0)
        FROM articles_to_groups
        WHERE group_id = ?
        """,
        (groupID,),
    )
    count, low, high = txn.fetchone()
    return int(count), int(low), int(high)


__all__ = ["articlesCount", "highWaterMark", "lowWaterMark", "groupInfo"]
