# -*- test-case-name: nntpstore.test.test_article -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Records kept by the article store and the codec for article headers.

Article headers are an ordered mapping of header name to an ordered list of
values.  They are stored as a JSON object, which keeps both orders.
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional

import attr

from nntpstore.error import InvalidArticle

MESSAGE_ID = "Message-Id"

Header = Dict[str, List[str]]


@attr.s(auto_attribs=True)
class Group:
    """
    A newsgroup.

    @ivar id: The store-assigned identifier.
    @ivar name: The group name, unique within the store.
    @ivar createdAt: The POSIX time at which the group was created.
    """

    id: int
    name: str
    createdAt: float


@attr.s(auto_attribs=True)
class Attachment:
    """
    A reference to content kept outside the store.

    @ivar contentType: The MIME type of the content.
    @ivar attachmentID: The external reference, typically a file name.
    """

    contentType: str
    attachmentID: str


@attr.s(auto_attribs=True)
class Article:
    """
    A news article.

    @ivar header: Header names mapped to the list of values given for them.
    @ivar body: The article body.
    @ivar thread: The message identifier of the article this one replies to,
        or C{None} for the root of a thread.
    @ivar attachments: The article's L{Attachment}s.
    @ivar id: The store-assigned identifier, C{None} until stored.
    @ivar number: The article number within the group the article was
        looked up through, C{None} until stored.
    @ivar createdAt: The POSIX time the article was stored at.
    """

    header: Header = attr.ib(factory=dict)
    body: str = ""
    thread: Optional[str] = None
    attachments: List[Attachment] = attr.ib(factory=list)
    id: Optional[int] = None
    number: Optional[int] = None
    createdAt: Optional[float] = None

    def getHeader(self, name: str) -> List[str]:
        """
        Get the values of a header, matching its name case-insensitively.

        @return: The values, in order; an empty list if the header is absent.
        """
        lowered = name.lower()
        values: List[str] = []
        for key, found in self.header.items():
            if key.lower() == lowered:
                values.extend(found)
        return values

    @property
    def messageID(self) -> str:
        """
        The article's I{Message-Id}.

        @raise InvalidArticle: If the header does not hold exactly one
            I{Message-Id} value.
        """
        values = self.getHeader(MESSAGE_ID)
        if len(values) != 1:
            raise InvalidArticle(
                f"expected exactly one {MESSAGE_ID} value, found {len(values)}"
            )
        return values[0]


def serializeHeader(header: Header) -> str:
    """
    Encode an article header for storage.
    """
    return json.dumps(
        {name: list(values) for name, values in header.items()},
        ensure_ascii=False,
    )


def parseHeader(data: str) -> Header:
    """
    Decode an article header produced by L{serializeHeader}.
    """
    return {name: list(values) for name, values in json.loads(data).items()}


__all__ = [
    "MESSAGE_ID",
    "Group",
    "Attachment",
    "Article",
    "serializeHeader",
    "parseHeader",
]
