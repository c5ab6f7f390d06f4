# -*- test-case-name: nntpstore -*-

# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
nntpstore: persistent group and article storage for news servers.

The storage layer keeps newsgroups, articles and the per-group article
numbering of an NNTP server in a relational store.  See
L{nntpstore.database.ArticleStore} for the storage API and
L{nntpstore.tap.makeStore} for building a configured store.
"""

from nntpstore._version import __version__ as version

__version__ = version.short()
