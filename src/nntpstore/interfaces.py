# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Interfaces for news storage.
"""

from zope.interface import Interface


class IArticleStore(Interface):
    """
    Persistent storage of newsgroups and the articles posted to them.

    Every article posted to a group is given a number in that group.  Numbers
    start at 1 and each new article gets one more than the highest number
    the group holds, so numbers never collide and only a failed post can
    leave a gap.

    All methods return L{twisted.internet.defer.Deferred}s.  Database
    failures are reported as L{nntpstore.error.StoreError}.
    """

    def addGroup(name):
        """
        Create a newsgroup.

        @param name: The group name; surrounding whitespace is removed.

        @return: A L{Deferred} firing with the new
            L{nntpstore.article.Group}.
        """

    def listGroups():
        """
        @return: A L{Deferred} firing with a C{list} of every
            L{nntpstore.article.Group}, ordered by name.
        """

    def listGroupsByPattern(pattern):
        """
        List the groups whose name matches a wildmat.

        @param pattern: A wildmat, see L{nntpstore.wildmat}.

        @return: A L{Deferred} firing with a C{list} of
            L{nntpstore.article.Group}, or failing with
            L{nntpstore.error.WildmatError} if C{pattern} is malformed.
        """

    def getGroup(name):
        """
        @return: A L{Deferred} firing with the L{nntpstore.article.Group}
            called C{name}, or failing with L{nntpstore.error.NotFound}.
        """

    def getNewGroupsSince(timestamp):
        """
        @param timestamp: A POSIX time.

        @return: A L{Deferred} firing with a C{list} of the groups created
            strictly after C{timestamp}.
        """

    def getArticlesCount(group):
        """
        @return: A L{Deferred} firing with the number of articles in
            C{group}.
        """

    def getGroupHighWaterMark(group):
        """
        @return: A L{Deferred} firing with the highest article number in
            C{group}, or C{0} if the group is empty.
        """

    def getGroupLowWaterMark(group):
        """
        @return: A L{Deferred} firing with the lowest article number in
            C{group}, or C{0} if the group is empty.
        """

    def getGroupInfo(group):
        """
        @return: A L{Deferred} firing with a C{(count, low, high)} tuple for
            C{group}.
        """

    def saveArticle(article, groupNames):
        """
        Store an article and post it to some groups.

        Either the article is stored and numbered in every group or nothing
        is stored at all.

        @param article: The L{nntpstore.article.Article} to store.
        @param groupNames: The names of the groups to post to.  Surrounding
            whitespace is ignored.

        @return: A L{Deferred} firing with C{None} once the article is
            stored.  It fails with L{nntpstore.error.NoSuchGroup} if a group
            does not exist and with L{nntpstore.error.InvalidArticle} if the
            article does not have exactly one I{Message-Id}.
        """

    def articleExists(messageID):
        """
        @return: A L{Deferred} firing with C{True} if an article with the
            given I{Message-Id} is stored.
        """

    def getArticle(messageID):
        """
        Look up an article by I{Message-Id}.

        The article's C{number} is its number in the first group it was
        posted to.

        @return: A L{Deferred} firing with the L{nntpstore.article.Article}
            or failing with L{nntpstore.error.NotFound}.
        """

    def getArticleByNumber(group, number):
        """
        @return: A L{Deferred} firing with the article numbered C{number}
            in C{group}, or failing with L{nntpstore.error.NotFound}.
        """

    def getArticleNumbers(group, low, high):
        """
        List article numbers of a group.

        C{0} means a bound is unset and C{-1} that it is explicitly absent:

          - C{(0, 0)}: every number;
          - C{(-1, -1)}: nothing;
          - C{(-1, high)}: C{high} alone, if present;
          - C{(low, -1)}: numbers greater than C{low};
          - otherwise numbers strictly between C{low} and C{high}.

        @return: A L{Deferred} firing with a C{list} of C{int}, ascending.
        """

    def getLastArticleByNum(group, article):
        """
        @return: A L{Deferred} firing with the article preceding C{article}
            in C{group}, or failing with L{nntpstore.error.NotFound} if
            C{article} is the first one or is not in C{group}.
        """

    def getNextArticleByNum(group, article):
        """
        @return: A L{Deferred} firing with the article following C{article}
            in C{group}, or failing with L{nntpstore.error.NotFound} if
            C{article} is the last one or is not in C{group}.
        """

    def getArticlesByRange(group, low, high):
        """
        @return: A L{Deferred} firing with the articles of C{group} numbered
            from C{low} to C{high} inclusive, in ascending order, with their
            attachments.
        """

    def getNewArticlesSince(timestamp):
        """
        @return: A L{Deferred} firing with the I{Message-Id}s of the articles
            stored strictly after the POSIX time C{timestamp}.
        """

    def getNewThreads(group, perPage, pageNum):
        """
        @param perPage: The page size.
        @param pageNum: The zero-based page number.

        @return: A L{Deferred} firing with the numbers of the thread roots
            in C{group} on the requested page, newest first.
        """

    def getThread(group, rootArticleNumber):
        """
        @return: A L{Deferred} firing with the numbers of the replies to the
            root article C{rootArticleNumber} of C{group}, oldest first, or
            failing with L{nntpstore.error.NotFound} if there is no such
            article.
        """
