# -*- test-case-name: nntpstore.test.test_wildmat -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Wildmat pattern support.

A wildmat is the glob dialect NNTP uses to select newsgroups::

    comp.lang.*,!comp.lang.java.*,comp.lang.java.python

Each comma separated alternative may be prefixed with C{!} to negate it.
Alternatives are evaluated left to right and the last one which matches a
candidate decides whether the candidate is accepted; a candidate which no
alternative matches is rejected.  Within an alternative C{*} matches any run
of characters, C{?} matches one character, C{[...]} is a character class
(C{[!...]} or C{[^...]} negated) and C{\\} quotes the following character.

L{compile} turns a pattern into a L{Wildmat}, which carries a single regular
expression equivalent to the whole pattern.  The expression is what the
database layer hands to its C{REGEXP} function.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Tuple

import attr

from nntpstore.error import WildmatError


@attr.s(auto_attribs=True, frozen=True)
class Wildmat:
    """
    A compiled wildmat.

    @ivar pattern: The wildmat source text.
    @ivar regex: A compiled regular expression which matches exactly the
        candidates the wildmat accepts.
    """

    pattern: str
    regex: re.Pattern = attr.ib(repr=False)

    def matches(self, candidate: str) -> bool:
        """
        @return: C{True} if C{candidate} is accepted by this wildmat.
        """
        return self.regex.match(candidate) is not None

    @property
    def expression(self) -> str:
        """
        The source of L{regex}, suitable for passing to a database C{REGEXP}
        operator.
        """
        return self.regex.pattern


def _classCharacter(pattern: str, i: int, start: int) -> Tuple[str, int]:
    """
    Read one, possibly quoted, character of a character class.

    @return: The character and the index following it.
    """
    if pattern[i] == "\\":
        if i + 1 >= len(pattern):
            raise WildmatError(pattern, start, "unterminated character class")
        return pattern[i + 1], i + 2
    return pattern[i], i + 1


def _parseClass(pattern: str, start: int) -> Tuple[str, int]:
    """
    Translate the character class opening at C{pattern[start]}.

    @return: The regular expression for the class and the index following
        its closing bracket.
    """
    i = start + 1
    negated = False
    if i < len(pattern) and pattern[i] in "!^":
        negated = True
        i += 1

    members = []
    first = True
    while True:
        if i >= len(pattern):
            raise WildmatError(pattern, start, "unterminated character class")
        if pattern[i] == "]" and not first:
            i += 1
            break
        first = False
        low, i = _classCharacter(pattern, i, start)
        if (
            i + 1 < len(pattern)
            and pattern[i] == "-"
            and pattern[i + 1] != "]"
        ):
            high, i = _classCharacter(pattern, i + 1, start)
            if high < low:
                raise WildmatError(pattern, start, f"reversed range {low}-{high}")
            members.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            members.append(re.escape(low))

    return "[" + ("^" if negated else "") + "".join(members) + "]", i


def _parse(pattern: str) -> List[Tuple[bool, str]]:
    """
    Split C{pattern} into its alternatives.

    @return: A list of C{(negated, expression)} pairs in pattern order.
    """
    alternatives = []
    i = 0
    while True:
        start = i
        negated = False
        if i < len(pattern) and pattern[i] == "!":
            negated = True
            i += 1
        parts = []
        while i < len(pattern) and pattern[i] != ",":
            c = pattern[i]
            if c == "*":
                parts.append(".*")
                i += 1
            elif c == "?":
                parts.append(".")
                i += 1
            elif c == "[":
                part, i = _parseClass(pattern, i)
                parts.append(part)
            elif c == "]":
                raise WildmatError(pattern, i, "unbalanced ']'")
            elif c == "\\":
                if i + 1 >= len(pattern):
                    raise WildmatError(pattern, i, "trailing backslash")
                parts.append(re.escape(pattern[i + 1]))
                i += 2
            else:
                parts.append(re.escape(c))
                i += 1
        if not parts:
            raise WildmatError(pattern, start, "empty pattern")
        alternatives.append((negated, "".join(parts)))
        if i >= len(pattern):
            return alternatives
        # Skip the comma.
        i += 1


def _translate(alternatives: List[Tuple[bool, str]]) -> str:
    """
    Build one regular expression which applies the last-match-wins rule.

    A candidate is accepted when some positive alternative matches it and no
    negative alternative appearing after that one does.
    """
    branches = []
    for index, (negated, expression) in enumerate(alternatives):
        if negated:
            continue
        later = [e for (n, e) in alternatives[index + 1 :] if n]
        guard = ""
        if later:
            guard = "(?!(?:" + "|".join(later) + r")\Z)"
        branches.append(guard + "(?:" + expression + r")\Z")
    if not branches:
        # Only negative alternatives: nothing is ever accepted.
        return "(?!)"
    return r"(?s)\A(?:" + "|".join(branches) + ")"


@lru_cache(maxsize=256)
def compile(pattern: str) -> Wildmat:
    """
    Compile a wildmat.

    @param pattern: The wildmat text, for example C{"alt.*,!alt.binaries.*"}.

    @raise WildmatError: If C{pattern} is empty or malformed.

    @return: The compiled pattern.
    """
    return Wildmat(pattern, re.compile(_translate(_parse(pattern))))


__all__ = ["Wildmat", "compile"]
