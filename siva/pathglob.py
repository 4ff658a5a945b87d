"""
Shell-style glob matching for archive entry names.

Names are treated as POSIX paths and patterns must match the whole name:

- ``*`` matches any run of characters inside one path segment
- ``**`` matches any run of characters across segments
- ``?`` matches one character other than ``/``
- ``[abc]``, ``[a-z]``, ``[!a-z]`` match one character from (or outside) a class
- ``{a,b}`` matches either alternative (groups do not nest)
- ``\\x`` matches ``x`` literally
"""

from __future__ import annotations

import functools
import re
from typing import List

from .constants import PATH_SEP
from .errors import InvalidPatternError


_REPEATED_SEP = re.compile(re.escape(PATH_SEP) + "{2,}")


def normalize_name(name: str) -> str:
    """Collapse repeated separators and drop a trailing one, keeping a bare root."""
    name = _REPEATED_SEP.sub(PATH_SEP, name)
    if len(name) > 1 and name.endswith(PATH_SEP):
        name = name[:-1]
    return name


def _translate_class(pattern: str, i: int, out: List[str]) -> int:
    # i points just past the opening '['
    n = len(pattern)
    begin = i - 1
    if i < n and pattern[i] == "!":
        out.append("[^" + re.escape(PATH_SEP))
        i += 1
    else:
        out.append("[")
    members = 0
    if i < n and pattern[i] == "-":
        out.append(re.escape("-"))
        members += 1
        i += 1
    last = None
    while i < n:
        c = pattern[i]
        if c == "]":
            break
        if c == PATH_SEP:
            raise InvalidPatternError(pattern, i, "Explicit 'name separator' in class")
        if c == "-" and i + 1 < n and pattern[i + 1] != "]":
            if last is None:
                # no range start, e.g. the second '-' in [a-c-e]
                raise InvalidPatternError(pattern, i, "Invalid range")
            hi = pattern[i + 1]
            if hi == PATH_SEP:
                raise InvalidPatternError(pattern, i + 1, "Explicit 'name separator' in class")
            if hi < last:
                raise InvalidPatternError(pattern, i, "Invalid range")
            out.append("-" + re.escape(hi))
            last = None
            i += 2
            continue
        out.append(re.escape(c))
        last = c
        members += 1
        i += 1
    if i >= n:
        raise InvalidPatternError(pattern, begin, "Missing ']'")
    if members == 0:
        raise InvalidPatternError(pattern, begin, "Empty character class")
    out.append("]")
    return i + 1


def translate(pattern: str) -> str:
    """Translate a glob pattern into an (unanchored) regular expression string."""
    out: List[str] = []
    in_group = False
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "\\":
            if i == n:
                raise InvalidPatternError(pattern, i - 1, "No character to escape")
            out.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            i = _translate_class(pattern, i, out)
        elif c == "{":
            if in_group:
                raise InvalidPatternError(pattern, i - 1, "Cannot nest groups")
            out.append("(?:")
            in_group = True
        elif c == "}" and in_group:
            out.append(")")
            in_group = False
        elif c == "," and in_group:
            out.append("|")
        elif c == "*":
            if i < n and pattern[i] == "*":
                out.append(".*")
                i += 1
            else:
                out.append("[^" + re.escape(PATH_SEP) + "]*")
        elif c == "?":
            out.append("[^" + re.escape(PATH_SEP) + "]")
        else:
            out.append(re.escape(c))
    if in_group:
        raise InvalidPatternError(pattern, n, "Missing '}'")
    return "".join(out)


@functools.lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern:
    return re.compile(translate(pattern), re.DOTALL)


def matches(pattern: str, name: str) -> bool:
    return compile_glob(pattern).fullmatch(normalize_name(name)) is not None
