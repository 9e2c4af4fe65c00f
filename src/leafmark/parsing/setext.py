"""Setext heading underline detection.

A setext marker line is one run of ``=`` or ``-`` characters, optionally
followed by spaces or tabs and nothing else::

    Title         Title
    =====         -----   (trailing whitespace allowed)

``=`` gives a level 1 heading, ``-`` a level 2 heading.
"""

from __future__ import annotations

SETEXT_MARKERS = frozenset("=-")


def setext_marker_level(line: str) -> int | None:
    """Scan ``line`` one character at a time for a setext marker.

    ``line`` must start at the first non-indent character.

    Returns:
        1 for ``=``, 2 for ``-``, None if the line is ordinary text.

    Examples:
        >>> setext_marker_level("====")
        1
        >>> setext_marker_level("---  ")
        2
        >>> setext_marker_level("-- x") is None
        True
    """
    marker = ""
    check_for_spaces = False
    for char in line:
        if not marker:
            if char not in SETEXT_MARKERS:
                return None
            marker = char
        elif check_for_spaces:
            if char not in " \t":
                return None
        elif char != marker:
            if char in " \t":
                check_for_spaces = True
            else:
                return None
    if not marker:
        return None
    return 1 if marker == "=" else 2
