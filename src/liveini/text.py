# -*- encoding: utf-8 -*-
# @File   : text.py
# @Time   : 2024/11/02 21:18:09
# @Author : Kariko Lin

"""Line level helpers for the INI-like format.

Only space and tab count as whitespace here. `str.strip()` would also eat
`\\r`, form feeds and the like, which the format does not treat as blanks.
"""

COMMENT_MARKS = ('#', ';')
BLANKS = ' \t'


def strip_comment(line: str) -> str:
    """Cut `line` at the first `#` or `;`, whichever comes first."""
    cut = len(line)
    for mark in COMMENT_MARKS:
        if (pos := line.find(mark)) != -1 and pos < cut:
            cut = pos
    return line[:cut]


def trim(text: str) -> str:
    return text.strip(BLANKS)


def normalize(line: str) -> str:
    """Comment-free, trimmed content of `line`. Empty means "skip me"."""
    return trim(strip_comment(line))


def is_all_spaces(text: str) -> bool:
    # the empty string does not count.
    return len(text) > 0 and text.count(' ') == len(text)


def is_section_header(line: str) -> bool:
    """`line` must already be normalized."""
    return len(line) >= 2 and line[0] == '[' and line[-1] == ']'
