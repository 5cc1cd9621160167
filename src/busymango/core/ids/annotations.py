"""
Id annotations embedded in Markdown lines.

Headings and todo lines carry their numeric identity as a trailing HTML
comment, which renders invisibly:

    ## Todo <!-- id: 2 -->
    - [ ] buy milk <!-- id: 7 -->

Reading is forgiving (malformed comments resolve to None). Writing and
removing drop every id comment on the line, malformed ones included, and
keep whatever trailing whitespace followed the original content.
"""

import re

# Matches a well-formed id comment and the whitespace in front of it
ID_COMMENT_PATTERN = re.compile(r"\s*<!--\s*id\s*:\s*(\d+)\s*-->", re.IGNORECASE)

# Matches any id comment, malformed or unterminated ones included
ANY_ID_COMMENT_PATTERN = re.compile(r"\s*<!--\s*id\s*:.*?(?:-->|$)", re.IGNORECASE)


def _split_trailing(line: str) -> tuple[str, str]:
    content = line.rstrip()
    return content, line[len(content):]


def get_id(line: str) -> int | None:
    """
    Extract the id annotation from a line.

    Args:
        line: Heading, todo, or any text line

    Returns:
        The annotated id, or None if the line has no well-formed annotation

    Example:
        >>> get_id("- [ ] buy milk <!-- ID:7 -->")
        7
        >>> get_id("- [ ] buy milk <!-- 7 -->") is None
        True
    """
    match = ID_COMMENT_PATTERN.search(line)
    if match is None:
        return None
    return int(match.group(1))


def remove_id(line: str) -> str:
    """Strip every id comment from a line, keeping trailing whitespace."""
    content, trailing = _split_trailing(line)
    return ANY_ID_COMMENT_PATTERN.sub("", content).rstrip() + trailing


def set_id(line: str, identifier: int) -> str:
    """
    Write an id annotation onto a line.

    Existing id comments, malformed ones included, are dropped and a single
    annotation is appended after the content, separated by a single space.

    Example:
        >>> set_id(" Task \\n", 1)
        ' Task <!-- id: 1 --> \\n'
    """
    if identifier < 0:
        raise ValueError(f"Ids must be non-negative, got {identifier}")

    content, trailing = _split_trailing(line)
    comments = ANY_ID_COMMENT_PATTERN.findall(content)
    if len(comments) == 1 and get_id(content) == identifier:
        return line
    if comments:
        content = remove_id(content)
    return f"{content} <!-- id: {identifier} -->{trailing}"
