"""Delimiter balancing over raw source text.

Heuristic extractors never parse a grammar. To find where an entity body ends
they look for the first ``{`` or ``(`` after a signature and walk forward to
its partner, ignoring anything that sits inside comments or string literals.
"""

NO_BLOCK = -1

_CLOSERS = {"{": "}", "(": ")"}
_QUOTES = ("'", '"', "`")
_TERMINATORS = (";", "\n")


def find_block_start(text: str, start: int) -> int:
    """Find the opening delimiter of the block that follows ``start``.

    Args:
        text: Source text to scan.
        start: Offset to start scanning from.

    Returns:
        Offset of the first ``{`` or ``(``, or ``NO_BLOCK`` if a statement
        terminator (``;`` or newline) or the end of the text comes first.
    """
    for index in range(start, len(text)):
        char = text[index]
        if char in _CLOSERS:
            return index
        if char in _TERMINATORS:
            return NO_BLOCK
    return NO_BLOCK


def find_block_end(text: str, start: int) -> int:
    """Return the offset one past the block that opens at or after ``start``.

    Only the delimiter type that opened the block is counted, so a brace body
    may contain unbalanced parentheses and vice versa.

    Args:
        text: Source text to scan.
        start: Offset to start looking for an opening ``{`` or ``(``.

    Returns:
        Offset one past the matching closing delimiter. ``NO_BLOCK`` when no
        block opens before a statement terminator. ``len(text)`` when the
        block never closes.

    Examples:
        >>> find_block_end('{ "{" }', 0)
        7
        >>> find_block_end("x => x + 1;", 0)
        -1
    """
    open_index = find_block_start(text, start)
    if open_index == NO_BLOCK:
        return NO_BLOCK
    end, _closed = _find_closing(text, open_index)
    return end


def block_contents(text: str, start: int) -> str | None:
    """Return the text between the delimiters of the block after ``start``.

    Returns:
        Inner text of the block (delimiters excluded), running to the end of
        the text when the block never closes, or None when there is no block.
    """
    open_index = find_block_start(text, start)
    if open_index == NO_BLOCK:
        return None

    end, closed = _find_closing(text, open_index)
    if not closed:
        return text[open_index + 1:]
    return text[open_index + 1:end - 1]


def brace_contents(text: str, start: int) -> str | None:
    """Return the inner text of the first ``{`` block at or after ``start``.

    Unlike ``block_contents`` the opening brace may sit on a later line, as in
    a class declaration written with its brace on the next line.
    """
    open_index = text.find("{", start)
    if open_index == -1:
        return None

    end, closed = _find_closing(text, open_index)
    if not closed:
        return text[open_index + 1:]
    return text[open_index + 1:end - 1]


def split_parameters(text: str) -> list[str]:
    """Split a raw parameter list on commas, trimming and dropping empties.

    Defaults containing commas are not balanced, e.g. ``a = f(1, 2)`` splits
    in two.
    """
    return [part.strip() for part in text.split(",") if part.strip()]


def _find_closing(text: str, open_index: int) -> tuple[int, bool]:
    opener = text[open_index]
    closer = _CLOSERS[opener]
    length = len(text)
    depth = 1
    index = open_index + 1

    while index < length:
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index + 1, True
        elif text.startswith("//", index):
            index = _skip_line_comment(text, index)
            continue
        elif text.startswith("/*", index):
            index = _skip_block_comment(text, index)
            continue
        elif char in _QUOTES:
            index = _skip_string(text, index)
            continue
        index += 1

    return length, False


def _skip_line_comment(text: str, index: int) -> int:
    newline = text.find("\n", index)
    return len(text) if newline == -1 else newline


def _skip_block_comment(text: str, index: int) -> int:
    end = text.find("*/", index + 2)
    return len(text) if end == -1 else end + 2


def _skip_string(text: str, index: int) -> int:
    quote = text[index]
    index += 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        index += 1
    return len(text)
