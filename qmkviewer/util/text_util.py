def split_top_level(text: str, separator: str = ",") -> list[str]:
    """
    Split text on separators that are neither nested in parentheses nor inside a
    string or character literal.

    Every piece is stripped and empty pieces are dropped, so a trailing separator
    does not produce an extra entry.

    Args:
        text: The text to split, e.g. the interior of a LAYOUT(...) call.
        separator: A single character to split on.

    Returns:
        The list of non-empty, stripped pieces in source order.
    """
    items = []
    depth = 0
    start = 0
    in_string = False
    in_char = False
    escape_next = False

    for idx, ch in enumerate(text):
        if escape_next:
            escape_next = False
            continue

        if ch == "\\" and (in_string or in_char):
            escape_next = True
        elif ch == '"' and not in_char:
            in_string = not in_string
        elif ch == "'" and not in_string:
            in_char = not in_char
        elif in_string or in_char:
            continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        elif ch == separator and depth == 0:
            item = text[start:idx].strip()
            if item:
                items.append(item)
            start = idx + 1

    item = text[start:].strip()
    if item:
        items.append(item)

    return items


def find_closing_paren(text: str, open_idx: int) -> int:
    """
    Return the index of the parenthesis closing the one at open_idx or -1 if the
    text ends before the nesting is balanced. Parentheses inside string and
    character literals are ignored.
    """
    depth = 0
    in_string = False
    in_char = False
    escape_next = False

    for idx in range(open_idx, len(text)):
        ch = text[idx]
        if escape_next:
            escape_next = False
            continue

        if ch == "\\" and (in_string or in_char):
            escape_next = True
        elif ch == '"' and not in_char:
            in_string = not in_string
        elif ch == "'" and not in_string:
            in_char = not in_char
        elif in_string or in_char:
            continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return idx

    return -1


def brace_delta(text: str) -> int:
    """ Number of '{' minus number of '}' outside string and character literals """
    delta = 0
    in_string = False
    in_char = False
    escape_next = False

    for ch in text:
        if escape_next:
            escape_next = False
            continue

        if ch == "\\" and (in_string or in_char):
            escape_next = True
        elif ch == '"' and not in_char:
            in_string = not in_string
        elif ch == "'" and not in_string:
            in_char = not in_char
        elif in_string or in_char:
            continue
        elif ch == "{":
            delta += 1
        elif ch == "}":
            delta -= 1

    return delta
