import re

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


class StylesheetError(ValueError):
    pass


def count_rule_blocks(source: str) -> int:
    """Count balanced ``prelude { ... }`` blocks; nested at-rule bodies count too.

    Structural check only: declarations are never interpreted.
    """
    text = _COMMENT.sub(lambda match: "\n" * match.group(0).count("\n"), source)
    open_blocks: list[tuple[bool, int]] = []
    count = 0
    line = 1
    segment: list[str] = []
    quote: str | None = None

    for char in text:
        if char == "\n":
            line += 1
        if quote:
            if char == quote:
                quote = None
            segment.append(char)
            continue
        if char in "\"'":
            quote = char
            segment.append(char)
        elif char == "{":
            open_blocks.append(("".join(segment).strip() != "", line))
            segment = []
        elif char == "}":
            if not open_blocks:
                raise StylesheetError(f"Unexpected '}}' on line {line}")
            has_prelude, _opened_on = open_blocks.pop()
            if has_prelude:
                count += 1
            segment = []
        elif char == ";":
            segment = []
        else:
            segment.append(char)

    if quote:
        raise StylesheetError(f"Unterminated string starting with {quote}")
    if open_blocks:
        _has_prelude, opened_on = open_blocks[-1]
        raise StylesheetError(f"Unclosed '{{' opened on line {opened_on}")
    return count


def check_stylesheet(source: str) -> str:
    rules = count_rule_blocks(source)
    return f"CSS parsed successfully!\nFound {rules} CSS rules"
