"""OEP frontmatter parsing: split a document and decode its key/value block.

Deliberately line-oriented, not YAML. Each line of the block is either
`key: value` or ignored. No escaping, nesting or multi-line values.
"""

import re

_DOCUMENT_RE = re.compile(r"^---\n(.*?)\n---\n(.*)$", re.DOTALL)
_LINE_RE = re.compile(r"^(\w+):\s*(.*)$")
_QUOTES_RE = re.compile(r"^['\"]|['\"]$")


def _unquote(value: str) -> str:
    """Strip one leading and one trailing quote character, if present."""
    return _QUOTES_RE.sub("", value)


def _split_list(value: str) -> list[str]:
    return [_unquote(item.strip()) for item in value.split(",")]


def split_document(text: str) -> tuple[str, str] | None:
    """Return (frontmatter block, body) or None if the delimiters are missing."""
    match = _DOCUMENT_RE.match(text.replace("\r\n", "\n"))
    if not match:
        return None
    return match.group(1), match.group(2)


def decode_block(block: str, list_keys=()) -> dict:
    """Decode `key: value` lines into a dict of strings and string lists.

    `[a, b]` values become lists. Keys in list_keys are always split on commas,
    brackets optional, with empty elements dropped.
    """
    result: dict[str, str | list[str]] = {}
    for line in block.split("\n"):
        match = _LINE_RE.match(line)
        if not match:
            continue
        key, value = match.group(1), match.group(2).rstrip()

        if key in list_keys:
            if value.startswith("[") and value.endswith("]"):
                value = value[1:-1]
            result[key] = [item for item in _split_list(value) if item]
        elif value.startswith("[") and value.endswith("]"):
            result[key] = _split_list(value[1:-1])
        else:
            result[key] = _unquote(value)
    return result


def parse_frontmatter(text: str, list_keys=()) -> tuple[dict, str] | None:
    """Parse a document into (mapping, body). None means unparseable."""
    parts = split_document(text)
    if parts is None:
        return None
    block, body = parts
    return decode_block(block, list_keys), body
