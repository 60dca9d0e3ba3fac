"""Path queries over JSON-like configuration documents.

Documents are plain Python values as produced by ``json.loads``: dicts,
lists, strings, numbers, booleans and None. Paths use a small JSONPath
subset::

    $                  the document itself ("$." is accepted as well)
    $.credentials.id   child by name
    $['client id']     child by quoted name
    $.scopes[0]        list index (negative indices count from the end)
    $.accounts[*].id   wildcard over list items or mapping values
    $.accounts.*       same, dotted form
"""

from functools import lru_cache
from typing import Any, List, Mapping, NamedTuple, Tuple, Union

from conduit.domains.oauth.exceptions import InvalidJsonPathError

ROOT = "$"


class Segment(NamedTuple):
    """One step of a parsed path."""

    kind: str  # "key", "index" or "wildcard"
    value: Union[str, int, None] = None


class PathMatch(NamedTuple):
    """Outcome of a single-value lookup. ``value`` is only meaningful when ``found``."""

    found: bool
    value: Any = None


_WILDCARD = Segment("wildcard")
_NOT_FOUND = PathMatch(False)


@lru_cache(maxsize=1024)
def parse(path: str) -> Tuple[Segment, ...]:
    """Parse a path expression into segments.

    Raises:
        InvalidJsonPathError: If the expression is not in the supported subset.
    """
    if not path.startswith(ROOT):
        raise InvalidJsonPathError(path, f"must start with '{ROOT}'")
    if path in (ROOT, f"{ROOT}."):
        return ()

    segments: List[Segment] = []
    i, n = 1, len(path)
    while i < n:
        char = path[i]
        if char == ".":
            start = i + 1
            i = start
            while i < n and path[i] not in ".[":
                i += 1
            name = path[start:i]
            if not name:
                raise InvalidJsonPathError(path, f"empty name at position {start}")
            segments.append(_WILDCARD if name == "*" else Segment("key", name))
        elif char == "[":
            end = path.find("]", i)
            if end == -1:
                raise InvalidJsonPathError(path, f"unclosed '[' at position {i}")
            segments.append(_parse_bracket(path, path[i + 1 : end].strip()))
            i = end + 1
        else:
            raise InvalidJsonPathError(path, f"unexpected '{char}' at position {i}")
    return tuple(segments)


def _parse_bracket(path: str, token: str) -> Segment:
    if token == "*":
        return _WILDCARD
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        return Segment("key", token[1:-1])
    try:
        return Segment("index", int(token))
    except ValueError:
        raise InvalidJsonPathError(path, f"unsupported selector [{token}]") from None


def query(document: Any, path: str) -> List[Any]:
    """Return every value in ``document`` addressed by ``path``."""
    nodes = [document]
    for segment in parse(path):
        matched: List[Any] = []
        for node in nodes:
            if segment.kind == "key":
                if isinstance(node, Mapping) and segment.value in node:
                    matched.append(node[segment.value])
            elif segment.kind == "index":
                if isinstance(node, list) and -len(node) <= segment.value < len(node):
                    matched.append(node[segment.value])
            elif isinstance(node, Mapping):
                matched.extend(node.values())
            elif isinstance(node, list):
                matched.extend(node)
        nodes = matched
    return nodes


def get_single_value(document: Any, path: str) -> PathMatch:
    """Look up a path that must address exactly one value.

    Zero matches and ambiguous (multiple) matches both count as not found.
    A JSON null stored at the path counts as found.
    """
    values = query(document, path)
    if len(values) != 1:
        return _NOT_FOUND
    return PathMatch(True, values[0])
