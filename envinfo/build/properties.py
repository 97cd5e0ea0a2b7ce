"""
Reader for Java-style ``.properties`` text.

The version resource is produced in the same format the original build
tooling emits, so the reader follows its rules: ``#`` and ``!`` comment
lines, ``=``, ``:`` or whitespace as the key/value separator, backslash
line continuations and the usual backslash escapes.
"""

from typing import Dict, Iterable, Iterator, TextIO, Union

_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _ends_with_continuation(line: str) -> bool:
    """Return True if the line ends with an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Join continued physical lines into logical lines, dropping comments."""
    buffer = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if buffer is None:
            stripped = line.lstrip()
            if not stripped or stripped[0] in "#!":
                continue
            line = stripped
        else:
            line = buffer + line.lstrip()

        if _ends_with_continuation(line):
            buffer = line[:-1]
            continue

        buffer = None
        yield line

    if buffer is not None:
        yield buffer


def _unescape(text: str) -> str:
    """Resolve backslash escapes, including ``\\uXXXX`` sequences."""
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 >= len(text):
            result.append(char)
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                result.append(chr(int(text[i + 2:i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        result.append(_ESCAPES.get(nxt, nxt))
        i += 2
    # \uXXXX escapes are UTF-16 code units; join surrogate pairs
    return "".join(result).encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _split_entry(line: str) -> tuple:
    """Split a logical line into its raw key and raw value."""
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char.isspace():
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip()
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return key, rest


def parse_properties(source: Union[str, TextIO, Iterable[str]]) -> Dict[str, str]:
    """
    Parse properties text into a dictionary.

    Args:
        source: Properties text, an open text stream or an iterable of lines

    Returns:
        Mapping of keys to values; later duplicates win
    """
    if isinstance(source, str):
        source = source.splitlines()

    properties: Dict[str, str] = {}
    for line in _logical_lines(source):
        raw_key, raw_value = _split_entry(line)
        properties[_unescape(raw_key)] = _unescape(raw_value)
    return properties
