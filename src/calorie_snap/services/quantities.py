"""Serving multiplier extraction from free-text meal descriptions."""

import math

QUANTITY_WORDS: dict[str, float] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "half": 0.5,
    "double": 2,
}


def extract_multiplier(text: str, keyword: str) -> float:
    """Return the serving multiplier for ``keyword`` in ``text``.

    Only the token immediately before the keyword is considered, and a token
    starting with the keyword is preferred over one merely containing it.
    Anything unparseable, or no preceding token at all, means one serving.
    """
    tokens = text.lower().split()
    index = _find_keyword(tokens, keyword.lower().split())
    if index is None or index == 0:
        return 1.0
    return _parse_quantity(tokens[index - 1])


def _find_keyword(tokens: list[str], words: list[str]) -> int | None:
    if not words:
        return None
    for matches in (str.startswith, str.__contains__):
        for start in range(len(tokens) - len(words) + 1):
            window = tokens[start : start + len(words)]
            if all(
                matches(token, word)
                for word, token in zip(words, window, strict=True)
            ):
                return start
    return None


def _parse_quantity(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        return float(QUANTITY_WORDS.get(token, 1))
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value
