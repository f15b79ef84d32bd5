"""Soundex-style phonetic grouping key."""

_CODES = {
    **dict.fromkeys("bfpv", "1"),
    **dict.fromkeys("cgjkqsxz", "2"),
    **dict.fromkeys("dt", "3"),
    "l": "4",
    **dict.fromkeys("mn", "5"),
    "r": "6",
}


def phonetic_hash(word: str) -> str:
    """Return a 4-character code for words that sound alike.

    The first character is kept as-is (lowercased); following consonants map
    to digits, repeated digits collapse, vowels separate repeats and the
    result is padded with zeros.

    Examples:
        >>> phonetic_hash("Robert")
        'r163'
        >>> phonetic_hash("react")
        'r230'
    """
    if not word:
        return ""

    lowered = word.lower()
    result = lowered[0]
    prev = _CODES.get(lowered[0], "0")

    for char in lowered[1:]:
        if len(result) >= 4:
            break
        code = _CODES.get(char, "0")
        if code != "0" and code != prev:
            result += code
        prev = code

    return result.ljust(4, "0")
