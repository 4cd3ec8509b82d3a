"""Small string helpers."""


def subtract(s: str, pos: int, length: int) -> str:
    """Return up to ``length`` characters of ``s`` starting at ``pos``.

    The end is clamped to the string's length; a start outside the string,
    or an end before the start, raises :class:`IndexError`.
    """
    end = min(pos + length, len(s))
    if pos < 0 or pos > end:
        raise IndexError(f"slice bounds out of range [{pos}:{end}]")
    return s[pos:end]