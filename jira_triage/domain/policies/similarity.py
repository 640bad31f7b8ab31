"""SimilarityPolicy — coarse, stable bucket ids for related tickets."""

SIMILAR_TEXT_PREFIX = 50
GROUP_DIGITS = 10


def rolling_hash(text: str) -> int:
    """Additive rolling string hash (h = h*31 + code point), wrapped to signed 32 bits.

    Not cryptographic: only stability across processes matters.
    """
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def similarity_group(theme: str, similar_features: str | None) -> str:
    """``SIM-`` + zero-padded |hash(theme + first 50 chars of similar_features)|."""
    seed = theme + (similar_features or "")[:SIMILAR_TEXT_PREFIX]
    return "SIM-" + str(abs(rolling_hash(seed))).zfill(GROUP_DIGITS)
