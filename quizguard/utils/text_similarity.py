"""String similarity measures for free-text answers."""


def jaccard_similarity(first: str, second: str) -> float:
    """Jaccard similarity of the lowercased whitespace-separated word sets.

    Returns 0 when both texts have no words at all.
    """
    words_a = set(first.lower().split())
    words_b = set(second.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def levenshtein_distance(first: str, second: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions."""
    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for i, char_a in enumerate(first, start=1):
        current = [i]
        for j, char_b in enumerate(second, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def levenshtein_similarity(first: str, second: str) -> float:
    """1 - distance / longest length; 1 when both strings are empty."""
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return 1 - levenshtein_distance(first, second) / longest
