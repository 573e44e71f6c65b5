"""Deterministic fuzzy scoring of a query against a candidate string.

Scores are in [0, 100]:
- 100 for a case-insensitive exact match
- [90, 99) when the candidate starts with the query, higher with more coverage
- otherwise [0, 80], falling with the edit distance relative to the query
  length; a substring or subsequence match counts as up to half an edit closer,
  so it breaks ties without ever outranking a candidate one edit nearer
"""

MIN_SCORE = 40.0
DESCRIPTION_WEIGHT = 0.6

_EXACT = 100.0
_PREFIX_BASE = 90.0
_PREFIX_SPAN = 9.0
_FUZZY_MAX = 80.0
# Edits, per query character, at which a fuzzy match reaches 0
_DISTANCE_SCALE = 1.5
# Largest fraction of one edit credited to substring / subsequence matches
_SUBSTRING_CREDIT = 0.5
_SUBSEQUENCE_CREDIT = 0.25


def levenshtein(a: str, b: str) -> int:
    """Edit distance between a and b (insert, delete, substitute cost 1)."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def is_subsequence(needle: str, haystack: str) -> bool:
    chars = iter(haystack)
    return all(char in chars for char in needle)


def score(query: str, candidate: str) -> float:
    """Score how well candidate matches query. Empty inputs score 0."""
    q = query.strip().lower()
    c = candidate.strip().lower()
    if not q or not c:
        return 0.0

    if q == c:
        return _EXACT

    coverage = min(len(q), len(c)) / max(len(q), len(c))

    if c.startswith(q):
        return round(_PREFIX_BASE + _PREFIX_SPAN * coverage, 2)

    distance = float(levenshtein(q, c))
    if q in c:
        distance -= _SUBSTRING_CREDIT * coverage
    elif len(q) > 1 and is_subsequence(q, c):
        distance -= _SUBSEQUENCE_CREDIT * coverage

    similarity = max(0.0, 1.0 - distance / (_DISTANCE_SCALE * len(q)))
    return round(min(_FUZZY_MAX * similarity, _FUZZY_MAX), 2)


def weighted_score(query: str, name: str, description: str | None) -> float:
    """Best of the name score and the down-weighted description score."""
    best = score(query, name)
    if description:
        best = max(best, round(score(query, description) * DESCRIPTION_WEIGHT, 2))
    return best
