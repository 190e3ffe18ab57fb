"""
Core Byte Pair Encoding (BPE) operations.
"""

from collections import Counter

from .types import Token, TokenPair


def count_pairs(tokens: list[Token]) -> Counter[TokenPair]:
    """
    Count every consecutive token pair in the token list.

    Pairs are keyed by ``(left, right)`` tuples so tokens such as ``"a", "bc"``
    and ``"ab", "c"`` never collide. The counter's insertion order follows the
    position at which each pair first occurs.
    """
    return Counter(zip(tokens, tokens[1:]))


def select_most_frequent_pair(
    pair_counts: Counter[TokenPair] | dict[TokenPair, int],
) -> tuple[Token, Token, int] | None:
    """
    Pick the pair with the highest count.

    Ties go to the pair that comes first in the table's iteration order,
    which for :func:`count_pairs` output is the earliest occurring pair.

    :returns: ``(left, right, count)`` or ``None`` for an empty table.
    """
    if not pair_counts:
        return None
    # max() keeps the first maximal element, which fixes the tie-break
    (left, right), count = max(pair_counts.items(), key=lambda kv: kv[1])
    return left, right, count


def merge_pair(
    tokens: list[Token], left: Token, right: Token, merged: Token
) -> list[Token]:
    """
    Replace every occurrence of ``(left, right)`` with ``merged``.

    Matches are greedy and non-overlapping from left to right: after a
    match at ``i, i+1`` scanning resumes at ``i+2``, so ``["a", "a", "a"]``
    merged on ``("a", "a")`` becomes ``["aa", "a"]``.
    """
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and tokens[i] == left and tokens[i + 1] == right:
            newtoks.append(merged)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


__all__ = ["count_pairs", "select_most_frequent_pair", "merge_pair"]
