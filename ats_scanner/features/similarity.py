from __future__ import annotations

_WINKLER_PREFIX_CAP = 4
_WINKLER_SCALE = 0.1


def jaro_winkler(a: str, b: str) -> float:
    """Jaro-Winkler similarity in [0, 1]. Callers lowercase inputs beforehand."""
    if a == b:
        return 1.0 if a else 0.0
    if not a or not b:
        return 0.0

    # Fixed argument order keeps greedy matching symmetric.
    if (len(a), a) > (len(b), b):
        a, b = b, a

    len_a = len(a)
    len_b = len(b)
    match_window = max(len_a, len_b) // 2 - 1
    if match_window < 0:
        return 0.0

    a_matched = [False] * len_a
    b_matched = [False] * len_b
    matches = 0
    for i, char in enumerate(a):
        start = max(0, i - match_window)
        end = min(i + match_window + 1, len_b)
        for j in range(start, end):
            if b_matched[j] or b[j] != char:
                continue
            a_matched[i] = True
            b_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    out_of_order = 0
    k = 0
    for i in range(len_a):
        if not a_matched[i]:
            continue
        while not b_matched[k]:
            k += 1
        if a[i] != b[k]:
            out_of_order += 1
        k += 1

    transpositions = out_of_order / 2
    jaro = (matches / len_a + matches / len_b + (matches - transpositions) / matches) / 3

    prefix = 0
    for char_a, char_b in zip(a[:_WINKLER_PREFIX_CAP], b[:_WINKLER_PREFIX_CAP]):
        if char_a != char_b:
            break
        prefix += 1

    score = jaro + _WINKLER_SCALE * prefix * (1 - jaro)
    return max(0.0, min(1.0, score))
