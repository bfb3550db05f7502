import functools
import unicodedata

MAX_CHARS = 8


class InputTooLong(ValueError):
    pass


def normalize_chars(s):
    return unicodedata.normalize('NFC', s).lower()


def sort_chars(s):
    return ''.join(sorted(s))


def insert_char(c, s):
    """
    Every string made by putting c somewhere in s, including either end.
    """
    return [s[:i] + c + s[i:] for i in range(len(s) + 1)]


def _orderings(s):
    """
    All orderings of a 1 to 3 character string, written out.
    """
    if len(s) == 1:
        return [s]
    if len(s) == 2:
        return list(dict.fromkeys([s, s[1] + s[0]]))
    a, b, c = s
    return list(dict.fromkeys([a + b + c, a + c + b, b + a + c, b + c + a, c + a + b, c + b + a]))


@functools.lru_cache(None)  # same sub-multiset is reached by every removal order
def _permute(s, min_length):
    """
    Distinct permutations of every subset of sorted s with at least min_length characters.
    """
    n = len(s)
    if n < min_length:
        return ()
    if n == min_length and n <= 3:
        return tuple(_orderings(s))

    # when only full length results are wanted, go one shorter and rebuild by insertion
    floor = min_length if n > min_length else min_length - 1

    found = {}
    prev = None
    for i, c in enumerate(s):
        if c == prev:  # sorted, so repeats are adjacent
            continue
        prev = c

        for sub in _permute(s[:i] + s[i + 1:], floor):
            if len(sub) >= min_length:
                found[sub] = None
            for word in insert_char(c, sub):
                found[word] = None
    return tuple(found)


def permutations(chars, min_length=1, max_chars=MAX_CHARS):
    """
    Every distinct rearrangement of chars, and of every subset of chars, with at least min_length characters.

    chars are normalised (NFC, lower case) and sorted first, so 'Cat' and 'tac' give the same result. A min_length
    below 1 counts as 1. Results are in no particular order. Set max_chars=None to allow arbitrarily long input,
    bearing in mind the output grows factorially.
    """
    if min_length <= 0:
        min_length = 1

    s = sort_chars(normalize_chars(chars))

    if max_chars is not None and len(s) > max_chars:
        raise InputTooLong(f"{len(s)} characters is too many to permute (limit is {max_chars})")

    results = list(_permute(s, min_length))
    _permute.cache_clear()

    short = [word for word in results if len(word) < min_length]
    assert not short, f"Permutations shorter than {min_length}: {short[:5]}"

    return results
