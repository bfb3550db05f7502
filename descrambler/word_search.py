import functools

import numpy as np
import pandas as pd
from tqdm import tqdm

DEFAULT_ALPHABET = 'abcdefghijklmnopqrstuvwxyz'


def word_order(word):
    """
    Sort key for words: shorter words first, then lexicographic.
    """
    return len(word), word


def compare_words(a, b):
    """
    Three way comparison under word order. None sorts after any word.
    """
    if a is None:
        return 0 if b is None else 1
    if b is None:
        return -1
    ka, kb = word_order(a), word_order(b)
    return (ka > kb) - (ka < kb)


class OrderViolation(Exception):
    pass


class OrderedWordSet:
    """
    Sorted, duplicate free sequence of words.

    Words sharing a leading character are grouped under that character as `key`. A set with key None is a
    catch-all and accepts anything. Position is always decided by the set itself, so there is no way to put a word
    at a chosen index.
    """

    __slots__ = ['_key', '_words', '_sort_key']

    def __init__(self, key=None, words=(), compare=compare_words):
        self._key = key
        self._words = []
        self._sort_key = functools.cmp_to_key(compare)
        for word in words:
            self.insert(word)

    @property
    def key(self):
        return self._key

    def search(self, value):
        """
        Binary search for value.

        Returns (found, index). When found, index is where value sits, otherwise it's where value would go to keep the
        set sorted, always within [0, len(self)]. Empty probes give (False, None).
        """
        if not value:
            return False, None

        target = self._sort_key(value)
        lo, hi = 0, len(self._words)
        while lo < hi:
            mid = (lo + hi) // 2
            probe = self._sort_key(self._words[mid])
            if probe == target:
                return True, mid
            if target < probe:
                hi = mid
            else:
                lo = mid + 1
        return False, lo

    def insert(self, value):
        found, index = self.search(value)
        if found or index is None:
            return False
        self._words.insert(index, value)
        return True

    def insert_at(self, index, value):
        raise OrderViolation(f"Can't place {value!r} at {index}, {self!r} decides its own order")

    def __setitem__(self, index, value):
        self.insert_at(index, value)

    def contains(self, value):
        return self.search(value)[0]

    def remove(self, value):
        found, index = self.search(value)
        if found:
            del self._words[index]
        return found

    def index_of(self, value):
        found, index = self.search(value)
        return index if found else -1

    def clear(self):
        self._words.clear()

    def __contains__(self, value):
        return self.contains(value)

    def __getitem__(self, index):
        return self._words[index]

    def __iter__(self):
        return iter(self._words)

    def __len__(self):
        return len(self._words)

    def __eq__(self, other):
        if isinstance(other, OrderedWordSet):
            return self._words == other._words
        return NotImplemented

    def __repr__(self):
        return f"<OrderedWordSet {self._key!r} ({len(self)})>"


class WordIndex:
    """
    Dictionary split into one OrderedWordSet per alphabet character, plus a catch-all for words starting with
    anything else.

    Finding the right bucket is a binary search over the (sorted) alphabet, then the bucket does its own binary
    search, so lookups stay O(log n).
    """

    def __init__(self, words=(), alphabet=DEFAULT_ALPHABET, progress=False):
        self.alphabet = ''.join(sorted(set(alphabet)))
        self.keys = np.array(list(self.alphabet), dtype=str)
        self.buckets = [OrderedWordSet(k) for k in self.alphabet] + [OrderedWordSet(None)]
        self.num_words = 0

        for word in tqdm(words, desc='Indexing words', unit='word', disable=not progress):
            self.add(word)

    @property
    def catch_all(self):
        return self.buckets[-1]

    @property
    def num_buckets(self):
        return len(self.buckets)

    def _find_bucket(self, char):
        if not self.alphabet:
            return len(self.buckets) - 1
        i = int(np.searchsorted(self.keys, char))
        if i < len(self.alphabet) and self.alphabet[i] == char:
            return i
        return len(self.buckets) - 1

    def has_key(self, char):
        return char is None or (len(char) == 1 and char in self.alphabet)

    def bucket_for(self, word):
        """
        The bucket that does (or would) hold word, None for empty words.
        """
        if not word:
            return None
        return self.buckets[self._find_bucket(word[0])]

    def add(self, word):
        bucket = self.bucket_for(word)
        if bucket is None:
            return False
        added = bucket.insert(word)
        self.num_words += added
        return added

    def remove(self, word):
        bucket = self.bucket_for(word)
        if bucket is None:
            return False
        removed = bucket.remove(word)
        self.num_words -= removed
        return removed

    def contains(self, word):
        bucket = self.bucket_for(word)
        return bucket is not None and bucket.contains(word)

    def bucket_sizes(self):
        return pd.Series([len(b) for b in self.buckets],
                         index=[b.key if b.key is not None else '' for b in self.buckets],
                         name='words')

    def __contains__(self, word):
        return self.contains(word)

    def __getitem__(self, key):
        if key is None:
            return self.catch_all
        return self.buckets[self._find_bucket(key)]

    def __iter__(self):
        for bucket in self.buckets:
            yield from bucket

    def __len__(self):
        return self.num_words

    def __repr__(self):
        return f"<WordIndex {self.alphabet!r} ({self.num_words} words)>"
