import itertools
import time
import unittest

from descrambler.permute import (permutations, insert_char, normalize_chars, sort_chars, InputTooLong, MAX_CHARS)


def brute_force(chars, min_length):
    """All distinct arrangements of all subsets of chars, straight from itertools."""
    return {''.join(p) for k in range(max(min_length, 1), len(chars) + 1)
            for p in itertools.permutations(chars, k)}


class TestHelpers(unittest.TestCase):
    def test_sort_chars(self):
        self.assertEqual(sort_chars('tac'), 'act')
        self.assertEqual(sort_chars(''), '')

    def test_normalize_chars(self):
        self.assertEqual(normalize_chars('CaT'), 'cat')
        # e + combining acute becomes a single character
        self.assertEqual(normalize_chars('E\u0301'), '\u00e9')

    def test_insert_char(self):
        self.assertEqual(insert_char('x', 'ab'), ['xab', 'axb', 'abx'])
        self.assertEqual(insert_char('x', ''), ['x'])


class TestPermutations(unittest.TestCase):
    def test_aab(self):
        self.assertEqual(sorted(permutations('aab', 1)), sorted(['a', 'b', 'aa', 'ab', 'ba', 'aab', 'aba', 'baa']))

    def test_no_duplicates(self):
        for chars in ['aab', 'aaab', 'aabb', 'mississ', 'abcde', 'aaaaa']:
            results = permutations(chars, 1)
            self.assertEqual(len(results), len(set(results)), chars)

    def test_matches_brute_force(self):
        for chars in ['a', 'ab', 'abc', 'aab', 'abcd', 'aabc', 'abbb', 'aabbc', 'abcde', 'letter']:
            for min_length in range(1, len(chars) + 1):
                with self.subTest(chars=chars, min_length=min_length):
                    self.assertEqual(set(permutations(chars, min_length)), brute_force(chars, min_length))

    def test_high_minimum(self):
        results = permutations('abcde', 5)
        self.assertEqual(len(results), 120)
        self.assertTrue(all(len(w) == 5 for w in results))

        results = permutations('aabcd', 4)
        self.assertTrue(all(len(w) >= 4 for w in results))
        self.assertEqual(set(results), brute_force('aabcd', 4))

    def test_minimum_clamped(self):
        expected = sorted(permutations('cat', 1))
        self.assertEqual(sorted(permutations('cat', 0)), expected)
        self.assertEqual(sorted(permutations('cat', -3)), expected)

    def test_unsorted_and_mixed_case_input(self):
        self.assertEqual(set(permutations('TAC')), set(permutations('act')))
        self.assertEqual(set(permutations('bAa')), brute_force('aab', 1))

    def test_minimum_longer_than_input(self):
        self.assertEqual(permutations('cat', 4), [])

    def test_empty_input(self):
        self.assertEqual(permutations(''), [])

    def test_single_character(self):
        self.assertEqual(permutations('x'), ['x'])

    def test_all_same(self):
        self.assertEqual(sorted(permutations('aaaa')), ['a', 'aa', 'aaa', 'aaaa'])

    def test_too_long(self):
        with self.assertRaises(InputTooLong):
            permutations('a' * (MAX_CHARS + 1))
        with self.assertRaises(ValueError):
            permutations('abcdef', max_chars=5)

    def test_longest_default_input_is_quick(self):
        start = time.perf_counter()
        results = permutations('abcdefgh')
        self.assertLess(time.perf_counter() - start, 5)
        self.assertEqual(len(results), 109600)  # sum of 8!/(8-k)! for k = 1..8

    def test_nine_characters_with_repeats(self):
        start = time.perf_counter()
        results = permutations('aaabbbccc', 1, max_chars=9)
        self.assertLess(time.perf_counter() - start, 5)
        self.assertEqual(set(results), brute_force('aaabbbccc', 1))

    def test_repeated_queries_agree(self):
        self.assertEqual(sorted(permutations('stone', 2)), sorted(permutations('notes', 2)))
        self.assertEqual(sorted(permutations('stone', 4)), sorted(brute_force('stone', 4)))

    def test_guard_can_be_lifted(self):
        self.assertEqual(sorted(permutations('a' * 12, 12, max_chars=None)), ['a' * 12])


if __name__ == "__main__":
    unittest.main(verbosity=2)
