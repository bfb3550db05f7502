import json
from pathlib import Path

import pandas as pd

from IPython import get_ipython
from IPython.display import display
from ipywidgets import Output

from .permute import permutations, normalize_chars, MAX_CHARS
from .word_search import OrderedWordSet, WordIndex, DEFAULT_ALPHABET

FOUND = 'FOUND'
NO_PERMUTATIONS = 'NO_PERMUTATIONS'
NO_WORDS = 'NO_WORDS'

IGNORED_CHARS = " ,.'"

FROM_CONFIG = object()


class InvalidQuery(Exception):
    pass


def intersection(candidates, index):
    """
    The candidates that are words in index, deduplicated and in word order.
    """
    found = OrderedWordSet()
    for word in candidates:
        if index.contains(word):
            found.insert(word)
    return found


def load_words(filename):
    with open(filename, encoding='utf-8') as f:
        return [word for word in (normalize_chars(line.strip()) for line in f) if word]


class Result:
    """
    Outcome of descrambling one string.

    Falsy when no words were found, check status to tell whether that's because there was nothing to permute
    (NO_PERMUTATIONS) or because none of the permutations are words (NO_WORDS).
    """

    messages = {FOUND: "Found {n} words.",
                NO_PERMUTATIONS: "No permutations found.",
                NO_WORDS: "No valid words found."}

    def __init__(self, chars, min_length, num_candidates, words):
        self.chars = chars
        self.min_length = min_length
        self.num_candidates = num_candidates
        self.words: OrderedWordSet = words

    @property
    def status(self):
        if not self.num_candidates:
            return NO_PERMUTATIONS
        if not self.words:
            return NO_WORDS
        return FOUND

    @property
    def message(self):
        return self.messages[self.status].format(n=len(self.words))

    def __bool__(self):
        return self.status == FOUND

    def __iter__(self):
        return iter(self.words)

    def __len__(self):
        return len(self.words)

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self.chars!r} >= {self.min_length} {self.status} ({len(self)})>"


class Descrambler:
    """
    Finds the words hiding in a jumble of letters.

    Subclass and set config_dir to point at a folder containing settings.json and words.txt, or pass words (and
    optionally alphabet) straight in. Explicit alphabet and max_chars win over the config, max_chars=None means no
    limit on query length.
    """

    config_dir = None

    def __init__(self, words=None, alphabet=FROM_CONFIG, max_chars=FROM_CONFIG, progress=False):
        settings = {}
        if self.config_dir is not None:
            with open(f'{self.config_dir}/settings.json') as f:
                settings = json.load(f)

        self.alphabet = settings.get('alphabet', DEFAULT_ALPHABET) if alphabet is FROM_CONFIG else alphabet
        self.min_length = settings.get('min_length', 1)
        self.max_chars = settings.get('max_chars', MAX_CHARS) if max_chars is FROM_CONFIG else max_chars

        if words is None:
            if self.config_dir is None:
                raise ValueError(f"{self.__class__.__name__} needs either words or a config_dir")
            words = load_words(f'{self.config_dir}/words.txt')

        self.index = WordIndex(words, self.alphabet, progress=progress)

    def permute(self, chars, min_length=None):
        if min_length is None:
            min_length = self.min_length
        return permutations(chars, min_length, max_chars=self.max_chars)

    def descramble(self, chars, min_length=None):
        """
        Every dictionary word that can be made from some or all of chars, with at least min_length letters.
        """
        if min_length is None:
            min_length = self.min_length
        min_length = max(min_length, 1)

        candidates = self.permute(chars, min_length)
        return Result(chars, min_length, len(candidates), intersection(candidates, self.index))

    def is_word(self, word):
        return self.index.contains(word)

    @staticmethod
    def show(result):
        """
        Returns the found words as a DataFrame, shortest first
        """
        words = list(result)
        return pd.DataFrame({'word': words, 'length': [len(w) for w in words]}, columns=['word', 'length'])


class EnglishDescrambler(Descrambler):
    """
    Lower case English, 26 letters
    """

    config_dir = Path(__file__).parent / 'configs' / 'English'


descrambler_modes = {'English': EnglishDescrambler}


def ask_query(alphabet, default_min_length=1):
    raw_length = input(f"Please input minimum word length [{default_min_length}]: ").strip()
    if not raw_length:
        min_length = default_min_length
    else:
        try:
            min_length = int(raw_length)
        except ValueError:
            raise InvalidQuery(f"{raw_length!r} is not a valid length.")
    if min_length < 1:
        raise InvalidQuery(f"{min_length} is not a valid length.")

    chars = normalize_chars(input("Please input string of characters to permute: "))
    chars = ''.join(c for c in chars if c not in IGNORED_CHARS)

    if len(chars) < min_length:
        raise InvalidQuery("Input string is shorter than the input minimum word length.")

    for c in chars:
        if c not in alphabet:
            raise InvalidQuery(f"Input string contains invalid character {c!r}.")

    return chars, min_length


def run_session(mode='English', words_file=None, alphabet=None):
    if alphabet is None:
        alphabet = FROM_CONFIG

    if words_file is not None:
        descrambler = Descrambler(load_words(words_file), alphabet, progress=True)
    else:
        descrambler = descrambler_modes[mode](alphabet=alphabet, progress=True)

    print(f"Loaded {descrambler.index.num_words} words")

    results_out = None
    if get_ipython() is not None:  # widgets only render in a notebook
        results_out = Output()
        display(results_out)

    finished = False
    while not finished:
        try:
            chars, min_length = ask_query(descrambler.alphabet, descrambler.min_length)
            result = descrambler.descramble(chars, min_length)
        except (InvalidQuery, ValueError) as e:
            print(e)
            print()
            continue

        if results_out is None:
            print(result.message)
            if result:
                print(descrambler.show(result).to_string(index=False))
        else:
            results_out.clear_output()
            with results_out:
                print(result.message)
                if result:
                    display(descrambler.show(result))

        finished = 'n' in input("Continue? (y/n): ").lower()

    return descrambler
