import sys

from descrambler.core import run_session

args = sys.argv[1:]
run_session(words_file=args[0] if len(args) >= 1 else None,
            alphabet=args[1] if len(args) >= 2 else None)
