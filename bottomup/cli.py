import argparse
import logging
import sys

from .canonical import canonicalize
from .grammar import GrammarError, load_rules
from .search import Parser
from .tree import render


def make_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bottomup",
        description="Print every parse of a token sequence under a grammar.",
    )
    parser.add_argument(
        "grammar",
        help="Path to a grammar file, one 'LEFT -> SYMBOLS' production per line.",
    )
    parser.add_argument(
        "tokens",
        nargs="*",
        help="The tokens to parse. The default is to read whitespace-separated tokens "
        "from standard input.",
    )
    parser.add_argument(
        "--format",
        choices=["outline", "canonical"],
        default="outline",
        help="How to print each parse: as a bracketed outline, or as a one-line "
        "canonical string.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation step for the outline format.",
    )
    parser.add_argument(
        "--max-generations",
        type=int,
        default=None,
        help="Stop searching after this many generations and print what was found. "
        "The default is to search until there is nothing left to try, which may be "
        "forever for some grammars.",
    )
    parser.add_argument(
        "--max-states",
        type=int,
        default=None,
        help="Stop searching once this many distinct states have been queued.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every generation.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings.")
    return parser


def main(args: list[str] | None = None) -> int:
    parsed = make_argument_parser().parse_args(args)

    if parsed.verbose:
        level = logging.DEBUG
    elif parsed.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(name)s: %(message)s")

    try:
        with open(parsed.grammar, "r", encoding="utf-8") as f:
            rules = load_rules(f.read())
    except OSError as e:
        print(f"{parsed.grammar}: {e.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as e:
        print(f"{parsed.grammar}: {e.reason}", file=sys.stderr)
        return 2
    except GrammarError as e:
        print(f"{parsed.grammar}:{e}", file=sys.stderr)
        return 2

    tokens = parsed.tokens
    if len(tokens) == 0:
        tokens = sys.stdin.read().split()

    try:
        parser = Parser(
            rules,
            max_generations=parsed.max_generations,
            max_states=parsed.max_states,
        )
    except ValueError as e:
        print(f"{e}", file=sys.stderr)
        return 2

    count = 0
    for tree in parser.iter_parses(tokens):
        if parsed.format == "canonical":
            print(canonicalize(tree))
        else:
            if count > 0:
                print()
            print(render(tree, parsed.indent))
        count += 1

    if count == 0:
        print("no parse", file=sys.stderr)
        return 1
    return 0
