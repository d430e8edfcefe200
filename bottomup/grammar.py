"""Rewrite rules, and a small text format for writing them down.

A grammar here is nothing more than an ordered list of `Rule` objects. The
order matters only in that it decides the order in which alternative
reductions of the same span are explored (and thus the order in which
ambiguous parses come out), so keep it stable if you care about that.

You can build rules directly:

    rules = [
        Rule("S", ("NP", "VP")),
        Rule("NP", ("PN",)),
        Rule("PN", ("John",)),
    ]

or from the flat `(left, right)` pairs that every textbook uses:

    rules = coerce_rules([("S", ["NP", "VP"]), ("NP", ["PN"])])

or from text, one production per line:

    # People and verbs.
    S  -> NP VP
    NP -> PN
    PN -> John | Mary

There is no distinction between terminals and nonterminals: a symbol is just a
string, and a token matches a rule symbol if the strings are equal.
"""

import dataclasses
import logging
import typing

grammar_log = logging.getLogger("bottomup.grammar")

ARROW = "->"
ALTERNATIVE = "|"
COMMENT = "#"


class GrammarError(ValueError):
    """Raised when grammar text can't be turned into rules.

    Carries the (1-based) line number and the text of the offending line, so
    that the message can point you right at the mistake.
    """

    line: int
    text: str

    def __init__(self, message: str, line: int, text: str):
        super().__init__(f"{line}: {message}: {text!r}")
        self.line = line
        self.text = text


@dataclasses.dataclass(frozen=True, slots=True)
class Rule:
    """A rewrite rule `left -> right`.

    `right` is always stored as a tuple, even if you hand it a list, so that
    rules stay hashable and nobody can change one out from under a running
    search.
    """

    left: str
    right: typing.Tuple[str, ...]

    def __post_init__(self):
        if isinstance(self.right, str):
            raise TypeError(f"Right-hand side must be a sequence of symbols, not {self.right!r}")
        if not isinstance(self.right, tuple):
            object.__setattr__(self, "right", tuple(self.right))

    @classmethod
    def from_string(cls, text: str) -> "Rule":
        """Parse a single `LEFT -> A B C` production.

        Alternatives (`|`) are not allowed here because they make more than
        one rule; use `load_rules` for that.
        """
        rules = _parse_line(text, 1)
        if len(rules) != 1:
            raise GrammarError("expected exactly one production", 1, text)
        return rules[0]

    def __str__(self) -> str:
        return f"{self.left} {ARROW} {' '.join(self.right)}".rstrip()


RuleLike = Rule | typing.Tuple[str, typing.Sequence[str]]


def coerce_rules(rules: typing.Iterable[RuleLike]) -> typing.Tuple[Rule, ...]:
    """Turn a mix of `Rule` objects and `(left, right)` pairs into rules."""
    result = []
    for rule in rules:
        match rule:
            case Rule():
                result.append(rule)
            case (str() as left, right) if not isinstance(right, str):
                result.append(Rule(left, tuple(right)))
            case _:
                raise TypeError(f"Expected a Rule or a (left, right) pair, got {rule!r}")
    return tuple(result)


def _parse_line(text: str, line: int) -> list[Rule]:
    body = text.split(COMMENT, 1)[0].strip()
    if body == "":
        return []

    left, arrow, right = body.partition(ARROW)
    if arrow == "":
        raise GrammarError(f"missing '{ARROW}'", line, text)

    left = left.strip()
    if left == "":
        raise GrammarError("missing left-hand side", line, text)
    if len(left.split()) != 1:
        raise GrammarError("left-hand side must be a single symbol", line, text)
    if ARROW in right:
        raise GrammarError(f"more than one '{ARROW}'", line, text)

    # An empty alternative is an empty right-hand side. It never matches
    # anything, but it's not wrong either.
    return [Rule(left, tuple(alternative.split())) for alternative in right.split(ALTERNATIVE)]


def load_rules(text: str) -> list[Rule]:
    """Load rules from grammar text.

    Each non-blank line is `LEFT -> SYMBOLS`, where SYMBOLS is a sequence of
    whitespace-separated symbols, optionally split into alternatives with `|`.
    Everything after a `#` is a comment. Rules come out in the order they are
    written, alternatives left to right.
    """
    rules: list[Rule] = []
    for index, line in enumerate(text.splitlines()):
        rules.extend(_parse_line(line, index + 1))

    if grammar_log.isEnabledFor(logging.DEBUG):
        lefts = {rule.left for rule in rules}
        grammar_log.debug(f"Loaded {len(rules)} rules for {len(lefts)} symbols")
    return rules
