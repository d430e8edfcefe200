"""Exhaustive bottom-up parsing by searching over sentential forms.

There are no tables here. We start with one leaf per token and, over and over,
pick some contiguous run of nodes whose symbols spell out the right-hand side
of a rule and replace the run with one new node for the rule's left-hand side.
Every way of doing that is explored, and every time the row shrinks down to a
single node we have a complete parse. An ambiguous grammar simply yields more
than one.

The search runs breadth-first in "generations": generation N holds every
distinct sentential form reachable with exactly N reductions (minus the ones
that were already reached some other way). Forms are deduplicated by their
canonical key (see `canonical.py`) across the whole search, which keeps the
number of states from exploding when the same shape can be built in many
orders, e.g. reducing the left token first or the right token first.

A warning about termination: deduplication only stops us from expanding the
*same* shape twice. A grammar that can keep building new, bigger shapes
forever (the easy way to get one is a unit cycle like `A -> A`, which wraps
`A(x)` into `A(A(x))` into `A(A(A(x)))`...) will keep the search running
forever, too. If you can't vouch for your grammar, give the search a budget
with `max_generations` or `max_states`; when the budget runs out you get
whatever complete parses were found up to that point.
"""

import dataclasses
import logging
import typing

from .canonical import state_key
from .grammar import Rule, RuleLike, coerce_rules
from .tree import ParseTree, State

search_log = logging.getLogger("bottomup.search")


@dataclasses.dataclass
class SearchStats:
    """Counters for one run of the search, for diagnostics."""

    generations: int = 0
    expanded: int = 0
    enqueued: int = 0
    duplicates: int = 0
    completed: int = 0
    exhausted: bool = False

    def __str__(self) -> str:
        return (
            f"{self.generations} generations, {self.expanded} states expanded, "
            f"{self.enqueued} enqueued, {self.duplicates} duplicates, "
            f"{self.completed} complete"
            + (" (budget exhausted)" if self.exhausted else "")
        )


def _check_budget(name: str, value: int | None) -> int | None:
    if value is not None and value < 0:
        raise ValueError(f"{name} must not be negative (got {value})")
    return value


class Parser:
    """Finds every parse of a token sequence under a set of rewrite rules.

    A parser holds nothing but the rules (and the budgets), so one parser can
    be used for as many token sequences as you like. Each call to `parse` or
    `iter_parses` gets its own frontier and seen-set. The only thing that
    changes on the parser is `last_stats`, which describes the most recently
    finished search.
    """

    rules: typing.Tuple[Rule, ...]
    max_generations: int | None
    max_states: int | None
    last_stats: SearchStats | None
    _by_length: dict[int, list[Rule]]

    def __init__(
        self,
        rules: typing.Iterable[RuleLike],
        *,
        max_generations: int | None = None,
        max_states: int | None = None,
    ):
        self.rules = coerce_rules(rules)
        self.max_generations = _check_budget("max_generations", max_generations)
        self.max_states = _check_budget("max_states", max_states)
        self.last_stats = None

        # A span can only ever match rules of its own width, so bucket the
        # rules by width up front. Each bucket keeps the rules in their
        # original order; that's the order alternatives get explored in.
        self._by_length = {}
        for rule in self.rules:
            if len(rule.right) > 0:
                self._by_length.setdefault(len(rule.right), []).append(rule)

    def reduce(self, state: State) -> list[State]:
        """Every state reachable from `state` with exactly one reduction.

        Results come out ordered by span start, then span end, then rule
        order. Nodes outside the reduced span are shared with the input state,
        not copied.
        """
        state = tuple(state)
        results: list[State] = []
        symbols = tuple(node.symbol for node in state)
        for i in range(len(state)):
            for j in range(i + 1, len(state) + 1):
                candidates = self._by_length.get(j - i)
                if not candidates:
                    continue

                span = symbols[i:j]
                for rule in candidates:
                    if rule.right == span:
                        node = ParseTree(rule.left, state[i:j])
                        results.append(state[:i] + (node,) + state[j:])
        return results

    def iter_parses(self, tokens: typing.Iterable[str]) -> typing.Generator[ParseTree, None, None]:
        """Generate complete parses of `tokens` as the search finds them.

        Parses come out in the order of discovery: earlier generations first,
        and within a generation, in frontier order. Every state past the first
        is admitted under a key nobody else in the run has, so no two parses
        share a shape.
        """
        stats = SearchStats()
        initial: State = tuple(ParseTree.leaf(token) for token in tokens)

        seen: set[str] = set()
        frontier: list[State] = [initial]

        sl = search_log
        try:
            while len(frontier) > 0:
                if self._out_of_budget(stats, seen):
                    stats.exhausted = True
                    sl.warning(
                        f"Search budget exhausted after {stats.generations} generations "
                        f"and {len(seen)} states; returning {stats.completed} parses found so far"
                    )
                    break

                next_frontier: list[State] = []
                duplicates = 0
                for state in frontier:
                    if len(state) == 1:
                        stats.completed += 1
                        yield state[0]

                    stats.expanded += 1
                    for candidate in self.reduce(state):
                        key = state_key(candidate)
                        if key in seen:
                            duplicates += 1
                            continue

                        seen.add(key)
                        next_frontier.append(candidate)

                if sl.isEnabledFor(logging.DEBUG):
                    sl.debug(
                        f"generation {stats.generations}: {len(frontier)} states, "
                        f"{len(next_frontier)} new, {duplicates} duplicates"
                    )

                stats.generations += 1
                stats.enqueued += len(next_frontier)
                stats.duplicates += duplicates
                frontier = next_frontier

            if sl.isEnabledFor(logging.INFO):
                sl.info(f"Search finished: {stats}")
        finally:
            self.last_stats = stats

    def _out_of_budget(self, stats: SearchStats, seen: set[str]) -> bool:
        if self.max_generations is not None and stats.generations >= self.max_generations:
            return True
        if self.max_states is not None and len(seen) >= self.max_states:
            return True
        return False

    def parse(self, tokens: typing.Iterable[str]) -> list[ParseTree]:
        """Every complete parse of `tokens`, in order of discovery.

        An input with no parse is not an error: you just get an empty list.
        """
        return list(self.iter_parses(tokens))


def reduce(state: State, rules: typing.Iterable[RuleLike]) -> list[State]:
    """Apply every possible single reduction to `state`."""
    return Parser(rules).reduce(tuple(state))


def parse(
    rules: typing.Iterable[RuleLike],
    tokens: typing.Iterable[str],
    *,
    max_generations: int | None = None,
    max_states: int | None = None,
) -> list[ParseTree]:
    """Parse `tokens` with `rules`, returning every complete parse tree.

    See `Parser` for the details; this is the one-shot version.
    """
    parser = Parser(rules, max_generations=max_generations, max_states=max_states)
    return parser.parse(tokens)
