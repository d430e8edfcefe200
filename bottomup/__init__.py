"""An exhaustive bottom-up parser.

Give it a list of rewrite rules and a list of tokens and it will find every
parse tree, by trying every way of reducing runs of symbols into nonterminals
until only one node is left:

    rules = load_rules('''
        S   -> NP VP
        NP  -> PN
        PN  -> John | Mary
        VP  -> V_T NP
        V_T -> loves
    ''')
    for tree in parse(rules, ["John", "loves", "Mary"]):
        print(render(tree))

This is not fast, and it is not meant to be: it is meant to be simple and
*complete*, which makes it handy for exploring small, ambiguous grammars and
for checking the answers of cleverer parsers.
"""

from .canonical import canonicalize
from .grammar import GrammarError, Rule, coerce_rules, load_rules
from .search import Parser, SearchStats, parse, reduce
from .tree import ParseTree, State, render, structural_equals

__all__ = [
    "GrammarError",
    "ParseTree",
    "Parser",
    "Rule",
    "SearchStats",
    "State",
    "canonicalize",
    "coerce_rules",
    "load_rules",
    "parse",
    "reduce",
    "render",
    "structural_equals",
]
