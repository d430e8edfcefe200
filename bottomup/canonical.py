"""Canonical string keys for trees and states.

The search uses these keys to notice that it has already seen a particular
sentential form, so two states get the same key exactly when they have the
same shape: the same symbols arranged in the same trees. The format is

    leaf           ->  symbol
    internal node  ->  symbol(child,child,...)
    state          ->  node,node,...

which makes keys easy to read in a debugger and in test assertions, e.g.
`S(NP(PN(John)),VP(V_T(loves),NP(PN(Mary))))`.

Symbols are arbitrary strings, so the punctuation has to be escaped or two
different states could collide: the leaf `a,b` must not look like the state
`a`, `b`. Backslash, parentheses and commas inside a symbol get a backslash in
front of them, and the empty symbol is written `\\e` (a bare empty string would
make the state with one empty leaf look like the empty state). Ordinary
symbols are left alone.

Treat the key as opaque. It is for equality comparisons and nothing else;
don't try to parse it back into a tree.
"""

import typing

from .tree import ParseTree

_ESCAPES = str.maketrans({"\\": "\\\\", "(": "\\(", ")": "\\)", ",": "\\,"})
_EMPTY = "\\e"


def escape_symbol(symbol: str) -> str:
    if symbol == "":
        return _EMPTY
    return symbol.translate(_ESCAPES)


def tree_key(tree: ParseTree) -> str:
    symbol = escape_symbol(tree.symbol)
    if tree.is_leaf:
        return symbol
    return f"{symbol}({','.join(tree_key(child) for child in tree.children)})"


def state_key(state: typing.Iterable[ParseTree]) -> str:
    return ",".join(tree_key(node) for node in state)


def canonicalize(value: ParseTree | typing.Iterable[ParseTree]) -> str:
    """The canonical key of a single tree, or of a state (a sequence of trees).

    A state holding one tree has the same key as that tree on its own.
    """
    if isinstance(value, ParseTree):
        return tree_key(value)
    return state_key(value)
