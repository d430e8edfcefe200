from hypothesis import given
from hypothesis.strategies import builds, lists, recursive, text

from bottomup import ParseTree, canonicalize


def test_leaf():
    assert canonicalize(ParseTree("John")) == "John"


def test_tree():
    tree = ParseTree("S", (ParseTree("NP"), ParseTree("VP", (ParseTree("V"),))))
    assert canonicalize(tree) == "S(NP,VP(V))"


def test_state():
    state = (ParseTree("A", (ParseTree("x"),)), ParseTree("y"))
    assert canonicalize(state) == "A(x),y"
    assert canonicalize([ParseTree("a")]) == canonicalize(ParseTree("a"))
    assert canonicalize(()) == ""


def test_punctuation_does_not_collide():
    # A leaf with a comma in it is not two leaves.
    assert canonicalize((ParseTree("a,b"),)) != canonicalize((ParseTree("a"), ParseTree("b")))

    # A leaf that looks like a tree is not a tree.
    assert canonicalize(ParseTree("a(b)")) != canonicalize(ParseTree("a", (ParseTree("b"),)))

    # Backslashes are escaped too, so they can't fake an escape.
    assert canonicalize(ParseTree("a\\,b")) != canonicalize(ParseTree("a,b"))
    assert canonicalize(ParseTree("a\\")) == "a\\\\"


def test_empty_symbol_is_not_the_empty_state():
    assert canonicalize((ParseTree(""),)) != canonicalize(())
    assert canonicalize((ParseTree(""), ParseTree(""))) != canonicalize((ParseTree(""),))


def test_identity_does_not_matter():
    assert canonicalize(ParseTree("A", (ParseTree("x"),))) == canonicalize(
        ParseTree("A", (ParseTree("x"),))
    )


symbols = text(alphabet="ab(),\\", max_size=3)
trees = recursive(
    builds(ParseTree, symbols),
    lambda children: builds(ParseTree, symbols, lists(children, min_size=1, max_size=3).map(tuple)),
    max_leaves=8,
)
states = lists(trees, max_size=3).map(tuple)


@given(states, states)
def test_same_key_iff_same_shape(a, b):
    assert (canonicalize(a) == canonicalize(b)) == (a == b)


@given(trees)
def test_same_key_for_a_rebuilt_tree(tree):
    def rebuild(node: ParseTree) -> ParseTree:
        return ParseTree(node.symbol, tuple(rebuild(c) for c in node.children))

    copy = rebuild(tree)
    assert copy is not tree
    assert canonicalize(copy) == canonicalize(tree)
    assert canonicalize(tree) == canonicalize(tree)
