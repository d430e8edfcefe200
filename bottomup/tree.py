import dataclasses
import typing

from .grammar import Rule


@dataclasses.dataclass(frozen=True, slots=True)
class ParseTree:
    """A node in a parse tree.

    A node with no children is a leaf, which is what every input token starts
    out as. Nodes are never modified once they are made, which is what lets
    the search share the same node between lots of alternative states.
    """

    symbol: str
    children: typing.Tuple["ParseTree", ...] = ()

    def __post_init__(self):
        if isinstance(self.children, str):
            raise TypeError(f"Children must be a sequence of trees, not {self.children!r}")
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def leaf(cls, symbol: str) -> "ParseTree":
        return cls(symbol)

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def leaves(self) -> list[str]:
        """The symbols of the leaves under this node, left to right.

        For a completed parse this is the original token sequence.
        """
        if self.is_leaf:
            return [self.symbol]
        return [symbol for child in self.children for symbol in child.leaves()]


# A sentential form: the row of partial trees at one point in a derivation.
State = typing.Tuple[ParseTree, ...]


def render(tree: ParseTree, indent_width: int = 2, prefix: str = "") -> str:
    """Format a tree as a bracketed outline, e.g.:

        [ S
          [ NP ]
          [ VP ]
        ]

    (This is the bracket syntax that LaTeX tree packages like `forest` read.)
    """
    if tree.is_leaf:
        return f"{prefix}[ {tree.symbol} ]"

    child_prefix = prefix + " " * indent_width
    lines = [f"{prefix}[ {tree.symbol}"]
    lines.extend(render(child, indent_width, child_prefix) for child in tree.children)
    lines.append(f"{prefix}]")
    return "\n".join(lines)


def structural_equals(a: typing.Any, b: typing.Any) -> bool:
    """Compare two values for structural equality, for checking parse results.

    Rules and trees compare by content, sequences compare element-wise (and a
    list equals a tuple with the same elements), and everything else compares
    with `==`. If either value has an `equals` method it gets the final word.
    """
    if a is b:
        return True

    for x, y in ((a, b), (b, a)):
        equals = getattr(x, "equals", None)
        if callable(equals):
            return bool(equals(y))

    match a, b:
        case ParseTree(), ParseTree():
            return a.symbol == b.symbol and structural_equals(a.children, b.children)

        case Rule(), Rule():
            return a.left == b.left and structural_equals(a.right, b.right)

        case (str(), _) | (_, str()):
            return a == b

        case (list() | tuple(), list() | tuple()):
            return len(a) == len(b) and all(structural_equals(x, y) for x, y in zip(a, b))

        case _:
            return a == b
