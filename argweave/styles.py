"""
Argweave styled node tree: declarative building blocks for terminal text.

Overview
- Node
  • Either an unnamed fragment (a plain grouping) or a named node carrying one
    style key from a closed vocabulary, an immutable parameter mapping, and an
    ordered tuple of children (strings or nodes).

- Builders
  • element(key, *children, **params): a named node.
  • fragment(*children): an unnamed grouping node.
  • br(): a line break. indent(width=1): a run of `width` spaces.
  • tag: attribute-style shorthand, e.g. tag.red("x"), tag.bg_blue(...), tag.br().

Vocabulary (closed)
- foreground colors: black, red, green, yellow, blue, magenta, cyan, white, default
- background colors: the same names prefixed with "bg-" (tag.bg_red → "bg-red")
- attributes: bold, italic, underline, strikethrough
- control: reset
- structural: br, indent (layout only; they never open or close a style)
Unknown keys raise UnknownStyleError at construction time.

Collapsing
- Builders merge consecutive plain children into one string eagerly, so a built
  tree alternates between text leaves and nodes and the renderer never re-merges:
    element("red", "a", 1, ["b", None], tag.bold("c"), "d")
    → Node(name="red", children=("a1b", Node(name="bold", children=("c",)), "d"))
  Lists/tuples are flattened in place, None and "" are dropped, and every other
  non-node value is converted with str().

Example
    >>> tree = tag.green("Usage", tag.indent(), tag.blue("calc"), ":")
"""
import functools
from collections.abc import Iterable
from types import MappingProxyType

from .faults import *
from .utils import *

COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "default",
)

FOREGROUNDS = frozenset(COLORS)
BACKGROUNDS = frozenset("bg-" + color for color in COLORS)
ATTRIBUTES = frozenset(("bold", "italic", "underline", "strikethrough"))
CONTROLS = frozenset(("reset",))
STRUCTURAL = frozenset(("br", "indent"))

KEYS = FOREGROUNDS | BACKGROUNDS | ATTRIBUTES | CONTROLS | STRUCTURAL


class Node:
    """
    Immutable styled tree node.

    Properties
    - name: the style key, or None for a fragment.
    - params: read-only mapping of parameters (only `width` on indent nodes).
    - children: tuple of str and Node, already collapsed.

    Nodes compare equal when name, params and children are equal, which makes
    trees easy to assert on.
    """

    __slots__ = ("_name", "_params", "_children")

    def __init__(self, children=(), params=Unset, name=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("node 'name' must be a string")
        elif isinstance(name, str) and name not in KEYS:
            trigger(UnknownStyleError(
                "unknown style %r" % name,
                title="unknown style",
                code=FaultCode.UNKNOWN_STYLE,
                hint="use a color (red, bg-red...), an attribute (bold...), reset, br or indent",
                subject=name,
            ))
        params = dict(coalesce(params, {}))
        children = tuple(_collapse(children))

        if name in STRUCTURAL:
            if children:
                raise TypeError(f"{name!r} node cannot have children")
            if name == "indent":
                width = params.setdefault("width", 1)
                if not isinstance(width, int) or isinstance(width, bool):
                    raise TypeError("indent 'width' must be an integer")
                if width < 0:
                    raise ValueError("indent 'width' cannot be negative")
        if unexpected := set(params) - ({"width"} if name == "indent" else set()):
            raise TypeError("%s node does not accept parameters %s" % (
                repr(name) if name else "fragment",
                ", ".join(sorted(map(repr, unexpected)))
            ))

        self._name = coalesce(name)
        self._params = MappingProxyType(params)
        self._children = children

    name = mirror("name")
    params = mirror("params")
    children = mirror("children")

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self._name == other._name and
            dict(self._params) == dict(other._params) and
            self._children == other._children
        )

    __hash__ = None

    def __repr__(self):
        parts = []
        if self._name:
            parts.append("name=%r" % self._name)
        if self._params:
            parts.append("params=%r" % dict(self._params))
        parts.append("children=%r" % (self._children,))
        return "node(%s)" % ", ".join(parts)

    def __rich_repr__(self):
        yield "name", self._name
        if self._params:
            yield "params", dict(self._params)
        yield "children", self._children


def _collapse(children):
    """
    Yield children with consecutive plain values merged into single strings.
    """
    buffer = []
    for child in _flatten(children):
        if isinstance(child, Node):
            if buffer:
                yield "".join(buffer)
                buffer.clear()
            yield child
        else:
            buffer.append(child)
    if buffer:
        yield "".join(buffer)


def _flatten(children):
    for child in children:
        if child is None:
            continue
        if isinstance(child, Node):
            yield child
        elif isinstance(child, Iterable) and not isinstance(child, str | bytes):
            yield from _flatten(child)
        elif text := str(child):
            yield text


def element(name, /, *children, **params):
    """
    Build a named node.

    Raises
    - UnknownStyleError: when `name` is not in the vocabulary.
    - TypeError/ValueError: on children or parameters a structural key does not accept.
    """
    return Node(children, params, name)


def fragment(*children):
    """
    Build an unnamed grouping node (no style is pushed when rendered).
    """
    return Node(children)


def br():
    """A line break."""
    return Node((), {}, "br")


def indent(width=1, /):
    """A run of `width` spaces."""
    return Node((), {"width": width}, "indent")


class _TagFactory:
    """
    Attribute-style access to element builders.

    tag.<key> returns a builder for that key, with underscores read as hyphens:
    tag.bold(...), tag.bg_red(...), tag.br(), tag.indent(4).
    """

    __slots__ = ()

    def __getattr__(self, name):
        key = name.replace("_", "-")
        if key == "br":
            return br
        if key == "indent":
            return indent
        if key not in KEYS:
            raise AttributeError(f"tag has no style {name!r}")
        return rename(functools.partial(element, key), key.replace("-", "_"))

    def __dir__(self):
        return sorted(key.replace("-", "_") for key in KEYS)

    def __repr__(self):
        return "tag"


tag = _TagFactory()


__all__ = (
    # Classes
    "Node",

    # Builders
    "element",
    "fragment",
    "br",
    "indent",
    "tag",

    # Vocabulary
    "COLORS",
    "FOREGROUNDS",
    "BACKGROUNDS",
    "ATTRIBUTES",
    "CONTROLS",
    "STRUCTURAL",
    "KEYS",
)
