r"""
Argweave matchers: the leaf parsing units of a command.

Overview
- Matcher[_T]
  • A composable unit that tries to consume tokens from a Cursor and produce a
    value of type _T, or signals failure by returning `absent`.
  • Carries display metadata reused by the help synthesizer:
    typename (a name, or a tuple of names for alternations), label, optional, literal.

- Built-in primitives (each consumes exactly one token)
  • STRING: the token verbatim; absent only when the cursor is exhausted.
  • NUMBER: a base-10 integer, strict full-token validation (see below).
  • BOOLEAN: "true"/"false", case-insensitive.
  • literal(value): succeeds with True iff the token equals `value`
    case-insensitively; flagged literal so it never reaches the callback.

- convert(typename, function)
  • Lift a plain converter (int, float, pathlib.Path, ...) into a one-token
    matcher; ValueError/TypeError raised by the converter become `absent`.

Invariant
- A matcher never leaves the cursor moved on failure. Matcher.parse records the
  entry index and writes it back whenever the underlying parse yields `absent`,
  so siblings in an alternation or optional wrapper always see a clean cursor.
  This is enforced by the Matcher type itself, for built-ins and user code alike.

Number policy
- NUMBER accepts an optional sign followed by ASCII digits only, and the whole
  token must match: "42", "-7", "+3" and "007" parse; "12abc", "1.5", " 1", "1_000"
  and "" are absent.

Quick example:
    >>> from argweave import Cursor, NUMBER, literal
    >>> cursor = Cursor(["add", "3"])
    >>> literal("ADD").parse(cursor), NUMBER.parse(cursor)
    (True, 3)
"""
import builtins
import functools
import operator
import re

from rich.text import Text

from .absence import absent
from .utils import *

# Optional sign, then ASCII digits, nothing else.
_INTEGER = re.compile(r"[+-]?[0-9]+")


class MatcherType(type):
    """
    Metaclass that makes matchers introspectable.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name for messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - matcher(typename='number', label=None, optional=False, literal=False)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_typename(typename, /):
    """
    Internal: validate a type descriptor.

    - str: must be non-empty after trimming; returned trimmed.
    - iterable of str: each entry non-empty; returned as a tuple (order kept).
    """
    if isinstance(typename, str):
        if not (typename := typename.strip()):
            raise ValueError("matcher 'typename' cannot be empty")
        return typename
    try:
        names = tuple(typename)
    except TypeError:
        raise TypeError("matcher 'typename' must be a string or an iterable of strings") from None
    if not names:
        raise ValueError("matcher 'typename' cannot be empty")
    for name in names:
        if not isinstance(name, str):
            raise TypeError("matcher 'typename' must be a string or an iterable of strings")
        if not name.strip():
            raise ValueError("matcher 'typename' entries cannot be empty")
    return tuple(name.strip() for name in names)


class Matcher[_T](metaclass=MatcherType):
    """
    Parsing unit with display metadata.

    Parameters
    - typename: str | Iterable[str]
      Type descriptor shown in help. A tuple lists alternatives (see either()).
    - parse: Callable[[Cursor], _T | absent]
      Consumes tokens through the cursor. It may return any value other than
      `absent` to signal success; the cursor is rewound automatically on failure.
    - optional: bool
      Set by optional(); an optional matcher never fails.
    - literal: bool
      Literal matchers consume a token but contribute no callback value.
    - label: Unset | str
      Display name distinct from the type descriptor (see named()).

    Properties
    - typename, label, optional, literal: read-only mirrors of the sanitized metadata.
    - names: the type descriptor flattened to a tuple.
    """

    __introspectable__ = (
        "typename",
        "label",
        "optional",
        "literal",
    )

    def __init__(self, typename, parse, /, *, optional=False, literal=False, label=Unset):
        if not callable(parse):
            raise TypeError("matcher 'parse' must be callable")
        if not isinstance(label, str | Unset):
            raise TypeError("matcher 'label' must be a string")
        elif isinstance(label, str) and not (label := label.strip()):
            raise ValueError("matcher 'label' cannot be empty")

        self._typename = _sanitize_typename(typename)
        self._label = coalesce(label)
        self._optional = bool(optional)
        self._literal = bool(literal)
        self._parse = parse

    @property
    def names(self):
        if isinstance(self._typename, str):
            return (self._typename,)
        return self._typename

    def parse(self, cursor, /):
        """
        Attempt a match at the cursor's current position.

        Returns the parsed value, or `absent` with the cursor restored to the
        index it had on entry.
        """
        start = cursor.index
        value = self._parse(cursor)
        if value is absent:
            cursor.index = start
        return value

    def __rich__(self):
        text = Text()
        if self._label:
            text.append(self._label, "bold")
            text.append(":")
        text.append("|".join(self.names), "green" if not self._literal else "blue")
        if self._optional:
            text.append("?", "red")
        return text


@rename("string")
def _string(cursor):
    return cursor.next()


@rename("number")
def _number(cursor):
    token = cursor.next()
    if token is absent or not _INTEGER.fullmatch(token):
        return absent
    return int(token)


@rename("boolean")
def _boolean(cursor):
    token = cursor.next()
    if token is absent:
        return absent
    match token.lower():
        case "true":
            return True
        case "false":
            return False
    return absent


STRING = Matcher("string", _string)
"""One token, verbatim."""

NUMBER = Matcher("number", _number)
"""One token parsed as a strict base-10 integer."""

BOOLEAN = Matcher("boolean", _boolean)
"""One token, "true" or "false" in any letter case."""


def literal(value, /):
    """
    Build a matcher for a fixed keyword such as a subcommand name.

    Behavior
    - Consumes one token and succeeds with True iff it equals `value`
      case-insensitively; any other token (or none) yields `absent`.
    - The matcher is flagged literal: the dispatcher drops its value, and help
      shows `value` itself instead of a bracketed type.

    Raises
    - TypeError: when value is not a string.
    - ValueError: when value is empty or contains whitespace (a single token can never hold it).
    """
    if not isinstance(value, str):
        raise TypeError("literal() argument must be a string")
    elif not value:
        raise ValueError("literal() argument cannot be empty")
    elif any(char.isspace() for char in value):
        raise ValueError("literal() argument cannot contain whitespace")

    expected = value.casefold()

    @rename("literal")
    def parse(cursor):
        token = cursor.next()
        if token is absent or token.casefold() != expected:
            return absent
        return True

    return Matcher(value, parse, literal=True)


def convert(typename, function, /):
    """
    Lift a one-argument converter into a one-token matcher.

    The converter receives the raw token; ValueError and TypeError raised by it
    are treated as “does not match” and turn into `absent`. Any other exception
    propagates (it is a bug in the converter, not bad input).

    Example
        >>> REAL = convert("real", float)
        >>> REAL.parse(Cursor(["2.5"]))
        2.5
    """
    if not builtins.callable(function):
        raise TypeError("convert() second argument must be callable")

    @rename(getattr(function, "__name__", "convert"))
    def parse(cursor):
        token = cursor.next()
        if token is absent:
            return absent
        try:
            return function(token)
        except (ValueError, TypeError):
            return absent

    return Matcher(typename, parse)


__all__ = (
    # Classes
    "Matcher",

    # Built-in primitives
    "STRING",
    "NUMBER",
    "BOOLEAN",

    # Factories
    "literal",
    "convert",
)

# Keep the metaclass out of star-imports and docs; not part of the public API.
del MatcherType
