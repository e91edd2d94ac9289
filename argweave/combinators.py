"""
Argweave combinators: higher-order matcher constructors.

- optional(matcher)
  Never fails. Yields the operand's value, or None (the “present but empty”
  marker) with the cursor rewound when the operand does not match. Optional is
  the terminal wrapper of a matcher chain: it cannot wrap another optional, and
  commands only accept optional matchers as a trailing run.

- either(first, second)
  Left-biased alternation (the binary “or”). The second operand is only tried,
  from the same start position, when the first yields `absent`. Literal and
  optional operands are rejected at construction time. The combined type
  descriptor is the flattened concatenation of both operands' names.

- named(matcher, label)
  Attach a display label (e.g. "amount") to a matcher without altering how it
  parses, so help can show `<amount:number>` instead of `<number>`.

All construction faults are raised immediately (see argweave.faults); nothing is
deferred to the first parse.
"""
from .absence import absent
from .faults import *
from .matchers import Matcher
from .utils import Unset, rename


def _ensure_matcher(function, matcher, /):
    if not isinstance(matcher, Matcher):
        raise TypeError(f"{function}() arguments must be matchers")


def optional(matcher, /):
    """
    Make a matcher optional.

    Behavior
    - On success returns the operand's value, leaving the cursor where the
      operand left it.
    - On failure rewinds to the attempt's start and returns None, so an
      optional matcher never causes its command to be rejected.

    Raises
    - TypeError: when the argument is not a matcher.
    - NestedOptionalError: when the matcher is already optional.
    """
    _ensure_matcher("optional", matcher)
    if matcher.optional:
        trigger(NestedOptionalError(
            "cannot make %r optional twice" % matcher,
            title="nested optional",
            code=FaultCode.NESTED_OPTIONAL,
            hint="apply optional() once, as the outermost wrapper",
            subject=matcher,
        ))

    @rename("optional")
    def parse(cursor):
        start = cursor.index
        value = matcher.parse(cursor)
        if value is absent:
            cursor.index = start
            return None
        return value

    return Matcher(
        matcher.typename,
        parse,
        optional=True,
        literal=matcher.literal,
        label=matcher.label or Unset,
    )


def either(first, second, /):
    """
    Combine two matchers into a left-biased alternation.

    Behavior
    - Attempts `first`; any present result (False and 0 included) is returned as-is.
    - Otherwise rewinds to the shared start and returns `second`'s result unmodified.

    Raises
    - TypeError: when an argument is not a matcher.
    - LiteralAlternativeError: when either operand is literal.
    - OptionalAlternativeError: when either operand is optional.
    """
    for operand in (first, second):
        _ensure_matcher("either", operand)
        if operand.literal:
            trigger(LiteralAlternativeError(
                "cannot combine literal %r through alternation" % operand,
                title="literal alternative",
                code=FaultCode.LITERAL_ALTERNATIVE,
                hint="register one command per keyword instead",
                subject=operand,
            ))
        if operand.optional:
            trigger(OptionalAlternativeError(
                "cannot combine optional %r through alternation" % operand,
                title="optional alternative",
                code=FaultCode.OPTIONAL_ALTERNATIVE,
                hint="optional must be the last wrapper: use optional(either(...))",
                subject=operand,
            ))

    @rename("either")
    def parse(cursor):
        start = cursor.index
        value = first.parse(cursor)
        if value is not absent:
            return value
        cursor.index = start
        return second.parse(cursor)

    return Matcher(first.names + second.names, parse)


def named(matcher, label, /):
    """
    Return a copy of `matcher` displayed under `label` in help.

    Parsing is delegated unchanged; optional/literal flags are preserved.

    Raises
    - TypeError: when the first argument is not a matcher or the label is not a string.
    - ValueError: when the label is empty.
    """
    _ensure_matcher("named", matcher)
    if not isinstance(label, str):
        raise TypeError("named() second argument must be a string")
    return Matcher(
        matcher.typename,
        matcher.parse,
        optional=matcher.optional,
        literal=matcher.literal,
        label=label,
    )


__all__ = (
    "optional",
    "either",
    "named",
)
