"""
Matcher failure sentinel.

This module defines a process-wide singleton `absent` and its type `absenttype`.
Every matcher returns `absent` when it cannot consume the tokens in front of the
cursor; it is the dispatcher's everyday control signal for “try the next
command”, never an exception.

Semantics
- Falsy: bool(absent) is False. Do not rely on truthiness to detect failure,
  since matchers legitimately produce False and 0; compare by identity instead:
      if (value := matcher.parse(cursor)) is absent: ...
- Stable string form: repr(absent) == "absent" (and Rich uses a dim style).
- Identity: absenttype() always returns the same instance per interpreter.
- Distinct from None: None is the “present but empty” value produced by an
  optional matcher whose operand did not match.

Typical usage
    value = absent.nullify(matcher.parse(cursor), default=fallback)
"""
import functools

from rich.text import Text


class absenttype:
    """
    Singleton type of the matcher failure signal.

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Instances are singletons per interpreter process.
    - Copying and pickling preserve identity.
    """

    @functools.cache
    def __new__(cls):
        """
        Return the unique instance of absenttype (per process).
        """
        return super().__new__(cls)

    def nullify(self, object, default=None, /):
        """
        Replace the sentinel with a concrete default; pass through other objects.

        Returns
        - default when `object is self`, otherwise `object` unchanged
          (None, False and 0 included).
        """
        if object is self:
            return default
        return object

    def __bool__(self):
        return False

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'absent' token.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "absent"

    def __reduce__(self):
        return "absent"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'absenttype' is not an acceptable base type")


absent = absenttype()


__all__ = (
    "absenttype",
    "absent",
)
