"""
Argweave faults (configuration errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every configuration fault.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ConfigurationError: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a fault (logs it, then raises it).

What is (and is not) a fault
- Faults are programmer errors in command registration or help markup:
  combining a literal or optional matcher through alternation, nesting optionals,
  placing a required matcher after an optional one, registering a callback that
  cannot take the parsed values, or naming an unknown style.
  They are raised immediately at construction time (fail fast at startup).
- Runtime input problems are NOT faults: missing tokens, malformed numbers and
  unmatched commands are ordinary `absent` / no-match outcomes, and unmatched
  input falls through to the help text.

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import logging
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset, host

logger = logging.getLogger(__name__)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - matcher composition (211xx)
      • LITERAL_ALTERNATIVE, OPTIONAL_ALTERNATIVE, NESTED_OPTIONAL
    - command registration (221xx)
      • OPTIONAL_PLACEMENT, CALLBACK_ARITY
    - styling (231xx)
      • UNKNOWN_STYLE

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- matcher composition faults (21xxx) ---
    LITERAL_ALTERNATIVE         = 21101
    OPTIONAL_ALTERNATIVE        = 21102
    NESTED_OPTIONAL             = 21103

    # --- command registration faults (22xxx) ---
    OPTIONAL_PLACEMENT          = 22101
    CALLBACK_ARITY              = 22102

    # --- styling faults (23xxx) ---
    UNKNOWN_STYLE               = 23101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(host("__codes__", {}).get(self, self.value))


class ConfigurationError(Exception):
    """
    base class of every registration-time fault.

    options (read-only mapping, all optional)
    - code: FaultCode identifying the fault.
    - title: short lowercased title shown in the header.
    - hint: one actionable sentence.
    - subject: the offending object (matcher, callback, style key...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def subject(self):
        return self.options.get("subject", Unset)

    def __str__(self):
        if self.message is Unset:
            return ""
        if self.hint:
            return "%s (%s)" % (self.message, self.hint)
        return self.message

    def __rich__(self):
        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | host("__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        header = Text.assemble(
            "[ ",
            text(host("__prog__", "argweave"), styles["prog-name"]),
            " — ",
            text(code, styles["code"]),
            " | ",
            text(self.options.get("title", "configuration error").title(), styles["error-title"]),
            " ]"
        )
        message = text(self.message, styles["error-message"])
        if not self.hint:
            return Group(header, message)
        hint = Text.assemble(text(" → ", styles["hint-arrow"]), text(self.hint, styles["hint"]))
        return Group(header, message, hint)


class LiteralAlternativeError(ConfigurationError): ...
class OptionalAlternativeError(ConfigurationError): ...
class NestedOptionalError(ConfigurationError): ...
class OptionalPlacementError(ConfigurationError): ...
class CallbackArityError(ConfigurationError): ...
class UnknownStyleError(ConfigurationError, ValueError): ...


def trigger(fault, /):
    """
    surface a configuration fault.

    contract
    - fault must be a ConfigurationError instance.
    - the fault is logged at error level (with its code) and then raised; faults are
      programmer errors, so there is no deferred or printed-only mode.
    """
    if not isinstance(fault, ConfigurationError):
        raise TypeError("trigger() argument must be a configuration error")
    logger.error("%s [%s]", fault, fault.code.normalize() if fault.code else "?")
    raise fault


__all__ = (
    "ConfigurationError",
    "LiteralAlternativeError",
    "OptionalAlternativeError",
    "NestedOptionalError",
    "OptionalPlacementError",
    "CallbackArityError",
    "UnknownStyleError",
    "FaultCode",
    "trigger",
)
