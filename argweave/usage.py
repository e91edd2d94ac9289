"""
Argweave help synthesizer: usage text built from matcher metadata.

synthesize(commands, name, descr) returns a styled node tree (see argweave.styles)
describing every command's signature; render it with argweave.render.

Layout
    ␣␣Usage for calc:
    ␣␣␣␣A tiny calculator
    (blank line)
    ␣␣- add <number> <number>␣
    ␣␣␣␣␣␣Add two integers
    ␣␣- neg <number|boolean>␣<precision:number>?␣
    (blank line)

- The "for <name>" part and the description line only appear when supplied.
- Each matcher is followed by one space. Literals show their text unbracketed;
  other matchers show <typename>, alternatives joined with "|", a labelled
  matcher shows <label:typename>, and optional matchers get a trailing "?".
- Every command block ends with a line break: a command description, when
  present, follows its signature indented by six; without one the block ends
  in a blank line.

Palette
- Every visual role maps to space-separated style keys from the closed
  vocabulary (e.g. "bold green"). Defaults are listed in PALETTE; a host can
  override roles through a __styles__ mapping in __main__, and callers through
  the `palette` argument (which wins). Unknown roles are ignored, unknown style
  keys raise UnknownStyleError.
"""
import logging
from types import MappingProxyType

from .styles import *
from .utils import *

logger = logging.getLogger(__name__)

PALETTE = MappingProxyType({
    "usage-label": "green",
    "program-name": "blue",
    "description": "blue",
    "bullet": "",
    "bracket": "blue",
    "typename": "green",
    "label": "cyan",
    "separator": "blue",
    "literal": "blue",
    "optional-marker": "red",
    "command-description": "green",
})


def _palette(overrides, /):
    palette = dict(PALETTE)
    for source in (host("__styles__", {}), coalesce(overrides, {})):
        palette.update((role, style) for role, style in source.items() if role in PALETTE)
    for role, style in palette.items():
        if not isinstance(style, str):
            raise TypeError("palette role %r must map to a string of style keys" % role)
    return palette


def _styled(style, /, *children):
    """
    Wrap children in one element per style key, outermost first.
    """
    node = children
    for key in reversed(style.split()):
        node = element(key, node)
    return node if isinstance(node, Node) else fragment(*node)


def parameter(matcher, /, *, palette=Unset):
    """
    Describe one matcher, e.g. <number>, <a|b>, <n:number>?, or a literal's text.
    """
    palette = _palette(palette)
    if matcher.literal:
        node = _styled(palette["literal"], matcher.typename)
    else:
        alternatives = []
        for index, name in enumerate(matcher.names):
            if index:
                alternatives.append(_styled(palette["separator"], "|"))
            alternatives.append(name)
        inner = [_styled(palette["typename"], alternatives)]
        if matcher.label:
            inner.insert(0, _styled(palette["label"], matcher.label, ":"))
        node = _styled(palette["bracket"], "<", inner, ">")
    if matcher.optional:
        return fragment(node, _styled(palette["optional-marker"], "?"))
    return node


def synthesize(commands, /, name=None, descr=None, *, palette=Unset):
    """
    Build the usage tree for `commands` (anything exposing .matchers and .descr).

    Parameters
    - commands: Iterable of command definitions, in registration order.
    - name: application name shown as "Usage for <name>:" (omitted when falsy).
    - descr: application description shown below the usage label (omitted when falsy).
    - palette: Mapping[str, str] overriding PALETTE roles.
    """
    palette = _palette(palette)
    lines = []
    count = 0

    for count, command in enumerate(commands, 1):
        signature = []
        for matcher in command.matchers:
            signature.append(parameter(matcher, palette=palette))
            signature.append(indent())
        lines.append(fragment(indent(2), _styled(palette["bullet"], "- "), signature, br()))
        if command.descr:
            lines.append(_styled(palette["command-description"], indent(6), command.descr))
        lines.append(br())

    logger.debug("synthesized help for %d commands", count)

    return fragment(
        indent(2),
        _styled(
            palette["usage-label"],
            "Usage",
            [indent(), "for", _styled(palette["program-name"], " ", name)] if name else None,
            ":",
        ),
        _styled(palette["description"], br(), indent(4), descr) if descr else None,
        br(),
        br(),
        lines,
    )


__all__ = (
    "synthesize",
    "parameter",
    "PALETTE",
)
