"""
Argweave style renderer: turn a styled node tree into ANSI-coded text.

How it works
- The renderer walks the tree depth-first keeping an explicit stack of active
  style keys (innermost last).
- Entering a named node pushes its key and emits a fresh SGR sequence encoding
  the resolved state of the WHOLE stack: ESC[0;<codes>m. Leaving it pops the
  key and re-emits the sequence for the shorter stack. Terminals have no “pop
  the last style” operation, so the flattened state is recomputed on every push
  and pop; this is what makes a nested color restore its parent's color instead
  of the terminal default.
- Structural keys short-circuit before touching the stack: br renders "\n",
  indent renders `width` spaces.
- Text leaves are appended verbatim (no escaping).

Resolution rules (resolve())
- A foreground color replaces any earlier foreground on the stack; same for
  background colors.
- A repeated attribute toggles it out: bold inside bold renders without bold.
- reset clears everything pushed before it; keys pushed after it apply again.

SGR codes
- foreground 30–37, default 39; background 40–47, default 49
- bold 1, italic 3, underline 4, strikethrough 9; reset 0

Example
    >>> render(tag.red("a", tag.blue("b"), "c"))
    '\\x1b[0;31ma\\x1b[0;34mb\\x1b[0;31mc\\x1b[0;m'
"""
import logging
from types import MappingProxyType

from rich.console import Console

from .styles import *
from .utils import *

logger = logging.getLogger(__name__)

FOREGROUND_CODES = MappingProxyType({
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "default": 39,
})

BACKGROUND_CODES = MappingProxyType({
    "bg-black": 40,
    "bg-red": 41,
    "bg-green": 42,
    "bg-yellow": 43,
    "bg-blue": 44,
    "bg-magenta": 45,
    "bg-cyan": 46,
    "bg-white": 47,
    "bg-default": 49,
})

ATTRIBUTE_CODES = MappingProxyType({
    "bold": 1,
    "italic": 3,
    "underline": 4,
    "strikethrough": 9,
})

CODES = MappingProxyType(
    dict(FOREGROUND_CODES) | dict(BACKGROUND_CODES) | dict(ATTRIBUTE_CODES) | {"reset": 0}
)


def resolve(stack, /):
    """
    Flatten a stack of style keys into a ";"-joined SGR code list.

    Examples
    - ["red", "blue"]          -> "34"
    - ["bold", "red"]          -> "1;31"
    - ["bold", "red", "bold"]  -> "31"
    - ["red", "reset", "bold"] -> "1"

    Raises
    - ValueError: when the stack holds a structural or unknown key.
    """
    styles = []
    for key in stack:
        if key in FOREGROUNDS:
            styles = [style for style in styles if style not in FOREGROUNDS]
            styles.append(key)
        elif key in BACKGROUNDS:
            styles = [style for style in styles if style not in BACKGROUNDS]
            styles.append(key)
        elif key in CONTROLS:
            styles = []
        elif key in styles:
            styles.remove(key)
        elif key in ATTRIBUTES:
            styles.append(key)
        else:
            raise ValueError("%r is not a renderable style" % key)
    return ";".join(str(CODES[style]) for style in styles)


def sgr(stack, /):
    """
    Return the escape sequence for the resolved state of `stack`.
    """
    return "\x1b[0;%sm" % resolve(stack)


class Renderer:
    """
    Stateful tree walker; one instance renders one tree at a time.

    Parameters
    - colorful: bool
      When False, no escape sequence is emitted; structure (text, line breaks,
      indentation) is rendered exactly the same.
    """

    def __init__(self, *, colorful=True):
        self._colorful = bool(colorful)
        self._stack = []
        self._output = []

    @property
    def stack(self):
        return tuple(self._stack)

    def render(self, node, /):
        if self._stack:
            raise RuntimeError("renderer is already rendering")
        self._output = []
        try:
            self._visit(node)
        finally:
            self._stack.clear()
        return "".join(self._output)

    def _visit(self, node):
        if isinstance(node, str):
            self._output.append(node)
            return
        if not isinstance(node, Node):
            raise TypeError("render() argument must be a node or a string")

        match node.name:
            case "br":
                self._output.append("\n")
                return
            case "indent":
                self._output.append(" " * node.params["width"])
                return

        if node.name:
            self._push(node.name)
        for child in node.children:
            self._visit(child)
        if node.name:
            self._pop()

    def _push(self, key):
        self._stack.append(key)
        if self._colorful:
            self._output.append(sgr(self._stack))

    def _pop(self):
        self._stack.pop()
        if self._colorful:
            self._output.append(sgr(self._stack))


def render(node, /, *, colorful=True):
    """
    Render a node (or a bare string) to text with ANSI SGR sequences.
    """
    return Renderer(colorful=colorful).render(node)


def echo(node, /, *, console=Unset, colorful=True):
    """
    Print a node, followed by a newline, to the console's stream.

    The rich Console decides whether escape sequences are wanted: they are only
    emitted for a terminal with a color system and without NO_COLOR. The rendered
    text is written verbatim, so the ESC[0;<codes>m sequences reach the terminal
    exactly as resolve() computed them. Lines are never re-wrapped.
    """
    console = coalesce(console) or Console()
    colorful = bool(
        colorful and
        console.is_terminal and
        not console.no_color and
        console.color_system is not None
    )
    text = render(node, colorful=colorful)
    logger.debug("echoing %d characters (colorful=%s)", len(text), colorful)
    console.file.write(text + "\n")
    console.file.flush()


__all__ = (
    "Renderer",
    "render",
    "resolve",
    "sgr",
    "echo",
    "FOREGROUND_CODES",
    "BACKGROUND_CODES",
    "ATTRIBUTE_CODES",
    "CODES",
)
