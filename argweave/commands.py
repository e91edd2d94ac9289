"""
Argweave command layer: register matcher chains and dispatch to the first match.

What this module provides
- Command: an ordered chain of matchers, a callback and an optional description.
  • match(tokens) runs the chain over a fresh Cursor and returns the callback
    values (literal matchers excluded), or `absent`.
  • Registration-time validation: optional matchers must form a trailing run,
    and the callback must accept exactly as many values as the chain yields.
- command(*matchers, descr=...): decorator turning a function into a Command.
- CLI: ordered command registry with dispatch/execute and help rendering.
- invoke(object, prompt): convenience runner for a CLI or a single Command.

Dispatch
- Commands are tried in registration order, each against a fresh cursor from
  position zero, so attempts never contaminate each other.
- The first command whose whole chain matches runs; no two commands run in one
  invocation. Tokens left over after the chain are ignored.
- When nothing matches, CLI.execute() prints the help text; that is the normal
  answer to unknown input, not an error.
- Cost: O(commands × matchers-per-command) matcher attempts.

Quick start
    from argweave import CLI, NUMBER, literal, optional, named

    cli = CLI("calc", "A tiny calculator")

    @cli.command(literal("add"), NUMBER, NUMBER, descr="Add two integers")
    def add(left, right):
        print(left + right)

    @cli.command(literal("neg"), named(optional(NUMBER), "value"))
    def neg(value):
        print(-(value or 0))

    if __name__ == "__main__":
        cli.execute()            # e.g. `calc add 3 4` prints 7
"""
import inspect
import logging
import shlex
import sys
from collections.abc import Iterable

from .absence import absent
from .cursor import Cursor
from .faults import *
from .usage import synthesize
from .matchers import Matcher
from .renderer import echo
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls} 'descr' cannot be empty")
    return coalesce(descr)


def _check_placement(matchers, /):
    """
    Internal: enforce that optional matchers only appear as a trailing run.
    """
    seen = None
    for position, matcher in enumerate(matchers, 1):
        if matcher.optional:
            seen = seen or position
        elif seen:
            trigger(OptionalPlacementError(
                "required %r at position %d follows the optional matcher at position %d" % (
                    matcher, position, seen
                ),
                title="optional placement",
                code=FaultCode.OPTIONAL_PLACEMENT,
                hint="move optional matchers to the end of the command",
                subject=matcher,
            ))


def _check_arity(callback, count, /):
    """
    Internal: make sure `callback` can be called with `count` positional values.

    Callables without an introspectable signature (some built-ins) are trusted.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return
    try:
        signature.bind(*range(count))
    except TypeError:
        trigger(CallbackArityError(
            "callback %s%s cannot take %d value%s" % (
                getattr(callback, "__name__", "callback"), signature, count, "" if count == 1 else "s"
            ),
            title="callback arity",
            code=FaultCode.CALLBACK_ARITY,
            hint="accept one positional parameter per non-literal matcher",
            subject=callback,
        ))


class Command[*_Ts]:
    """
    One command definition.

    Parameters
    - matchers: Iterable[Matcher]
      The chain, matched left to right against the tokens.
    - callback: Callable[[*_Ts], object]
      Receives the values of all non-literal matchers, in chain order. A missing
      trailing optional value arrives as None.
    - descr: Unset | str
      Human-readable description shown in help.

    Raises
    - TypeError/ValueError on malformed arguments.
    - OptionalPlacementError when a required matcher follows an optional one.
    - CallbackArityError when the callback cannot take the parsed values.
    """

    def __init__(self, matchers, callback, /, descr=Unset):
        if isinstance(matchers, Matcher) or not isinstance(matchers, Iterable):
            raise TypeError("command 'matchers' must be an iterable of matchers")
        matchers = tuple(matchers)
        if not all(isinstance(matcher, Matcher) for matcher in matchers):
            raise TypeError("command 'matchers' must be an iterable of matchers")
        if not callable(callback):
            raise TypeError("command 'callback' must be callable")

        _check_placement(matchers)
        _check_arity(callback, sum(not matcher.literal for matcher in matchers))

        self._matchers = matchers
        self._callback = callback
        self._descr = _sanitize_descr("command", descr)

    matchers = mirror("matchers")
    callback = mirror("callback")
    descr = mirror("descr")

    def match(self, tokens, /):
        """
        Run the chain over a fresh cursor.

        Returns
        - list of the non-literal values in chain order when every matcher succeeds;
        - `absent` as soon as one matcher fails.
        """
        cursor = Cursor(tokens)
        values = []
        for matcher in self._matchers:
            if (value := matcher.parse(cursor)) is absent:
                return absent
            if not matcher.literal:
                values.append(value)
        return values

    def __call__(self, *values):
        return self._callback(*values)

    def __invoke__(self, prompt=Unset):
        """
        Match this single command against a prompt and run it on success.

        Returns whether the command ran.
        """
        if (values := self.match(_tokenize(prompt))) is absent:
            return False
        self(*values)
        return True

    def __repr__(self):
        return "command(%s%s)" % (
            getattr(self._callback, "__name__", "callback"),
            "".join(", %r" % matcher for matcher in self._matchers),
        )

    def __rich_repr__(self):
        yield "matchers", self._matchers
        yield "callback", self._callback
        yield "descr", self._descr


def _tokenize(prompt, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: the current process arguments, sys.argv[1:].
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: used as-is (each element must be a string).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("prompt must be a string or an iterable of strings")


def command(*matchers, descr=Unset):
    """
    Decorator factory building a Command from the decorated function.

    Usage
        @command(literal("add"), NUMBER, NUMBER, descr="Add two integers")
        def add(left, right): ...

    Returns
    - Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@command() must be applied to a callable")
        return Command(matchers, callback, descr)

    return wrapper


class CLI:
    """
    Ordered registry of commands with first-match dispatch.

    Parameters
    - name: Unset | str
      Application name for the help header; defaults to __prog__ in __main__ when
      the host declares one, otherwise no name is shown.
    - descr: Unset | str
      Application description for the help header.
    - colorful: Unset | bool
      Emit ANSI styling in help output (default True).

    Lifecycle
    - Commands are registered once during setup and treated as read-only during dispatch.
    """

    def __init__(self, name=Unset, descr=Unset, *, colorful=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("cli 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("cli 'name' cannot be empty")

        self._name = coalesce(name, host("__prog__", None))
        self._descr = _sanitize_descr("cli", descr)
        self._colorful = bool(coalesce(colorful, True))
        self._commands = []

    name = mirror("name")
    descr = mirror("descr")
    colorful = mirror("colorful")
    commands = mirror("commands")

    def register(self, *commands):
        """
        Append command definitions; they are tried in registration order.
        """
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError("register() arguments must be commands")
        self._commands.extend(commands)
        logger.debug("registered %d command(s), %d total", len(commands), len(self._commands))

    def command(self, *matchers, descr=Unset):
        """
        Decorator factory: build a Command from the decorated function and register it.
        """
        @rename("command")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@command() must be applied to a callable")
            definition = Command(matchers, callback, descr)
            self.register(definition)
            return definition

        return wrapper

    def dispatch(self, tokens, /):
        """
        Run the first command whose whole chain matches `tokens`.

        Returns the command that ran, or None when no command matched.
        """
        tokens = tuple(tokens)
        for command in self._commands:
            if (values := command.match(tokens)) is absent:
                logger.debug("%r did not match %r", command, tokens)
                continue
            logger.debug("%r matched %r with values %r", command, tokens, values)
            command(*values)
            return command
        return None

    def execute(self, prompt=Unset):
        """
        Dispatch a prompt (default: sys.argv[1:]) and print help when nothing matched.

        Returns whether a command ran.
        """
        tokens = _tokenize(prompt)
        if self.dispatch(tokens) is not None:
            return True
        logger.debug("no command matched %r, printing help", tokens)
        self.print_help()
        return False

    def help(self, *, palette=Unset):
        """
        Build the usage tree for every registered command.
        """
        return synthesize(self._commands, self._name, self._descr, palette=palette)

    def print_help(self, *, console=Unset, palette=Unset):
        echo(self.help(palette=palette), console=console, colorful=self._colorful)

    def __invoke__(self, prompt=Unset):
        return self.execute(prompt)

    def __repr__(self):
        return "cli(name=%r, commands=%d)" % (self._name, len(self._commands))

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "colorful", self._colorful
        yield "commands", tuple(self._commands)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for a CLI or a single Command.

    Parameters
    - object: anything implementing __invoke__(prompt).
    - prompt: Unset (sys.argv[1:]) | str (shlex-split) | Iterable[str].

    Returns whatever object.__invoke__ returns (whether a command ran).

    Raises
    - TypeError: when `object` does not implement __invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Command",
    "command",
    "CLI",
    "invoke",
)
