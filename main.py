from rich.pretty import pprint

from argweave import *

__prog__ = "calc"

cli = CLI(descr="A tiny calculator")


@cli.command(literal("add"), NUMBER, NUMBER, descr="Add two integers")
def add(left, right):
    pprint(left + right)


@cli.command(literal("neg"), named(optional(either(NUMBER, BOOLEAN)), "value"), descr="Negate a number or a flag")
def neg(value):
    pprint(not value if isinstance(value, bool) else -(value or 0))


@cli.command(literal("inspect"))
def inspect():
    pprint(cli)


if __name__ == '__main__':
    invoke(cli)
