"""Click base classes shared by every blogforge command.

``BfCommand`` and ``BfGroup`` add to plain Click:

- an eager ``--examples`` flag printing the command's example invocations;
  ``--help`` stays short and ends with a pointer to it
- log context: each invocation binds its command path (e.g.
  ``blogforge articles create``) so log lines, ``--log-json`` included,
  name the command that produced them

``BfGroup`` sets ``command_class = BfCommand`` so subcommands accept
``examples=`` without an explicit ``cls=``.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

from blogforge.config.logging import bind_command


def _examples_option(examples: str) -> click.Option:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )


class _BlogForgeMixin:
    """Behaviour common to :class:`BfCommand` and :class:`BfGroup`."""

    examples: str | None
    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        # Examples are written indented in the command modules; print them
        # with a uniform two-space margin.
        self.examples = None
        if examples:
            self.examples = textwrap.indent(textwrap.dedent(examples).strip("\n"), "  ")
            self.params.append(_examples_option(self.examples))

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(f"Run '{ctx.command_path} --examples' for usage examples.")

    def invoke(self, ctx: click.Context) -> Any:
        bind_command(ctx.command_path)
        return super().invoke(ctx)  # type: ignore[misc]


class BfCommand(_BlogForgeMixin, click.Command):
    """Click Command with ``--examples`` and command-scoped log context."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class BfGroup(_BlogForgeMixin, click.Group):
    """Click Group with ``--examples`` and command-scoped log context."""

    command_class = BfCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
