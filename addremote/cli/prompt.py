"""Interactive prompts for choosing a fork and its alias."""

from enum import Enum
from typing import Callable, Iterable, Optional

import click

from addremote.cli.output import error, question
from addremote.core.git import is_valid_remote_name
from addremote.core.models import Fork
from addremote.operations.selection import alias_collides, is_valid_alias


def show_forks(candidates) -> None:
    """Print the addable forks with their index."""
    click.echo("Available forks:")
    width = len(str(len(candidates))) + 2
    for index, fork in enumerate(candidates):
        click.echo(f"{index:<{width}}{fork.owner}")


def accepts_remote_name(name: str) -> bool:
    """True if ``name`` passes the quick checks and git accepts it as a remote name."""
    return is_valid_alias(name) and is_valid_remote_name(name)


def choose_fork(candidates, default_index: Optional[int]) -> Fork:
    """
    Ask for the index of the fork to add.

    Pressing return accepts ``default_index`` when there is one; otherwise an
    index must be typed. Raises click.Abort if the user aborts.
    """
    index = click.prompt(
        question("Choose fork (enter index number)"),
        type=click.IntRange(0, len(candidates) - 1),
        default=default_index,
        show_default=default_index is not None,
    )
    return candidates[index]


class AliasState(Enum):
    """States of the alias prompt."""
    PROMPTING = 'prompting'
    VALIDATING = 'validating'
    COLLIDED = 'collided'
    CONFIRMED = 'confirmed'


class AliasPrompt:
    """
    Ask for a remote name until one is accepted.

    The suggested alias is offered as the default. A name that ``validate``
    rejects, or that a local remote already uses, leads back to PROMPTING;
    the existing remote is never touched.
    """

    def __init__(self, default: str, existing_names: Iterable[str],
                 ask: Optional[Callable[[str], str]] = None,
                 validate: Callable[[str], bool] = accepts_remote_name):
        self.default = default
        self.existing_names = set(existing_names)
        self.ask = ask or self._ask
        self.validate = validate
        self.state = AliasState.PROMPTING
        self.value = None

    @staticmethod
    def _ask(default: str) -> str:
        return click.prompt(question("Choose name to assign to remote"), default=default,
                            show_default=True)

    @property
    def overridden(self) -> bool:
        """True if the confirmed alias differs from the suggestion."""
        return self.state is AliasState.CONFIRMED and self.value != self.default

    def step(self) -> AliasState:
        """Perform one transition and return the new state."""
        if self.state is AliasState.PROMPTING:
            self.value = self.ask(self.default).strip()
            self.state = AliasState.VALIDATING
        elif self.state is AliasState.VALIDATING:
            if not self.validate(self.value):
                click.echo(error(f"Invalid remote name: '{self.value}'"))
                self.state = AliasState.PROMPTING
            elif alias_collides(self.value, self.existing_names):
                self.state = AliasState.COLLIDED
            else:
                self.state = AliasState.CONFIRMED
        elif self.state is AliasState.COLLIDED:
            click.echo(error(f"Remote '{self.value}' already exists; choose another name"))
            self.state = AliasState.PROMPTING
        return self.state

    def run(self) -> str:
        """Step until CONFIRMED and return the alias."""
        while self.state is not AliasState.CONFIRMED:
            self.step()
        return self.value
