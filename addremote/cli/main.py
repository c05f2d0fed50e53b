"""Main CLI entry point for add-remote."""

import click
from colorama import init

from addremote import __version__
from addremote.cli.output import (BANNER, configure_logging, error, highlight, info,
                                  question, success, warning)
from addremote.cli.prompt import AliasPrompt, choose_fork, show_forks
from addremote.core.config import FORK_ALIAS, GLOBAL
from addremote.core.errors import AddRemoteError, ApplyError, NoCandidates
from addremote.core.git import GitCommandError, GitRepository
from addremote.operations.resolution import plan_remote

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class AddRemoteCommand(click.Command):
    """Custom Command class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


def offer_to_remember_alias(repo, owner: str, alias: str) -> None:
    """Ask whether to save ``owner -> alias`` in the global git config."""
    message = f"Do you want to set this alias '{owner}' -> '{alias}' in your global git-config?"
    if not click.confirm(question(message), default=True):
        return
    key = f"{FORK_ALIAS}.{owner}"
    try:
        repo.config.set(GLOBAL, key, alias)
    except GitCommandError as e:
        click.echo(error(f"Failed to run 'git config --global --replace-all {key} {alias}': {e}"))
        return
    click.echo(success(f"Alias '{owner}' -> '{alias}' successfully set in your global git-config"))


def show_remotes(before: str, after: str) -> None:
    """Print 'git remote -v' output, highlighting lines that weren't there before."""
    previous = set(before.splitlines())
    for line in after.splitlines():
        click.echo(line if line in previous else highlight(line))


@click.command('add-remote', cls=AddRemoteCommand)
@click.version_option(version=__version__)
@click.option('--no-fetch', is_flag=True, help="Don't fetch from the new remote")
@click.option('-v', '--verbose', is_flag=True, help='Show API requests and git commands')
def cli(no_fetch, verbose):
    """
    Add a remote fork to a local Git repository.

    Run from inside a Git repository hosted on GitHub or GitLab. The full list
    of forks is fetched and every fork which isn't already a remote is
    offered. The added remote gets a fetch URL only; its push URL is disabled.

    \b
    Default fork (press return to accept):
      * the only available fork, or else
      * the main fork/source owner if not already added, or else
      * the owner set in add-remote.preferredFork, if available

    \b
    Default alias:
      * add-remote.mainForkOwnerAlias (or "upstream") for the source owner
      * add-remote.forkAlias.<owner> if set
      * the fork owner's name

    \b
    Configuration (git config --global, or per repository):
      git config --global add-remote.preferredFork CasperLabs
      git config --global add-remote.mainForkOwnerAlias owner
      git config --global add-remote.forkAlias.hsutter Herb
      git config --global add-remote.gitHubToken <username:token>
      git config --global add-remote.gitLabToken <token>

    \b
    A token is needed for private GitHub repositories (full "repo" scope) and
    for GitLab projects that require one ("read_api" scope). Any setting can
    be overridden with an ADD_REMOTE_<NAME> environment variable, e.g.
    ADD_REMOTE_GITHUBTOKEN.
    """
    configure_logging(verbose)

    repo = GitRepository.find_repository()
    if not repo:
        click.echo(error("Not a git repository. Run add-remote from inside a Git repository."))
        raise click.Abort()

    try:
        plan = plan_remote(repo)
    except NoCandidates as e:
        click.echo(warning(f"{e}:"))
        click.echo(repo.remotes.verbose_listing())
        return
    except (AddRemoteError, GitCommandError) as e:
        click.echo(error(str(e)))
        raise click.Abort()

    show_forks(plan.candidates)
    try:
        fork = choose_fork(plan.candidates, plan.default_index)
        prompt = AliasPrompt(plan.suggested_alias(fork), plan.existing_names)
        alias = prompt.run()
        if prompt.overridden and not fork.is_source_owner:
            offer_to_remember_alias(repo, fork.owner, alias)
    except click.Abort:
        # Aborting a prompt leaves the repository untouched
        click.echo()
        return

    spec = plan.remote_spec(fork, alias)
    click.echo()
    before = repo.remotes.verbose_listing()
    try:
        repo.applier.apply(spec)
    except ApplyError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(success(f"Added remote '{spec.name}': {spec.fetch_url} (push disabled)"))

    if not no_fetch:
        click.echo(info(f"Fetching from {spec.fetch_url}"))
        failure = repo.applier.fetch(spec.name)
        if failure:
            click.echo(warning(f"Fetch failed, the remote was kept: {failure}"))

    click.echo()
    show_remotes(before, repo.remotes.verbose_listing())

    if not no_fetch:
        branches = repo.remotes.branch_listing(spec.name)
        if branches:
            click.echo()
            click.echo(branches)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
