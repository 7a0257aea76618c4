"""CLI for git-weblink."""

import asyncio
import sys
from pathlib import Path

import click

from git_weblink.config.logging import configure_logging
from git_weblink.config.settings import load_settings
from git_weblink.core.exceptions import ConfigurationError


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _action_option(func):
    """Attach the mutually exclusive --open/--copy/--print flags."""
    func = click.option("--print", "action", flag_value="print", help="Print the URL to stdout")(func)
    func = click.option("--copy", "action", flag_value="copy", help="Copy the URL to the clipboard")(func)
    func = click.option("--open", "action", flag_value="open", help="Open the URL in a browser")(func)
    return func


def _finish(result) -> None:
    """Report an ActionResult and exit with its status."""
    if result.cancelled:
        return
    if not result.ok:
        click.echo(result.message, err=True)
        sys.exit(1)
    if result.message:
        click.echo(result.message)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """git-weblink: link files and branches to their pages on the Git host."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.log_json)


@cli.command("file")
@click.argument("location")
@click.option(
    "--line", "--start", "-l", type=click.IntRange(min=1), help="Line (or first line) to link to"
)
@click.option("--end", "-e", type=click.IntRange(min=1), help="Last line of the range")
@click.option("--branch", "-b", help="Link to this branch instead of the current one")
@click.option("--pick-branch", is_flag=True, help="Choose the branch interactively")
@_action_option
def file_command(
    location: str,
    line: int | None,
    end: int | None,
    branch: str | None,
    pick_branch: bool,
    action: str | None,
) -> None:
    """Link to a file, optionally at a line or range.

    LOCATION is a path, optionally suffixed with :LINE or :START-END.
    """
    from git_weblink.core.models.target import LineRange, parse_location
    from git_weblink.services.weblink import WebLinkService

    if Path(location).exists():
        path, line_range = location, None
    else:
        path, line_range = parse_location(location)

    if line is not None:
        if end is not None and end < line:
            raise click.BadParameter(f"--end ({end}) is before --line ({line})", param_hint="--end")
        line_range = LineRange.single(line) if end is None else LineRange.from_selection(line, end)
    elif end is not None:
        raise click.BadParameter("--end requires --line", param_hint="--end")

    action = action or load_settings().default_action
    service = WebLinkService(settings_loader=load_settings)

    async def _file():
        return await service.run(
            lambda: service.file_url(path, line_range, branch=branch, pick_branch=pick_branch),
            service.sink_for(action),
        )

    _finish(run_async(_file()))


@cli.command("branch")
@click.argument("path", default=".")
@click.option("--branch", "-b", help="Link to this branch instead of the current one")
@click.option("--pick-branch", is_flag=True, help="Choose the branch interactively")
@_action_option
def branch_command(path: str, branch: str | None, pick_branch: bool, action: str | None) -> None:
    """Link to a branch (tree view) of the repository containing PATH."""
    from git_weblink.services.weblink import WebLinkService

    action = action or load_settings().default_action
    service = WebLinkService(settings_loader=load_settings)

    async def _branch():
        return await service.run(
            lambda: service.branch_url(path, branch=branch, pick_branch=pick_branch),
            service.sink_for(action),
        )

    _finish(run_async(_branch()))


@cli.command("parse")
@click.argument("remote_url")
def parse_command(remote_url: str) -> None:
    """Show how a remote URL is understood."""
    from git_weblink.git.remote_parser import parse_remote_url
    from git_weblink.git.url_generator import host_family

    settings = load_settings()
    remote = parse_remote_url(remote_url, settings.effective_host_mapping)
    click.echo(f"Host:   {remote.host or '-'}")
    click.echo(f"Owner:  {remote.owner or '-'}")
    click.echo(f"Repo:   {remote.repo or '-'}")
    click.echo(f"Family: {host_family(remote.host).value}")


if __name__ == "__main__":
    cli()
