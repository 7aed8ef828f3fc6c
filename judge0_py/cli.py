"""Command-line interface for judge0_py."""

import asyncio
import base64
import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .client import Client, Submission
from .config import GlobalConfig
from .errors import Judge0Error
from .utils.terminal import console, create_table, format_optional, format_status


def _run(coro):
    """Run one client coroutine, turning client errors into exit status 1."""
    try:
        return asyncio.run(coro)
    except Judge0Error as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


def _client(ctx: click.Context, base64_encoded: bool = False, wait: bool = False) -> Client:
    settings: GlobalConfig = ctx.obj["settings"]
    return Client(settings.base_url, settings.to_config(base64_encoded, wait))


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _print_submissions(title: str, submissions) -> None:
    table = create_table(title, ["Token", "Status", "Time", "Memory", "Language"])
    for sub in submissions:
        table.add_row(
            format_optional(sub.token),
            format_status(sub.status),
            format_optional(sub.time),
            format_optional(sub.memory),
            format_optional(sub.language_id),
        )
    console.print(table)


@click.group()
@click.option("--url", help="Judge0 base URL (default: from profile)")
@click.option("--token", help="Authentication token (X-Auth-Token)")
@click.option("--user-token", help="Authorization token (X-Auth-User)")
@click.option(
    "--profile",
    type=click.Path(path_type=Path),
    help="Profile file (default: ~/.judge0_py.global)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log requests")
@click.pass_context
def cli(
    ctx: click.Context,
    url: Optional[str],
    token: Optional[str],
    user_token: Optional[str],
    profile: Optional[Path],
    verbose: bool,
):
    """judge0_py - CLI client for the Judge0 code execution service."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    settings = GlobalConfig.load(profile)
    if url:
        settings.base_url = url
    if token:
        settings.authentication_token = token
    if user_token:
        settings.authorization_token = user_token

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["profile"] = profile


@cli.command()
@click.pass_context
def configure(ctx: click.Context):
    """Save the service URL and credentials for future use."""
    settings: GlobalConfig = ctx.obj["settings"]

    settings.base_url = click.prompt("Base URL", default=settings.base_url)
    settings.authentication_token = click.prompt(
        "Authentication token",
        default=settings.authentication_token,
        show_default=False,
    )
    settings.authorization_token = click.prompt(
        "Authorization token",
        default=settings.authorization_token,
        show_default=False,
    )
    settings.save(ctx.obj["profile"])

    console.print(f"[green]Saved profile for {settings.base_url}[/green]")


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="Include archived languages")
@click.pass_context
def languages(ctx: click.Context, show_all: bool):
    """List supported languages."""

    async def fetch():
        async with _client(ctx) as client:
            if show_all:
                return await client.list_all_languages()
            return await client.list_languages()

    langs = _run(fetch())

    table = create_table("Languages", ["ID", "Name", "Archived"])
    for lang in langs:
        table.add_row(str(lang.id), lang.name, format_optional(lang.is_archived))
    console.print(table)


@cli.command()
@click.argument("language_id", type=int)
@click.pass_context
def language(ctx: click.Context, language_id: int):
    """Show one language with its compile and run commands."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.get_language(language_id)

    lang = _run(fetch())

    console.print(f"\n[bold cyan]{lang.name}[/bold cyan] (id {lang.id})")
    if lang.source_file is not None:
        console.print(f"[bold]Source file:[/bold] {lang.source_file}")
    if lang.compile_cmd is not None:
        console.print(f"[bold]Compile:[/bold] {lang.compile_cmd}")
    if lang.run_cmd is not None:
        console.print(f"[bold]Run:[/bold] {lang.run_cmd}")


@cli.command()
@click.pass_context
def statuses(ctx: click.Context):
    """List execution statuses."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.list_statuses()

    table = create_table("Statuses", ["ID", "Description"])
    for status in _run(fetch()):
        table.add_row(str(status.id), format_status(status))
    console.print(table)


@cli.command()
@click.pass_context
def about(ctx: click.Context):
    """Show service version information."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.get_about()

    info = _run(fetch())

    console.print("\n[bold cyan]Judge0:[/bold cyan]")
    console.print(f"[bold]Version:[/bold] {info.version}")
    console.print(f"[bold]Homepage:[/bold] {info.homepage}")
    console.print(f"[bold]Source code:[/bold] {info.source_code}")
    console.print(f"[bold]Maintainer:[/bold] {info.maintainer}")


@cli.command()
@click.pass_context
def workers(ctx: click.Context):
    """Show the load of every execution queue."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.list_workers()

    table = create_table(
        "Workers",
        ["Queue", "Size", "Available", "Idle", "Working", "Paused", "Failed"],
    )
    for worker in _run(fetch()):
        table.add_row(
            worker.queue,
            str(worker.size),
            str(worker.available),
            str(worker.idle),
            str(worker.working),
            str(worker.paused),
            str(worker.failed),
        )
    console.print(table)


@cli.command()
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option("-l", "--lang", "language_id", type=int, required=True, help="Language ID")
@click.option("--stdin", help="Input passed to the program")
@click.option(
    "-w",
    "--wait",
    is_flag=True,
    default=False,
    help="Ask the service to reply after execution finishes",
)
@click.option("--base64", "base64_encoded", is_flag=True, help="Send text as base64")
@click.pass_context
def submit(
    ctx: click.Context,
    file: Path,
    language_id: int,
    stdin: Optional[str],
    wait: bool,
    base64_encoded: bool,
):
    """Submit a source file for execution."""
    source_code = file.read_text(encoding="utf-8")
    if base64_encoded:
        source_code = _b64(source_code)
        if stdin is not None:
            stdin = _b64(stdin)

    submission = Submission(source_code=source_code, language_id=language_id, stdin=stdin)

    async def send():
        async with _client(ctx, base64_encoded=base64_encoded, wait=wait) as client:
            return await client.create_submission(submission)

    console.print(f"[cyan]Submitting {file.name}...[/cyan]")
    console.print_json(data=_run(send()))


@cli.command()
@click.argument("token")
@click.option("-f", "--fields", help='Comma-separated fields (default: "*")')
@click.pass_context
def result(ctx: click.Context, token: str, fields: Optional[str]):
    """Show a submission and its outcome."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.get_submission(token, fields)

    _show_submission(_run(fetch()))


@cli.command()
@click.argument("token")
@click.pass_context
def delete(ctx: click.Context, token: str):
    """Delete a submission on the service."""

    async def send():
        async with _client(ctx) as client:
            return await client.delete_submission(token)

    sub = _run(send())
    console.print(f"[green]Deleted submission {token}[/green]")
    _show_submission(sub)


@cli.command()
@click.argument("tokens", nargs=-1, required=True)
@click.option("-f", "--fields", help='Comma-separated fields (default: "*")')
@click.pass_context
def batch(ctx: click.Context, tokens: Tuple[str, ...], fields: Optional[str]):
    """Show several submissions at once."""

    async def fetch():
        async with _client(ctx) as client:
            return await client.get_batch_submissions(list(tokens), fields)

    _print_submissions("Submissions", _run(fetch()))


def _show_submission(sub: Submission) -> None:
    console.print(f"\n[bold]Token:[/bold] {format_optional(sub.token)}")
    console.print(f"[bold]Status:[/bold] {format_status(sub.status)}")
    if sub.status is not None and not sub.is_finished:
        console.print("[yellow]Still running, check the result again later[/yellow]")
    if sub.time is not None:
        console.print(f"[bold]Time:[/bold] {sub.time}")
    if sub.memory is not None:
        console.print(f"[bold]Memory:[/bold] {sub.memory}")

    for label, text in (
        ("Stdout", sub.stdout),
        ("Stderr", sub.stderr),
        ("Compile output", sub.compile_output),
        ("Message", sub.message),
    ):
        if text:
            console.print(f"\n[bold cyan]{label}:[/bold cyan]")
            console.print(text, markup=False, highlight=False)


@cli.command()
def version():
    """Show version information."""
    console.print(f"[bold cyan]judge0_py[/bold cyan] version [green]{__version__}[/green]")
    console.print("CLI client for the Judge0 code execution service")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
