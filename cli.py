#!/usr/bin/env python3
"""
LinkDump CLI - add links, process them in the background and inspect the collection
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from linkdump.config import get_config
from linkdump.errors import LinkDumpError, ValidationError
from linkdump.llm import LLMProviderFactory
from linkdump.logging_config import setup_logging, get_logger

logger = get_logger("cli")
console = Console()

STATUS_STYLES = {
    "pending": "yellow",
    "processing": "cyan",
    "completed": "green",
    "failed": "red",
}


def load_config(args):
    config_path = Path(args.config) if args.config else None
    return get_config(config_path)


def get_service(args):
    """Build the service from the configured (or given) config file."""
    from linkdump.bootstrap import create_service
    return create_service(load_config(args))


async def _add(args):
    service = get_service(args)
    added = 0

    for url in args.urls:
        try:
            link = await service.add_link(url, args.tag or [])
        except ValidationError as e:
            logger.warning("Skipping %s: %s", url, e)
            console.print(f"[yellow]Skipped:[/yellow] {e}")
            continue
        added += 1
        console.print(f"Added: {link.url} [dim]({link.id})[/dim]")

    if added:
        console.print(f"\nProcessing {added} new link(s)...")
        await service.wait_for_completion()
        for link in await service.get_links():
            if link.url in args.urls:
                style = STATUS_STYLES.get(link.status.value, "")
                console.print(f"[{style}]{link.status.value}[/{style}] {link.url}")


def cmd_add(args):
    """Add one or more links and process them."""
    asyncio.run(_add(args))


async def _process(args):
    service = get_service(args)

    if args.all:
        report = await service.process_all_links()
        console.print(
            f"Processed {report.processed}: "
            f"[green]{report.successful} completed[/green], [red]{report.failed} failed[/red]"
        )
        for result in report.results:
            if not result.success:
                console.print(f"  [red]x[/red] {result.link.url}: {result.error}")
        return

    if not args.id:
        console.print("Give a link id or use --all")
        sys.exit(1)

    link = await service.process_link(args.id)
    console.print(f"[green]Completed:[/green] {link.url}\n{link.summary}")


def cmd_process(args):
    """Process one pending link, or all of them."""
    asyncio.run(_process(args))


def cmd_retry(args):
    """Reprocess a failed link."""
    async def run():
        link = await get_service(args).retry_link(args.id)
        console.print(f"[green]Completed:[/green] {link.url}\n{link.summary}")

    asyncio.run(run())


def cmd_list(args):
    """List links in the collection."""
    async def run():
        return await get_service(args).get_links(status=args.status, tag=args.tag)

    links = asyncio.run(run())
    if not links:
        print("No links found matching criteria.")
        return

    table = Table(title=f"Links ({len(links)} total)")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Status")
    table.add_column("URL", overflow="fold")
    table.add_column("Title", overflow="fold")
    table.add_column("Tags")
    if args.verbose:
        table.add_column("Summary", overflow="fold")

    for link in links[:args.limit]:
        style = STATUS_STYLES.get(link.status.value, "")
        row = [
            link.id[:8],
            f"[{style}]{link.status.value}[/{style}]",
            link.url,
            link.title or "",
            ", ".join(link.tags),
        ]
        if args.verbose:
            row.append(link.summary or link.error or "")
        table.add_row(*row)

    console.print(table)
    if len(links) > args.limit:
        print(f"... and {len(links) - args.limit} more. Use --limit to see more.")


def cmd_stats(args):
    """Show statistics about the collection."""
    async def run():
        return await get_service(args).get_statistics()

    stats = asyncio.run(run())

    table = Table(title="Link Collection Statistics")
    table.add_column("Status")
    table.add_column("Count", justify="right")
    for status, count in stats.by_status.items():
        style = STATUS_STYLES.get(status, "")
        table.add_row(f"[{style}]{status}[/{style}]", str(count))
    table.add_row("[bold]total[/bold]", f"[bold]{stats.total}[/bold]")
    console.print(table)

    if stats.by_tag:
        tags = Table(title="By Tag")
        tags.add_column("Tag")
        tags.add_column("Count", justify="right")
        for tag, count in sorted(stats.by_tag.items(), key=lambda x: -x[1]):
            tags.add_row(tag, str(count))
        console.print(tags)


def cmd_tag(args):
    """Add tags to a link."""
    async def run():
        return await get_service(args).add_tags_to_link(args.id, args.tags)

    link = asyncio.run(run())
    print(f"Tags for {link.url}: {', '.join(link.tags)}")


def cmd_remove(args):
    """Remove a link from the collection."""
    async def run():
        return await get_service(args).delete_link(args.id)

    if asyncio.run(run()):
        print(f"Removed: {args.id}")
    else:
        print(f"Link not found: {args.id}")


def cmd_providers(args):
    """List the LLM providers available for summaries."""
    llm = load_config(args).llm

    table = Table(title="LLM Providers")
    table.add_column("Name")
    table.add_column("Description")
    for name, description in LLMProviderFactory.get_available_providers().items():
        marker = " [green](configured)[/green]" if name == llm.provider.lower() else ""
        table.add_row(f"{name}{marker}", description)
    console.print(table)
    console.print(f"Model: {llm.model}  API key variable: {llm.api_key_env}")


def main():
    parser = argparse.ArgumentParser(
        prog="linkdump",
        description="LinkDump - collect links, summarize them and notify your channels"
    )
    parser.add_argument("--config", help="Path to config file (default: config.yaml)")
    parser.add_argument("--debug", action="store_true", help="Verbose console logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser("add", help="Add links and process them")
    add_parser.add_argument("urls", nargs="+", help="URLs to add")
    add_parser.add_argument("-t", "--tag", action="append", help="Tag to attach (repeatable)")
    add_parser.set_defaults(func=cmd_add)

    process_parser = subparsers.add_parser("process", help="Process pending links")
    process_parser.add_argument("id", nargs="?", help="Link id to process")
    process_parser.add_argument("--all", action="store_true", help="Process every pending link")
    process_parser.set_defaults(func=cmd_process)

    retry_parser = subparsers.add_parser("retry", help="Reprocess a failed link")
    retry_parser.add_argument("id", help="Link id")
    retry_parser.set_defaults(func=cmd_retry)

    list_parser = subparsers.add_parser("list", help="List links")
    list_parser.add_argument("-s", "--status", choices=list(STATUS_STYLES), help="Filter by status")
    list_parser.add_argument("-t", "--tag", help="Filter by tag")
    list_parser.add_argument("-l", "--limit", type=int, default=20, help="Max links to show")
    list_parser.add_argument("-v", "--verbose", action="store_true", help="Show summaries")
    list_parser.set_defaults(func=cmd_list)

    stats_parser = subparsers.add_parser("stats", help="Show statistics")
    stats_parser.set_defaults(func=cmd_stats)

    tag_parser = subparsers.add_parser("tag", help="Add tags to a link")
    tag_parser.add_argument("id", help="Link id")
    tag_parser.add_argument("tags", nargs="+", help="Tags to add")
    tag_parser.set_defaults(func=cmd_tag)

    remove_parser = subparsers.add_parser("remove", help="Remove a link")
    remove_parser.add_argument("id", help="Link id")
    remove_parser.set_defaults(func=cmd_remove)

    providers_parser = subparsers.add_parser("providers", help="List LLM providers")
    providers_parser.set_defaults(func=cmd_providers)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)
    try:
        args.func(args)
    except LinkDumpError as e:
        logger.error("%s failed: %s", args.command, e)
        sys.exit(1)


if __name__ == "__main__":
    main()
