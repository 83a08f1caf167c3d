"""Main CLI entry point for transfer-queue management commands."""

import click

from transfer_queue.cli.commands import block, queue
from transfer_queue.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="transfer-queue")
@click.option(
    "--namespace",
    "-n",
    default=None,
    help="Queue namespace (overrides TRANSFER_QUEUE_NAMESPACE)",
)
@click.option(
    "--ttl",
    "ttl_seconds",
    default=None,
    type=click.IntRange(min=1),
    help="TTL in seconds for writes (overrides TRANSFER_QUEUE_TTL_SECONDS)",
)
@click.pass_context
def cli(ctx: click.Context, namespace: str | None, ttl_seconds: int | None) -> None:
    """Transfer Queue CLI - inspect and operate a Redis-backed transfer queue.

    \b
    Command Groups:
      queue      Queued transfers (status, peek, add, remove, show)
      block      Pending block number (get, set)

    \b
    Quick Start:
      transfer-queue -n erc20-watcher --ttl 86400 queue status
      transfer-queue -n erc20-watcher --ttl 86400 queue peek
      transfer-queue -n erc20-watcher --ttl 86400 block set 1000001
    """
    ctx.ensure_object(dict)
    ctx.obj["namespace"] = namespace
    ctx.obj["ttl_seconds"] = ttl_seconds


cli.add_command(queue.queue)
cli.add_command(block.block)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
