"""Pending block number commands."""

import click

from transfer_queue.cli.utils import coro, info, open_store, success


@click.group(name="block")
def block() -> None:
    """Pending block number commands."""


@block.command(name="get")
@click.pass_context
@coro
async def get_block(ctx: click.Context) -> None:
    """Print the pending block number."""
    async with open_store(ctx) as store:
        block_number = await store.get_pending_block_number()

    if block_number is None:
        info("Pending block number is not set")
        return
    click.echo(block_number)


@block.command(name="set")
@click.argument("block_number", type=click.IntRange(min=0))
@click.pass_context
@coro
async def set_block(ctx: click.Context, block_number: int) -> None:
    """Set the pending block number to BLOCK_NUMBER."""
    async with open_store(ctx) as store:
        await store.set_pending_block_number(block_number)

    success(f"Pending block number set to {block_number}")
