"""Transfer queue inspection and maintenance commands."""

import sys

import click
from pydantic import ValidationError

from transfer_queue.cli.utils import coro, error, info, open_store, print_json, success, warning
from transfer_queue.core.exceptions import RecordDecodeError
from transfer_queue.core.schemas.transfer import Transfer, TransferId


@click.group(name="queue")
def queue() -> None:
    """Transfer queue commands."""


@queue.command()
@click.pass_context
@coro
async def status(ctx: click.Context) -> None:
    """Show the pending block number and the number of queued transfers."""
    async with open_store(ctx) as store:
        block_number = await store.get_pending_block_number()
        pending = await store.pending_count()

    click.echo(f"Namespace:            {store.namespace}")
    click.echo(f"Pending block number: {block_number if block_number is not None else '-'}")
    click.echo(f"Queued transfers:     {pending}")


@queue.command()
@click.pass_context
@coro
async def peek(ctx: click.Context) -> None:
    """Print the next transfer in chain order without removing it."""
    async with open_store(ctx) as store:
        try:
            transfer = await store.next_transfer()
        except RecordDecodeError as e:
            error(f"Queue head could not be decoded: {e.detail}")
            sys.exit(1)

    if transfer is None:
        info("Queue is empty")
        return
    print_json(transfer.model_dump(by_alias=True))


@queue.command()
@click.argument("payload")
@click.pass_context
@coro
async def add(ctx: click.Context, payload: str) -> None:
    """Admit a transfer given as a JSON object (use '-' to read stdin)."""
    raw = sys.stdin.read() if payload == "-" else payload
    try:
        transfer = Transfer.model_validate_json(raw)
    except ValidationError as e:
        error(f"Invalid transfer: {e.error_count()} error(s)")
        for err in e.errors():
            error(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        sys.exit(1)

    async with open_store(ctx) as store:
        admitted = await store.add_transfer(transfer)

    block_number, log_index = transfer.transfer_id
    if admitted:
        success(f"Transfer ({block_number}, {log_index}) admitted")
    else:
        warning(f"Transfer ({block_number}, {log_index}) already admitted")


@queue.command()
@click.argument("block_number", type=click.IntRange(min=0))
@click.argument("log_index", type=click.IntRange(min=0))
@click.pass_context
@coro
async def remove(ctx: click.Context, block_number: int, log_index: int) -> None:
    """Remove the transfer BLOCK_NUMBER/LOG_INDEX from the queue."""
    async with open_store(ctx) as store:
        removed = await store.remove_transfer(TransferId(block_number, log_index))

    if removed:
        success(f"Transfer ({block_number}, {log_index}) removed")
    else:
        warning(f"Transfer ({block_number}, {log_index}) was not queued")


@queue.command()
@click.argument("block_number", type=click.IntRange(min=0))
@click.argument("log_index", type=click.IntRange(min=0))
@click.pass_context
@coro
async def show(ctx: click.Context, block_number: int, log_index: int) -> None:
    """Print the stored record of BLOCK_NUMBER/LOG_INDEX, queued or not."""
    async with open_store(ctx) as store:
        transfer = await store.get_transfer(TransferId(block_number, log_index))

    if transfer is None:
        error(f"No record for transfer ({block_number}, {log_index})")
        sys.exit(1)
    print_json(transfer.model_dump(by_alias=True))
