"""CLI command modules."""

from transfer_queue.cli.commands import block, queue

__all__ = [
    "block",
    "queue",
]
