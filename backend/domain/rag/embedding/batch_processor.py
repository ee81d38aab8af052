"""
Batch processing utilities for embeddings
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Sequence

from tqdm import tqdm

logger = logging.getLogger(__name__)


class BatchProcessor:
    """Fixed-size batches with bounded concurrency inside each batch"""

    def __init__(self, batch_size: int = 10, max_concurrent: int = 5):
        self.batch_size = batch_size
        self.max_concurrent = max_concurrent

    async def process_batch(
        self,
        items: Sequence[Any],
        process_fn: Callable[[Any], Awaitable[Any]]
    ) -> List[Any]:
        """
        Process items concurrently, at most max_concurrent at a time.

        Returns:
            Results in the order of `items`. The first failure propagates.
        """
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def process_with_semaphore(item):
            async with semaphore:
                return await process_fn(item)

        return list(await asyncio.gather(*(process_with_semaphore(item) for item in items)))

    async def process_in_batches(
        self,
        items: Sequence[Any],
        process_batch_fn: Callable[[Sequence[Any]], Awaitable[List[Any]]],
        show_progress: bool = True,
        desc: str = "Processing"
    ) -> List[Any]:
        """
        Process items in fixed-size batches, one batch after another.

        Args:
            items: Items to process
            process_batch_fn: Async function taking one batch and returning its results
            show_progress: Whether to show a progress bar
            desc: Progress bar label

        Returns:
            All results, in order
        """
        all_results = []
        num_batches = (len(items) + self.batch_size - 1) // self.batch_size

        with tqdm(total=len(items), desc=desc, unit="item", disable=not show_progress) as progress:
            for i in range(0, len(items), self.batch_size):
                batch = items[i:i + self.batch_size]
                all_results.extend(await process_batch_fn(batch))
                progress.update(len(batch))
                logger.debug(f"Processed batch {i // self.batch_size + 1}/{num_batches}")

        return all_results
