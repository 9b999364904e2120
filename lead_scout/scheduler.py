# lead_scout/scheduler.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence, Tuple

from .fetcher import Fetcher
from .models import RawItem, SourceConfig
from . import utils

logger = logging.getLogger('LeadScout.Scheduler')

Sleep = Callable[[float], Awaitable[None]]


class CrawlScheduler:
    """Runs the fetcher over the source registry in bounded, ordered batches."""

    def __init__(
        self,
        fetch_timeout_s: float = 120.0,
        batch_delay_range: Tuple[float, float] = (5.0, 10.0),
        sleep: Sleep = asyncio.sleep,
    ):
        self.fetch_timeout_s = fetch_timeout_s
        self.batch_delay_range = batch_delay_range
        self._sleep = sleep

    async def _fetch_one(self, fetcher: Fetcher, source: SourceConfig) -> List[RawItem]:
        try:
            items = await asyncio.wait_for(fetcher.fetch(source), timeout=self.fetch_timeout_s)
        except asyncio.TimeoutError:
            logger.warning(f"Fetch for {source.name} exceeded {self.fetch_timeout_s}s; skipping.")
            return []
        except Exception as e:
            logger.error(f"Fetch for {source.name} failed: {e}", exc_info=True)
            return []
        return list(items or [])[: source.max_items]

    async def run(self, sources: Sequence[SourceConfig], max_concurrency: int, fetcher: Fetcher) -> List[RawItem]:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

        batches = list(utils.batched(list(sources), max_concurrency))
        all_items: List[RawItem] = []
        for index, batch in enumerate(batches, start=1):
            logger.info(f"Batch {index}/{len(batches)}: {', '.join(s.name for s in batch)}")
            # gather keeps results in task order, so output follows registry order
            results = await asyncio.gather(*(self._fetch_one(fetcher, source) for source in batch))
            for source, items in zip(batch, results):
                logger.info(f"Found {len(items)} items from {source.name}")
                all_items.extend(items)

            if index < len(batches):
                delay = utils.random_delay(self.batch_delay_range)
                logger.debug(f"Politeness delay {delay:.1f}s before next batch.")
                await self._sleep(delay)

        logger.info(f"📊 Crawl finished: {len(all_items)} raw items from {len(sources)} sources.")
        return all_items
