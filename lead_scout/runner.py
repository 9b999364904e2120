# lead_scout/runner.py
import asyncio
import logging
from datetime import datetime, timezone
from typing import AsyncContextManager, Awaitable, Callable, List, Optional, Sequence

from .fetcher import Fetcher
from .models import Lead, LoopPhase, RunState, SourceConfig
from .pipeline import LeadPipeline
from .scheduler import CrawlScheduler

logger = logging.getLogger('LeadScout.RunLoop')

SessionFactory = Callable[[], AsyncContextManager[Fetcher]]


class RunLoop:
    """Crawl, process, sleep, repeat. Unhandled errors lead to a fixed cooldown, never an exit."""

    def __init__(
        self,
        sources: Sequence[SourceConfig],
        session_factory: SessionFactory,
        scheduler: CrawlScheduler,
        pipeline: LeadPipeline,
        max_concurrency: int = 3,
        cycle_interval_s: float = 30 * 60,
        backoff_s: float = 5 * 60,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.sources = tuple(sources)
        self.session_factory = session_factory
        self.scheduler = scheduler
        self.pipeline = pipeline
        self.max_concurrency = max_concurrency
        self.cycle_interval_s = cycle_interval_s
        self.backoff_s = backoff_s
        self.state = RunState()
        self._stopping = asyncio.Event()
        self._sleep = sleep or self._interruptible_sleep

    async def _interruptible_sleep(self, seconds: float) -> None:
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    def stop(self) -> None:
        """Ask the loop to finish after the current step. Used for process shutdown."""
        logger.info("Stop requested.")
        self._stopping.set()

    @property
    def stopping(self) -> bool:
        return self._stopping.is_set()

    async def run_cycle(self) -> List[Lead]:
        self.state.cycle += 1
        self.state.last_cycle_started_at = datetime.now(timezone.utc)
        logger.info("=" * 60)
        logger.info(f"🚀 Cycle {self.state.cycle} started")

        self.state.phase = LoopPhase.CRAWLING
        async with self.session_factory() as fetcher:
            items = await self.scheduler.run(self.sources, self.max_concurrency, fetcher)

        self.state.phase = LoopPhase.PIPELINING
        leads = await self.pipeline.process(items)
        if leads:
            logger.info(f"✅ Cycle {self.state.cycle}: {len(leads)} new leads from {len(items)} items.")
        else:
            logger.info(f"Cycle {self.state.cycle}: no new leads found in {len(items)} items.")

        self.state.last_new_leads = len(leads)
        self.state.last_cycle_finished_at = datetime.now(timezone.utc)
        return leads

    async def run_forever(self) -> None:
        logger.info(f"Starting lead scraper with {len(self.sources)} sources.")
        while not self.stopping:
            try:
                await self.run_cycle()
            except Exception as e:
                self.state.phase = LoopPhase.BACKING_OFF
                self.state.consecutive_failures += 1
                self.state.last_error = str(e)
                logger.error(
                    f"Error in main loop (failure #{self.state.consecutive_failures}): {e}; "
                    f"retrying in {self.backoff_s / 60:.1f} minutes.",
                    exc_info=True,
                )
                await self._sleep(self.backoff_s)
                continue

            self.state.consecutive_failures = 0
            self.state.last_error = None
            self.state.phase = LoopPhase.SLEEPING
            logger.info(f"Waiting {self.cycle_interval_s / 60:.1f} minutes before next run...")
            await self._sleep(self.cycle_interval_s)

        self.state.phase = LoopPhase.IDLE
        logger.info("Run loop stopped.")
