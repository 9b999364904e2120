# lead_scout/main.py
import asyncio
import logging
import signal

from .config import BotConfig
from .fetcher import PlaywrightFetcher
from .filters import RelevanceFilter
from .notifier import TelegramNotifier
from .pipeline import LeadPipeline
from .runner import RunLoop
from .scheduler import CrawlScheduler
from .store import DedupeStore, LeadDatabase, LeadStore

logger = logging.getLogger('LeadScout')


def configure_logging(config: BotConfig) -> None:
    """Main log goes to <data_dir>/scraper.log and the console; visited URLs get their own file."""
    config.ensure_data_dir()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        handlers=[
            logging.FileHandler(config.log_file, 'a', encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )

    # Dedicated logger for visited URLs to keep a clean list for debugging
    url_logger = logging.getLogger('VisitedURLs')
    url_logger.setLevel(logging.INFO)
    url_handler = logging.FileHandler(config.visited_urls_file, 'a', encoding='utf-8')
    url_handler.setFormatter(logging.Formatter('%(asctime)s | %(message)s'))
    url_logger.addHandler(url_handler)


def build_run_loop(config: BotConfig) -> RunLoop:
    sources = config.load_sources()
    db = LeadDatabase(config.leads_file)
    fetcher = PlaywrightFetcher(config)
    scheduler = CrawlScheduler(
        fetch_timeout_s=config.fetch_timeout_s,
        batch_delay_range=config.batch_delay_range,
    )
    pipeline = LeadPipeline(
        dedupe=DedupeStore(db),
        leads=LeadStore(db),
        notifier=TelegramNotifier(config.telegram_token, config.telegram_chat_id),
        relevance=RelevanceFilter(),
        notify_delay_range=config.notify_delay_range,
    )
    return RunLoop(
        sources=sources,
        session_factory=fetcher.session,
        scheduler=scheduler,
        pipeline=pipeline,
        max_concurrency=config.max_concurrent_tabs,
        cycle_interval_s=config.cycle_interval_minutes * 60,
        backoff_s=config.backoff_minutes * 60,
    )


async def main():
    """Main asynchronous entry point for the application."""
    config = BotConfig()
    configure_logging(config)
    if not config.telegram_token or not config.telegram_chat_id:
        logger.warning("TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID not set; leads will be stored but not sent.")

    loop = build_run_loop(config)
    event_loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            event_loop.add_signal_handler(sig, loop.stop)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            pass
    await loop.run_forever()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
