# lead_scout/config.py
import os
import json
import logging
from dataclasses import dataclass, field
from dotenv import load_dotenv
from typing import List, Tuple

from .models import SourceConfig
from .sources import TARGET_SITES

# Load environment variables from .env file at the project root
load_dotenv()

logger = logging.getLogger('LeadScout.Config')

DEFAULT_BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--disable-gpu',
    '--window-size=1920,1080',
]


def _env_str(key: str, default: str = '') -> str:
    return os.getenv(key, default)


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {key}={raw!r}; using default {default}.")
        return default


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class BotConfig:
    """Central configuration for the scraper, loaded from environment variables."""
    # Telegram (loaded from .env file)
    telegram_token: str = field(default_factory=lambda: _env_str('TELEGRAM_BOT_TOKEN'))
    telegram_chat_id: str = field(default_factory=lambda: _env_str('TELEGRAM_CHAT_ID'))

    # Loop settings
    cycle_interval_minutes: int = field(default_factory=lambda: _env_int('SCRAPE_INTERVAL_MINUTES', 30))
    backoff_minutes: int = field(default_factory=lambda: _env_int('BACKOFF_MINUTES', 5))

    # Storage
    data_dir: str = field(default_factory=lambda: _env_str('DATA_DIR', 'data'))

    # Scraping settings
    max_concurrent_tabs: int = field(default_factory=lambda: _env_int('MAX_CONCURRENT_TABS', 3))
    fetch_timeout_s: int = field(default_factory=lambda: _env_int('FETCH_TIMEOUT_SECONDS', 120))
    headless: bool = field(default_factory=lambda: _env_bool('HEADLESS', True))
    sources_file: str = field(default_factory=lambda: _env_str('SOURCES_FILE'))
    navigation_timeout_ms: int = 60000
    selector_timeout_ms: int = 30000
    scroll_steps: int = 5
    scroll_delay_range: Tuple[float, float] = (1.0, 2.0)
    browser_args: List[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))

    # Politeness
    batch_delay_range: Tuple[float, float] = (5.0, 10.0)  # between fetch batches
    notify_delay_range: Tuple[float, float] = (2.0, 5.0)  # between Telegram sends

    log_level: str = field(default_factory=lambda: _env_str('LOG_LEVEL', 'INFO'))

    def __post_init__(self):
        if self.cycle_interval_minutes < 1:
            logger.warning(f"SCRAPE_INTERVAL_MINUTES={self.cycle_interval_minutes} is below 1; using 30.")
            self.cycle_interval_minutes = 30
        if self.backoff_minutes < 1:
            logger.warning(f"BACKOFF_MINUTES={self.backoff_minutes} is below 1; using 5.")
            self.backoff_minutes = 5
        if self.max_concurrent_tabs < 1:
            logger.warning(f"MAX_CONCURRENT_TABS={self.max_concurrent_tabs} is below 1; using 1.")
            self.max_concurrent_tabs = 1
        for name in ('batch_delay_range', 'notify_delay_range', 'scroll_delay_range'):
            low, high = getattr(self, name)
            if low < 0 or high < low:
                raise ValueError(f"{name} must satisfy 0 <= min <= max, got {(low, high)}")

    @property
    def leads_file(self) -> str:
        return os.path.join(self.data_dir, 'leads_database.json')

    @property
    def log_file(self) -> str:
        return os.path.join(self.data_dir, 'scraper.log')

    @property
    def visited_urls_file(self) -> str:
        return os.path.join(self.data_dir, 'visited_urls.log')

    def ensure_data_dir(self) -> None:
        os.makedirs(self.data_dir, exist_ok=True)

    def load_sources(self) -> Tuple[SourceConfig, ...]:
        """Return the site registry: the built-in one, or the JSON list in ``sources_file``."""
        if not self.sources_file:
            return TARGET_SITES
        path = self.sources_file
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get('sources', [])
        sources = tuple(SourceConfig.from_dict(entry) for entry in data)
        logger.info(f"Loaded {len(sources)} sources from {path}")
        return sources
