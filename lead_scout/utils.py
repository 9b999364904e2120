# -- coding: utf-8 --
"""
utils.py

Small helpers for Playwright sessions and randomized politeness delays.
"""

import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from playwright.async_api import Browser, BrowserContext

__all__ = [
    "USER_AGENTS", "choose_user_agent", "SessionProfile", "random_session_profile",
    "new_context_with_profile", "random_delay", "batched",
]

# --- User Agents (realistic desktop mix) ---
USER_AGENTS = [
    # Chrome desktop (Win/Mac/Linux)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:129.0) Gecko/20100101 Firefox/129.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_6) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.5 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36",
]


def random_delay(delay_range: Tuple[float, float]) -> float:
    """Uniform random number of seconds inside ``delay_range`` (inclusive)."""
    low, high = delay_range
    return random.uniform(low, high)


def choose_user_agent(seed: Optional[Union[int, str]] = None) -> str:
    rng = random.Random()
    if seed is not None:
        rng.seed(seed)
    return rng.choice(USER_AGENTS)


@dataclass
class SessionProfile:
    user_agent: str


def random_session_profile(seed: Optional[Union[int, str]] = None) -> SessionProfile:
    ua = choose_user_agent(seed=seed)
    return SessionProfile(user_agent=ua)


async def new_context_with_profile(browser: Browser, profile: Optional[SessionProfile] = None, **kwargs) -> BrowserContext:
    p = profile or random_session_profile()
    context_args = {
        'user_agent': p.user_agent,
        'viewport': {'width': 1920, 'height': 1080},
    }
    context_args.update(kwargs)  # Allow overriding, e.g., with locale
    ctx = await browser.new_context(**context_args)
    return ctx


def batched(items: Sequence, size: int):
    """Yield contiguous slices of ``items`` of at most ``size`` elements, in order."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]
