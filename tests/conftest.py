# tests/conftest.py
import asyncio
from typing import Dict, List

import pytest

from lead_scout.models import RawItem, SourceConfig
from lead_scout.store import DedupeStore, LeadDatabase, LeadStore


def make_source(name: str, max_items: int = 10) -> SourceConfig:
    return SourceConfig(
        name=name,
        url=f"https://example.org/{name.lower()}",
        item_selector="div.item",
        text_selector="p",
        link_selector="a",
        max_items=max_items,
    )


class FakeFetcher:
    """Returns canned items per source name; records call counts and peak concurrency."""

    def __init__(self, items_by_source: Dict[str, List[RawItem]], fail: frozenset = frozenset(), delay: float = 0.01):
        self.items_by_source = items_by_source
        self.fail = fail
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, source: SourceConfig) -> List[RawItem]:
        self.calls.append(source.name)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if source.name in self.fail:
                raise RuntimeError(f"boom on {source.name}")
            return list(self.items_by_source.get(source.name, []))
        finally:
            self.in_flight -= 1


class FakeNotifier:
    def __init__(self, result: bool = True):
        self.result = result
        self.messages: List[str] = []

    async def send(self, message: str) -> bool:
        self.messages.append(message)
        return self.result


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def db(tmp_path):
    return LeadDatabase(str(tmp_path / "leads_database.json"))


@pytest.fixture
def dedupe(db):
    return DedupeStore(db)


@pytest.fixture
def lead_store(db):
    return LeadStore(db)
