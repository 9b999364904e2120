# lead_scout/pipeline.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from .contacts import extract_contacts
from .filters import RelevanceFilter
from .models import Lead, LeadCandidate, RawItem
from .notifier import Notifier, format_lead_message
from .store import DedupeStore, LeadStore, StoreError
from . import utils

logger = logging.getLogger('LeadScout.Pipeline')


class LeadPipeline:
    """Dedupe, filter, extract, persist and notify, one raw item at a time."""

    def __init__(
        self,
        dedupe: DedupeStore,
        leads: LeadStore,
        notifier: Notifier,
        relevance: Optional[RelevanceFilter] = None,
        notify_delay_range: Tuple[float, float] = (2.0, 5.0),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.dedupe = dedupe
        self.leads = leads
        self.notifier = notifier
        self.relevance = relevance or RelevanceFilter()
        self.notify_delay_range = notify_delay_range
        self._sleep = sleep

    def _accept(self, item: RawItem) -> Optional[Lead]:
        """Persist ``item`` as a Lead, or return None when it is a repeat or off-topic."""
        if not self.dedupe.check_and_mark(item.url):
            return None
        if not self.relevance.is_relevant(item.text):
            return None

        contacts = extract_contacts(item.text)
        candidate = LeadCandidate(
            source=item.source,
            text=item.text.strip(),
            source_url=item.url,
            phones=contacts.phones,
            emails=contacts.emails,
        )
        try:
            return self.leads.save(candidate)
        except StoreError:
            # Un-mark so the item is evaluated again next cycle instead of being lost
            try:
                self.dedupe.release(item.url)
            except StoreError as e:
                logger.error(f"Could not release {item.url} after failed save: {e}")
            raise

    async def _notify(self, lead: Lead) -> bool:
        message = format_lead_message(lead)
        try:
            return bool(await self.notifier.send(message))
        except Exception as e:
            logger.error(f"Notification for lead {lead.id} failed: {e}", exc_info=True)
            return False

    async def process(self, items: Sequence[RawItem]) -> List[Lead]:
        created: List[Lead] = []
        for item in items:
            try:
                lead = self._accept(item)
            except StoreError as e:
                logger.error(f"Store error while processing {item.url}: {e}")
                continue
            if lead is None:
                continue

            created.append(lead)
            logger.info(f"✓ New lead from {lead.source}: {lead.source_url}")

            lead.notified = await self._notify(lead)
            if not lead.notified:
                logger.warning(f"Lead {lead.id} saved but not notified.")

            # Respect outbound rate limits whatever the send result
            await self._sleep(utils.random_delay(self.notify_delay_range))

        return created
