# lead_scout/models.py
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Any


@dataclass(frozen=True)
class SourceConfig:
    """A content source visited every cycle, with the selectors used to read its items."""
    name: str
    url: str
    item_selector: str
    wait_for_selector: str = ''
    text_selector: str = ''
    link_selector: str = 'a'
    scroll_to_load: bool = False
    max_items: int = 10
    needs_login: bool = False

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("SourceConfig.name must not be empty")
        if not self.url.strip():
            raise ValueError(f"SourceConfig '{self.name}' has no url")
        if not self.item_selector.strip():
            raise ValueError(f"SourceConfig '{self.name}' has no item_selector")
        if self.max_items < 1:
            raise ValueError(f"SourceConfig '{self.name}' max_items must be >= 1, got {self.max_items}")
        if not self.wait_for_selector:
            # Waiting on the item selector is the sensible default
            object.__setattr__(self, 'wait_for_selector', self.item_selector)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceConfig":
        """Build from a JSON mapping; accepts snake_case or the camelCase site-table keys."""
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            name=str(data.get('name', '')),
            url=str(data.get('url', '')),
            item_selector=str(pick('item_selector', 'itemSelector', '')),
            wait_for_selector=str(pick('wait_for_selector', 'waitForSelector', '')),
            text_selector=str(pick('text_selector', 'textSelector', '')),
            link_selector=str(pick('link_selector', 'linkSelector', 'a')),
            scroll_to_load=bool(pick('scroll_to_load', 'scrollToLoad', False)),
            max_items=int(pick('max_items', 'maxItems', 10)),
            needs_login=bool(pick('needs_login', 'needsLogin', False)),
        )


@dataclass(frozen=True)
class RawItem:
    """An unfiltered text + link pair read from one source during a visit."""
    text: str
    url: str
    source: str


@dataclass
class LeadCandidate:
    """What the pipeline hands to the LeadStore; identity and timestamp are added there."""
    source: str
    text: str
    source_url: str
    phones: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)


@dataclass
class Lead:
    """A persisted, relevance-filtered, contact-annotated lead."""
    id: str
    source: str
    text: str
    source_url: str
    created_at: datetime
    phones: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)
    notified: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'text': self.text,
            'source_url': self.source_url,
            'phones': list(self.phones),
            'emails': list(self.emails),
            'created_at': self.created_at.isoformat(),
            'notified': self.notified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lead":
        return cls(
            id=str(data['id']),
            source=str(data.get('source', '')),
            text=str(data.get('text', '')),
            source_url=str(data.get('source_url', '')),
            created_at=datetime.fromisoformat(data['created_at']),
            phones=list(data.get('phones', [])),
            emails=list(data.get('emails', [])),
            notified=bool(data.get('notified', False)),
        )


class LoopPhase(enum.Enum):
    IDLE = "idle"
    CRAWLING = "crawling"
    PIPELINING = "pipelining"
    SLEEPING = "sleeping"
    BACKING_OFF = "backing_off"


@dataclass
class RunState:
    """In-memory lifecycle state of the run loop. Reset on restart."""
    cycle: int = 0
    phase: LoopPhase = LoopPhase.IDLE
    last_cycle_started_at: Optional[datetime] = None
    last_cycle_finished_at: Optional[datetime] = None
    consecutive_failures: int = 0
    last_error: Optional[str] = None
    last_new_leads: int = 0
