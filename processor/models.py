"""Data models for calendar parsing and event projection."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Section:
    """Contiguous run of source lines opened by an H2 heading."""
    title: Optional[str]
    start_line: int
    text: str


@dataclass(frozen=True)
class DayRange:
    """Day of month, or closed range of days within one month."""
    from_day: int
    to_day: Optional[int]


@dataclass(frozen=True)
class EventHeader:
    """Header line of an event block."""
    day: DayRange
    title: str


@dataclass(frozen=True)
class Topic:
    """Categories and topics of an event, de-duplicated in source order."""
    categories: Tuple[str, ...]
    topics: Tuple[str, ...]


@dataclass(frozen=True)
class Time:
    """Time of day on a 24-hour clock."""
    hour: int
    minute: int

    def to_dict(self) -> Dict[str, int]:
        return {'hour': self.hour, 'minute': self.minute}


@dataclass(frozen=True)
class Agenda:
    """One scheduled time slot of an event."""
    from_time: Time
    to_time: Time
    after: bool
    agenda: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'from': self.from_time.to_dict(),
            'to': self.to_time.to_dict(),
            'after': self.after,
            'agenda': self.agenda
        }


@dataclass(frozen=True)
class Location:
    """Venue of an event."""
    title: str
    detail: Optional[str]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'title': self.title, 'detail': self.detail}


@dataclass(frozen=True)
class LinkDetails:
    """Title, URL and price written in a link table line."""
    title: str
    url: str
    price: Optional[str]


@dataclass(frozen=True)
class LinkEntry:
    """Entry of a link table as produced by the grammar."""
    link: LinkDetails


LinkTable = Tuple[LinkEntry, ...]


@dataclass(frozen=True)
class EventContent:
    """Body fields of an event block."""
    topic: Topic
    time: Tuple[Agenda, ...]
    location: Location
    summary: str
    description: str
    website: Optional[LinkTable]
    ticket: Optional[LinkTable]
    rsvp: Optional[LinkTable]


@dataclass(frozen=True)
class RawEvent:
    """Event as parsed from the calendar, before projection."""
    header: EventHeader
    content: EventContent


@dataclass(frozen=True)
class Document:
    """Parsed month section."""
    year: int
    month: str
    events: Tuple[RawEvent, ...]


class LinkType(str, Enum):
    """Category of a link table."""
    WEBSITE = 'website'
    TICKET = 'ticket'
    RSVP = 'rsvp'


@dataclass(frozen=True)
class Link:
    """Flattened and typed link of an event."""
    title: str
    url: str
    type: LinkType
    price: Optional[str]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            'title': self.title,
            'url': self.url,
            'type': self.type.value,
            'price': self.price
        }


@dataclass(frozen=True)
class EventDate:
    """Calendar date of an event; month is the section's month name."""
    year: int
    month: str
    date: int

    def to_dict(self) -> Dict[str, Any]:
        return {'year': self.year, 'month': self.month, 'date': self.date}


@dataclass(frozen=True)
class Event:
    """Projected event record."""
    start: EventDate
    end: Optional[EventDate]
    categories: Tuple[str, ...]
    topics: Tuple[str, ...]
    time: Tuple[Agenda, ...]
    title: str
    location: Location
    summary: str
    description: str
    links: Tuple[Link, ...]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the event to its external representation.

        Returns:
            Dictionary using the published field names; absent optional
            values are None
        """
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict() if self.end else None,
            'categories': list(self.categories),
            'topics': list(self.topics),
            'time': [agenda.to_dict() for agenda in self.time],
            'title': self.title,
            'location': self.location.to_dict(),
            'summary': self.summary,
            'description': self.description,
            'links': [link.to_dict() for link in self.links]
        }
