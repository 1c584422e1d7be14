"""Event projector for turning parsed month documents into event records."""
import logging
from typing import List, Optional

from processor.models import (
    Document,
    Event,
    EventDate,
    Link,
    LinkTable,
    LinkType,
    RawEvent,
)

logger = logging.getLogger(__name__)


def normalize_links(table: Optional[LinkTable], link_type: LinkType) -> List[Link]:
    """
    Flatten a link table into typed links.

    Args:
        table: Link table from the parse tree, or None when the event has none
        link_type: Category to assign to every link of the table

    Returns:
        List of Link objects in table order
    """
    if table is None:
        return []

    return [
        Link(
            title=entry.link.title,
            url=entry.link.url,
            type=link_type,
            price=entry.link.price
        )
        for entry in table
    ]


class EventProjector:
    """Projector from parsed Documents to flat Event records."""

    def project(self, document: Document) -> List[Event]:
        """
        Project every event of a month document.

        Args:
            document: Parsed month section

        Returns:
            List of Event objects, one per raw event, in document order
        """
        events = [
            self._project_single_event(document, raw_event)
            for raw_event in document.events
        ]
        logger.debug(
            f"Projected {len(events)} events for {document.month} {document.year}"
        )
        return events

    def _project_single_event(self, document: Document, raw_event: RawEvent) -> Event:
        """
        Project a single event.

        Args:
            document: Month document the event belongs to
            raw_event: Event as parsed

        Returns:
            Event object
        """
        header = raw_event.header
        content = raw_event.content

        start = self._event_date(document, header.day.from_day)
        end = None
        if header.day.to_day is not None:
            end = self._event_date(document, header.day.to_day)

        links = (
            normalize_links(content.website, LinkType.WEBSITE) +
            normalize_links(content.ticket, LinkType.TICKET) +
            normalize_links(content.rsvp, LinkType.RSVP)
        )

        return Event(
            start=start,
            end=end,
            categories=content.topic.categories,
            topics=content.topic.topics,
            time=content.time,
            title=header.title,
            location=content.location,
            summary=content.summary,
            description=content.description,
            links=tuple(links)
        )

    def _event_date(self, document: Document, day: int) -> EventDate:
        return EventDate(year=int(document.year), month=document.month, date=day)
