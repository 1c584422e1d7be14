"""Pipeline from calendar document text to event records."""
import logging
from typing import List, Optional

from calendar_parser.errors import ParseError
from calendar_parser.grammar import CalendarParser
from calendar_parser.sections import filter_month_sections, split_sections
from processor.event_projector import EventProjector
from processor.models import Document, Event

logger = logging.getLogger(__name__)


class CalendarPipeline:
    """Runs split, filter, parse and projection over a whole document."""

    def __init__(self, parser: CalendarParser, projector: Optional[EventProjector] = None):
        """
        Initialize the pipeline.

        Args:
            parser: Compiled section parser, shared by all sections
            projector: Event projector (default: EventProjector())
        """
        self.parser = parser
        self.projector = projector or EventProjector()

    def run(self, raw_text: str) -> List[Event]:
        """
        Convert a calendar document into event records.

        All month sections are parsed before any event is produced, so a
        failure in one section yields no events at all.

        Args:
            raw_text: Full calendar document

        Returns:
            Events of all month sections, in section order then event order

        Raises:
            ParseError: For the first section that fails to parse
        """
        sections = filter_month_sections(split_sections(raw_text))
        logger.info(f"Found {len(sections)} month sections")

        documents: List[Document] = []
        for section in sections:
            logger.debug(
                f"Parsing section '{section.title}' starting at line {section.start_line}"
            )
            try:
                documents.append(self.parser.parse(section.text))
            except ParseError as e:
                error = e.with_section(section)
                logger.error(
                    f"Failed to parse section '{section.title}': {error}",
                    extra={
                        'section_start_line': section.start_line,
                        'absolute_line': error.absolute_line
                    }
                )
                raise error from e

        events: List[Event] = []
        for document in documents:
            events.extend(self.projector.project(document))

        logger.info(f"Generated {len(events)} events from {len(documents)} sections")
        return events
