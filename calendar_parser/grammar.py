"""Grammar parser for calendar month sections."""
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput

from calendar_parser.errors import ParseError
from processor.models import (
    Agenda,
    DayRange,
    Document,
    EventContent,
    EventHeader,
    LinkDetails,
    LinkEntry,
    Location,
    RawEvent,
    Time,
    Topic,
)

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).with_name('calendar.lark')
GRAMMAR_VERSION = 1


def load_grammar(path: Path = GRAMMAR_PATH) -> str:
    """Read the grammar description shipped with the package."""
    return path.read_text(encoding='utf-8')


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(value for value in values if value))


def _parse_time(token) -> Time:
    hour, minute = str(token).split(':')
    return Time(hour=int(hour, 10), minute=int(minute, 10))


def _quoted_text(line) -> str:
    text = str(line)[1:]
    if text.startswith(' '):
        text = text[1:]
    return text.rstrip()


@v_args(inline=True)
class CalendarTransformer(Transformer):
    """Builds the Document model from the parse tree, bottom-up."""

    def start(self, month_header, *events):
        month, year = month_header
        return Document(year=year, month=month, events=tuple(events))

    def month_header(self, month, year):
        return str(month), int(year, 10)

    def event(self, header, content):
        return RawEvent(header=header, content=content)

    def event_header(self, day, title):
        return EventHeader(day=day, title=str(title).strip())

    def day_range(self, from_day, to_day):
        return DayRange(
            from_day=int(from_day, 10),
            to_day=int(to_day, 10) if to_day is not None else None
        )

    def content(self, topic, schedule, location, summary, description, website, ticket, rsvp):
        return EventContent(
            topic=topic,
            time=schedule,
            location=location,
            summary=summary,
            description=description,
            website=website,
            ticket=ticket,
            rsvp=rsvp
        )

    def topic(self, *children):
        *categories, topics = children
        return Topic(
            categories=_unique(str(category)[1:].rstrip(',') for category in categories),
            topics=_unique(topic.strip() for topic in str(topics or '').split(','))
        )

    def schedule(self, *agendas):
        return tuple(agendas)

    def agenda(self, from_time, to_time, after, text):
        return Agenda(
            from_time=_parse_time(from_time),
            to_time=_parse_time(to_time),
            after=after is not None,
            agenda=str(text).strip() if text is not None else ''
        )

    def location(self, place, detail):
        return Location(
            title=str(place).strip(),
            detail=str(detail)[1:-1].strip() if detail is not None else None
        )

    def summary(self, text):
        return str(text).strip()

    def description(self, *lines):
        return '\n'.join(_quoted_text(line) for line in lines)

    def website(self, *links):
        return tuple(links)

    def ticket(self, *links):
        return tuple(links)

    def rsvp(self, *links):
        return tuple(links)

    def link(self, title, url, price):
        return LinkEntry(link=LinkDetails(
            title=str(title)[1:-1].strip(),
            url=str(url)[1:-1].strip(),
            price=str(price).strip() if price is not None else None
        ))


class CalendarParser:
    """
    Parser for the event dialect of one month section.

    The grammar is compiled once; the instance holds no state between
    calls to parse() and can be shared by every section of a run.
    """

    def __init__(self, grammar: Optional[str] = None):
        """
        Compile the calendar grammar.

        Args:
            grammar: Grammar description; defaults to the packaged grammar
        """
        self.grammar = grammar if grammar is not None else load_grammar()
        self._parser = Lark(
            self.grammar,
            parser='lalr',
            lexer='contextual',
            transformer=CalendarTransformer(),
            maybe_placeholders=True
        )
        logger.info(f"Compiled calendar grammar version {GRAMMAR_VERSION}")

    def parse(self, text: str) -> Document:
        """
        Parse the text of one month section.

        Args:
            text: Section text, heading line included

        Returns:
            Parsed Document

        Raises:
            ParseError: If the text does not conform to the grammar
        """
        # every line of the grammar ends with a line break
        if not text.endswith('\n'):
            text += '\n'

        try:
            return self._parser.parse(text)
        except UnexpectedInput as e:
            raise ParseError.from_lark(e) from e
