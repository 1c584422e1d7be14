"""Errors raised while parsing calendar sections."""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from processor.models import Section

END_OF_INPUT = '$END'

# Readable names for grammar terminals, used in error messages
TERMINAL_DESCRIPTIONS: Dict[str, str] = {
    '_MONTH_MARK': '"##" month heading',
    '_EVENT_MARK': '"###" event heading',
    '_TOPIC_MARK': '"**Topic:**"',
    '_TIME_MARK': '"**Time:**"',
    '_LOCATION_MARK': '"**Location:**"',
    '_SUMMARY_MARK': '"**Summary:**"',
    '_WEBSITE_MARK': '"**Website:**"',
    '_TICKET_MARK': '"**Tickets:**"',
    '_RSVP_MARK': '"**RSVP:**"',
    '_BULLET': '"-" list item',
    '_RANGE_SEP': '"-" range separator',
    '_NL': 'line break',
    'MONTH': 'month name',
    'YEAR': 'four digit year',
    'DAY': 'day of month',
    'TIME': 'time (HH:MM)',
    'AFTER': '"+"',
    'CATEGORY': '#category',
    'TOPICS': 'topic list',
    'PLACE': 'place name',
    'PLACE_DETAIL': '(place detail)',
    'DESCRIPTION_LINE': '"> " description line',
    'LINK_TITLE': '[link title]',
    'LINK_URL': '(link url)',
    'TEXT': 'text',
    END_OF_INPUT: 'end of section',
}


def describe_terminals(names: Iterable[str]) -> str:
    """Join readable descriptions of terminal names."""
    return ', '.join(sorted(TERMINAL_DESCRIPTIONS.get(name, name) for name in names))


def _position(value) -> int:
    # lark reports -1 or '?' when no position is known
    return value if isinstance(value, int) and value > 0 else 1


@dataclass(frozen=True)
class SourceLocation:
    """1-based position in a section's text."""
    line: int
    column: int


class ParseError(Exception):
    """
    Section text does not conform to the calendar grammar.

    Attributes:
        location: Line and column of the failure within the section text
        expected: Grammar terminals accepted at the failure point
        found: Offending text, or None at the end of the section
        section_title: Heading of the failing section, once known
        section_start_line: Document line where the failing section starts
    """

    def __init__(
        self,
        location: SourceLocation,
        expected: FrozenSet[str],
        found: Optional[str],
        section_title: Optional[str] = None,
        section_start_line: Optional[int] = None
    ):
        self.location = location
        self.expected = expected
        self.found = found
        self.section_title = section_title
        self.section_start_line = section_start_line
        self.message = self._build_message()
        super().__init__(self.message)

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def absolute_line(self) -> Optional[int]:
        """Line of the failure in the whole document, if the section is known."""
        if self.section_start_line is None:
            return None
        return self.section_start_line + self.location.line - 1

    @classmethod
    def from_lark(cls, error: UnexpectedInput) -> 'ParseError':
        """
        Convert a lark parsing failure.

        Args:
            error: Exception raised by the lark parser

        Returns:
            Equivalent ParseError
        """
        if isinstance(error, UnexpectedToken):
            expected = error.expected
            found = None if error.token.type == END_OF_INPUT else str(error.token)
        elif isinstance(error, UnexpectedCharacters):
            expected = error.allowed or set()
            found = error.char
        elif isinstance(error, UnexpectedEOF):
            expected = error.expected
            found = None
        else:
            expected = set()
            found = None

        return cls(
            location=SourceLocation(line=_position(error.line), column=_position(error.column)),
            expected=frozenset(str(name) for name in expected),
            found=found
        )

    def with_section(self, section: Section) -> 'ParseError':
        """Copy of this error carrying the section it was raised for."""
        return ParseError(
            location=self.location,
            expected=self.expected,
            found=self.found,
            section_title=section.title,
            section_start_line=section.start_line
        )

    def to_dict(self) -> dict:
        return {
            'message': self.message,
            'line': self.line,
            'column': self.column,
            'absolute_line': self.absolute_line,
            'section': self.section_title,
            'expected': sorted(self.expected),
            'found': self.found
        }

    def _build_message(self) -> str:
        message = f"Parse error at line {self.location.line} column {self.location.column}."
        if self.section_start_line is not None:
            message += (
                f" Section '{self.section_title}' starts at line {self.section_start_line}"
                f" (document line {self.absolute_line})."
            )
        found = 'end of section' if self.found is None else repr(self.found)
        if self.expected:
            message += f" Expected {describe_terminals(self.expected)} but {found} found."
        else:
            message += f" Unexpected {found}."
        return message
