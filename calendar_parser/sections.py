"""Splitting of the calendar document into heading sections."""
import logging
import re
from typing import Iterable, List, Optional

from processor.models import Section

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r'\r\n|\r|\n')

# H2 only: "## Title", never "# Title" or "### Title"
HEADING_PATTERN = re.compile(r'\s*##(?=[^#])(.*)')

MONTH_TITLE_PATTERN = re.compile(r'\w+\s*\d+')


def split_sections(text: str) -> List[Section]:
    """
    Split document text into sections at H2 heading lines.

    Args:
        text: Full document text

    Returns:
        Sections in document order; text before the first heading forms
        an untitled section
    """
    sections: List[Section] = []
    title: Optional[str] = None
    start_line = 0
    lines: List[str] = []

    for index, line in enumerate(LINE_BREAK_PATTERN.split(text), start=1):
        heading = HEADING_PATTERN.match(line)
        if heading or not lines:
            if lines:
                sections.append(Section(title, start_line, '\n'.join(lines)))
            title = heading.group(1).strip() if heading else None
            start_line = index
            lines = [line]
        else:
            lines.append(line)

    sections.append(Section(title, start_line, '\n'.join(lines)))
    logger.debug(f"Split document into {len(sections)} sections")
    return sections


def is_month_title(title: Optional[str]) -> bool:
    """Check whether a heading reads like "<Month> <Year>"."""
    return MONTH_TITLE_PATTERN.search(title or '') is not None


def filter_month_sections(sections: Iterable[Section]) -> List[Section]:
    """
    Keep only sections whose heading looks like a month and a year.

    Args:
        sections: Sections in document order

    Returns:
        Matching sections, order preserved
    """
    return [section for section in sections if is_month_title(section.title)]
