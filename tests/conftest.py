"""Shared fixtures for calendar tests."""
import pytest

from calendar_parser.grammar import CalendarParser


SAMPLE_CALENDAR = """# Tech Events Calendar

Community maintained list of tech events.

## Table of Contents
- [March 2024](#march-2024)
- [April 2024](#april-2024)

## March 2024

### 5-7 PyCon Thailand 2024
**Topic:** #conference #python Python, Data Science
**Time:** 09:00-17:00 Talks
**Time:** 18:00-21:00+ After party
**Location:** Queen Sirikit National Convention Center (Plenary Hall 3)
**Summary:** Annual conference of the Python community.
> Three days of talks, sprints and workshops.
**Website:**
- [PyCon Thailand](https://th.pycon.org)
**Tickets:**
- [Early bird](https://tickets.example.com/pycon) 1,500 THB

### 12 Bangkok JavaScript Meetup
**Topic:** #meetup JavaScript
**Location:** True Digital Park
**Summary:** Monthly meetup of the Bangkok JavaScript community.
**RSVP:**
- [Meetup](https://www.meetup.com/bkkjs)

## April 2024

### 2 Data Science Night
**Topic:** #meetup Data Science
**Location:** Online
**Summary:** Talks about data pipelines.

### 13-15 Songkran Hackathon
**Topic:** #hackathon Open Data
**Time:** 10:00-18:00 Hacking
**Location:** Chiang Mai Maker Club
**Summary:** Weekend of building things with open data.

### 27 Flutter Bangkok
**Topic:** #meetup Flutter, Dart
**Location:** KBTG Building (Floor 7)
**Summary:** Mobile developers meetup.
**Website:**
- [Flutter Bangkok](https://flutterbkk.example.com)
"""


@pytest.fixture(scope='session')
def calendar_parser():
    """Compiled calendar parser shared by all tests."""
    return CalendarParser()


@pytest.fixture
def sample_calendar():
    """Calendar document with a preamble, a table of contents and two months."""
    return SAMPLE_CALENDAR
