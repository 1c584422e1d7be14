"""JSON serialization of event records."""
import json
from typing import Iterable, Optional

from processor.models import Event


def events_to_json(events: Iterable[Event], indent: Optional[int] = 2) -> str:
    """
    Serialize events as a JSON array.

    Args:
        events: Event records in output order
        indent: Indentation passed to json.dumps (default: 2)

    Returns:
        JSON document
    """
    return json.dumps(
        [event.to_dict() for event in events],
        indent=indent,
        ensure_ascii=False
    )
