"""
Helpers that slice TikTok's embedded page state out of raw HTML.
"""
import json
from typing import Any, Dict

from .exceptions import ExtractionError

UNIVERSAL_DATA_ID = "__UNIVERSAL_DATA_FOR_REHYDRATION__"
UNIVERSAL_DATA_MARKER = f'<script id="{UNIVERSAL_DATA_ID}" type="application/json">'
SCRIPT_END_MARKER = "</script>"

LEGACY_STATE_MARKER = "window['SIGI_STATE']="
LEGACY_RETRY_MARKER = ";window['SIGI_RETRY']="


def extract_embedded_state(html: str) -> str:
    """
    Return the raw JSON text of the rehydration script tag.

    Args:
        html: Page HTML

    Returns:
        JSON text between the opening script marker and the next closing tag

    Raises:
        ExtractionError: if the marker is not present
    """
    _, found, rest = html.partition(UNIVERSAL_DATA_MARKER)
    if not found:
        raise ExtractionError(f"{UNIVERSAL_DATA_ID} script tag not found in page")
    end = rest.find(SCRIPT_END_MARKER)
    if end == -1:
        raise ExtractionError(f"{UNIVERSAL_DATA_ID} script tag is not closed")
    return rest[:end]


def parse_state(text: str) -> Dict[str, Any]:
    return json.loads(text)


def extract_legacy_state(html: str) -> Dict[str, Any]:
    """
    Parse state from the older page layout that assigned it to a global.

    Deprecated: current pages embed the state in a dedicated script tag.
    """
    _, found, rest = html.partition(LEGACY_STATE_MARKER)
    if not found:
        raise ExtractionError("SIGI_STATE assignment not found in page")
    end = rest.find(LEGACY_RETRY_MARKER)
    if end == -1:
        raise ExtractionError("SIGI_STATE assignment is not terminated")
    return parse_state(rest[:end])
