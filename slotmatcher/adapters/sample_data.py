"""
Bundled sample request for trying the matcher without an upstream calendar.
"""

import json
from pathlib import Path
from typing import Any, Dict

SAMPLE_REQUEST_FILE = Path(__file__).parent / "sample_request.json"


def load_sample_request() -> Dict[str, Any]:
    """Load the five-employee sample request from sample_request.json."""
    with open(SAMPLE_REQUEST_FILE, "r", encoding="utf-8") as f:
        return json.load(f)
