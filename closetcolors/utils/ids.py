"""
Closet Colors Analysis ID Utilities
Generate unique IDs for correlating analysis log lines.
"""
import uuid
from datetime import datetime


def generate_analysis_id(prefix: str = "clr") -> str:
    """
    Generate a unique analysis ID.

    Returns:
        ID of the form ``<prefix>-<YYYYmmddHHMMSS>-<8 hex chars>``
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"

