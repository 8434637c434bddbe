"""CLI JSON output wrapper.

Wraps command results with schema metadata (schema_id, schema_version,
producer, produced_at) so scripted callers can detect format changes.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "build_result").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.
    """
    from jarforge import __version__

    wrapped = {
        "schema_id": schema_id,
        "schema_version": schema_version,
        "producer": f"jarforge-{__version__}",
        "produced_at": datetime.now(UTC).isoformat(),
        **data,
    }
    return json.dumps(wrapped, indent=2, default=str)
