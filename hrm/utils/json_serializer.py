"""
JSON encoding for audit log snapshots
"""
import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from hrm.utils.datetime_utils import format_timestamp


def _encode(value: Any) -> Any:
    """json.dumps fallback for values the stdlib encoder rejects"""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def dumps_snapshot(snapshot: Any) -> Optional[str]:
    """
    Serialize a before/after snapshot for the audit_logs text columns

    None stays NULL and strings are stored as given; anything else is JSON.
    """
    if snapshot is None:
        return None
    if isinstance(snapshot, str):
        return snapshot
    return json.dumps(snapshot, default=_encode, ensure_ascii=False)
