"""Immutable records carrying a multi-step scenario's addresses and outcomes.

Each step produces a new ``WorkflowRecord`` that links to the record it
extended, so the full provenance of any key can be traced back to the step
that introduced it. Records never change once created.
"""

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from solders.pubkey import Pubkey

from .program.errors import MissingKeyError

logger = logging.getLogger(__name__)

WorkflowValue = Union[Pubkey, int, str]

ROOT_STEP = "start"
STEPS_KEY = "steps"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize(key: str, value: WorkflowValue) -> Union[int, str]:
    """Store addresses as base58 text so records serialize without conversion."""
    if key == STEPS_KEY:
        raise ValueError(f"'{STEPS_KEY}' is reserved for the step history")
    if isinstance(value, Pubkey):
        return str(value)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(
            f"Workflow value for '{key}' must be an address, int or str, "
            f"got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class WorkflowRecord:
    """Snapshot of a scenario after one step.

    ``fields`` holds every key accumulated so far; ``added`` only the keys
    this step wrote.
    """

    step: str
    fields: Mapping[str, Union[int, str]]
    added: Mapping[str, Union[int, str]]
    signature: Optional[str] = None
    timestamp: str = ""
    parent: Optional["WorkflowRecord"] = None

    @classmethod
    def start(
        cls,
        fields: Optional[Mapping[str, WorkflowValue]] = None,
        timestamp: Optional[str] = None,
    ) -> "WorkflowRecord":
        """Create the root record of a new workflow."""
        values = {key: _normalize(key, value) for key, value in (fields or {}).items()}
        return cls(
            step=ROOT_STEP,
            fields=MappingProxyType(dict(values)),
            added=MappingProxyType(dict(values)),
            timestamp=timestamp or _now(),
        )

    def extend(
        self,
        step: str,
        fields: Mapping[str, WorkflowValue],
        signature: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> "WorkflowRecord":
        """Return a new record with ``fields`` merged over this one's."""
        added = {key: _normalize(key, value) for key, value in fields.items()}
        merged = dict(self.fields)
        merged.update(added)
        return WorkflowRecord(
            step=step,
            fields=MappingProxyType(merged),
            added=MappingProxyType(added),
            signature=signature,
            timestamp=timestamp or _now(),
            parent=self,
        )

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def resolve(self, key: str) -> Pubkey:
        """Look up an address written by an earlier step.

        Raises:
            MissingKeyError: If no step produced ``key``
        """
        if key not in self.fields:
            raise MissingKeyError(key, self.step)
        return Pubkey.from_string(str(self.fields[key]))

    def resolve_int(self, key: str) -> int:
        """Look up an integer written by an earlier step.

        Raises:
            MissingKeyError: If no step produced ``key``
        """
        if key not in self.fields:
            raise MissingKeyError(key, self.step)
        return int(self.fields[key])

    def history(self) -> List["WorkflowRecord"]:
        """Records from the root up to and including this one."""
        chain = list(self._ancestry())
        chain.reverse()
        return chain

    def _ancestry(self) -> Iterator["WorkflowRecord"]:
        record: Optional[WorkflowRecord] = self
        while record is not None:
            yield record
            record = record.parent

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the persisted JSON shape."""
        data: Dict[str, Any] = dict(self.fields)
        data[STEPS_KEY] = [
            {
                "step": record.step,
                "signature": record.signature,
                "timestamp": record.timestamp,
                "fields": dict(record.added),
            }
            for record in self.history()
        ]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowRecord":
        """Rebuild a record chain from its persisted JSON shape.

        Raises:
            ValueError: If the step history is missing or empty
        """
        steps = data.get(STEPS_KEY)
        if not steps:
            raise ValueError("Workflow data has no step history")

        first = steps[0]
        values = {
            key: _normalize(key, value) for key, value in first.get("fields", {}).items()
        }
        record = cls(
            step=first.get("step", ROOT_STEP),
            fields=MappingProxyType(dict(values)),
            added=MappingProxyType(dict(values)),
            signature=first.get("signature"),
            timestamp=first.get("timestamp") or _now(),
        )
        for entry in steps[1:]:
            record = record.extend(
                entry["step"],
                entry.get("fields", {}),
                signature=entry.get("signature"),
                timestamp=entry.get("timestamp"),
            )
        return record


class WorkflowStore:
    """JSON file holding the latest record of one workflow."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, record: WorkflowRecord) -> None:
        """Write ``record`` atomically, replacing any previous contents."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(record.to_dict(), f, indent=2)
        os.replace(tmp_path, self.path)
        logger.info(f"Saved workflow step '{record.step}' to {self.path}")

    def load(self) -> WorkflowRecord:
        """Read the latest record back, with its full history."""
        with open(self.path, "r") as f:
            data = json.load(f)
        record = WorkflowRecord.from_dict(data)
        logger.info(f"Loaded workflow at step '{record.step}' from {self.path}")
        return record
