"""Wire message for rule change broadcasts.

JSON document published on the rule change channel:

    {
        "message_id": "0190f1c2-...",      # uuid7, for log correlation
        "type": "rule_set_changed",         # or "full_reload"
        "rule_set_id": "checkout",          # null for ungrouped / full reload
        "published_at": "2026-01-01T00:00:00+00:00"
    }
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from uuid_extensions import uuid7

from src.domain.value_objects.propagation_scope import (
    FullReload,
    PropagationScope,
    RuleSetScoped,
)

type RuleChangeType = Literal["rule_set_changed", "full_reload"]

RULE_SET_CHANGED: RuleChangeType = "rule_set_changed"
FULL_RELOAD: RuleChangeType = "full_reload"


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleChangeMessage:
    """Serialized form of a PropagationScope.

    Attributes:
        type: "rule_set_changed" or "full_reload".
        rule_set_id: Changed set (None for ungrouped rules or full reload).
        message_id: Unique id of this broadcast.
        published_at: When the control plane published the message.
    """

    type: RuleChangeType
    rule_set_id: str | None = None
    message_id: str = field(default_factory=lambda: str(uuid7()))
    published_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_scope(cls, scope: PropagationScope) -> "RuleChangeMessage":
        """Build the message announcing a propagation scope."""
        match scope:
            case FullReload():
                return cls(type=FULL_RELOAD)
            case RuleSetScoped(rule_set_id=rule_set_id):
                return cls(type=RULE_SET_CHANGED, rule_set_id=rule_set_id)

    def to_scope(self) -> PropagationScope:
        """Convert back to the propagation scope nodes act on."""
        if self.type == FULL_RELOAD:
            return FullReload()
        return RuleSetScoped(rule_set_id=self.rule_set_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message_id": self.message_id,
            "type": self.type,
            "rule_set_id": self.rule_set_id,
            "published_at": self.published_at.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleChangeMessage":
        """Parse a decoded message.

        Args:
            data: Decoded JSON object.

        Returns:
            RuleChangeMessage: Parsed message.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the type or timestamp is invalid.
        """
        change_type = data["type"]
        if change_type not in (RULE_SET_CHANGED, FULL_RELOAD):
            raise ValueError(f"Unknown rule change type: {change_type!r}")

        rule_set_id = data.get("rule_set_id")
        if rule_set_id is not None and not isinstance(rule_set_id, str):
            raise ValueError("rule_set_id must be a string or null")

        return cls(
            type=change_type,
            rule_set_id=rule_set_id,
            message_id=str(data["message_id"]),
            published_at=datetime.fromisoformat(data["published_at"]),
        )

    @classmethod
    def from_json(cls, payload: str | bytes) -> "RuleChangeMessage":
        """Parse a raw pub/sub payload.

        Raises:
            json.JSONDecodeError: If the payload is not JSON.
            KeyError: If a required key is missing.
            ValueError: If a field is invalid or the payload is not an object.
        """
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("Rule change message must be a JSON object")
        return cls.from_dict(data)
