"""Status conditions of Atlas custom resources."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ConditionType(str, Enum):
    READY = "Ready"
    PROJECT_READY = "ProjectReady"
    IP_ACCESS_LIST_READY = "IPAccessListReady"
    CLUSTER_READY = "ClusterReady"
    DATABASE_USER_READY = "DatabaseUserReady"


class ConditionStatus(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True)
class Condition:
    """The state of an Atlas custom resource at a certain point."""

    type: ConditionType
    status: ConditionStatus
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""

    def with_reason(self, reason: str) -> Condition:
        return replace(self, reason=reason)

    def with_message_regexp(self, msg: str) -> Condition:
        return replace(self, message=msg)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type.value,
            "status": self.status.value,
            "lastTransitionTime": (
                self.last_transition_time.astimezone(timezone.utc).strftime(_TIME_FORMAT)
                if self.last_transition_time is not None
                else None
            ),
        }
        if self.reason:
            result["reason"] = self.reason
        if self.message:
            result["message"] = self.message
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Condition:
        raw_time = data.get("lastTransitionTime")
        transition = (
            datetime.strptime(raw_time, _TIME_FORMAT).replace(tzinfo=timezone.utc)
            if raw_time
            else None
        )
        return cls(
            type=ConditionType(data["type"]),
            status=ConditionStatus(data["status"]),
            last_transition_time=transition,
            reason=data.get("reason", ""),
            message=data.get("message", ""),
        )


def true_condition(condition_type: ConditionType) -> Condition:
    """Return a condition of the given type with status True, without reason or message."""
    return Condition(type=condition_type, status=ConditionStatus.TRUE, last_transition_time=_now())


def false_condition(condition_type: ConditionType) -> Condition:
    """Return a condition of the given type with status False."""
    return Condition(type=condition_type, status=ConditionStatus.FALSE, last_transition_time=_now())


def ensure_condition_exists(condition: Condition, source: Iterable[Condition]) -> list[Condition]:
    """Return a copy of ``source`` with ``condition`` added or replacing one of the same type.

    The transition time is kept from the existing condition when its status is unchanged.
    """
    condition = replace(condition, last_transition_time=_now())
    target = list(source)
    for position, existing in enumerate(target):
        if existing.type == condition.type:
            if existing.status == condition.status:
                condition = replace(condition, last_transition_time=existing.last_transition_time)
            target[position] = condition
            return target
    target.append(condition)
    return target