"""Authorization policy — pure decisions, no I/O.

``can`` answers whether ``role``/``actor_id`` may perform ``action`` on an
optional resource (an object with ``organizer_id`` and ``approved``).
Every role is handled explicitly for every action, so adding a member to
``Role`` fails loudly here until the rules cover it.
"""
import enum
from dataclasses import dataclass
from typing import Any, Optional

from eventhub.errors import AuthorizationError
from eventhub.models.user import Role


class Action(str, enum.Enum):
    create_event = "create_event"
    approve_event = "approve_event"
    update_event = "update_event"
    delete_event = "delete_event"
    list_events = "list_events"
    rsvp_event = "rsvp_event"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def _deny(reason: str) -> Decision:
    return Decision(False, reason)


def _is_owner(actor_id: str, resource: Any) -> bool:
    return resource is not None and resource.organizer_id == actor_id


def sees_pending_events(role: Role) -> bool:
    """Whether ``role`` may see events that are still awaiting approval."""
    if role == Role.admin:
        return True
    if role in (Role.organizer, Role.attendee):
        return False
    raise ValueError(f"Unknown role: {role!r}")


def can(role: Role, actor_id: str, action: Action, resource: Optional[Any] = None) -> Decision:
    if role not in (Role.admin, Role.organizer, Role.attendee):
        raise ValueError(f"Unknown role: {role!r}")

    if action == Action.create_event:
        if role in (Role.admin, Role.organizer):
            return ALLOW
        return _deny("Requires ORGANIZER or ADMIN role")

    if action == Action.approve_event:
        if role == Role.admin:
            return ALLOW
        return _deny("Requires ADMIN role")

    if action in (Action.update_event, Action.delete_event):
        if role == Role.admin or _is_owner(actor_id, resource):
            return ALLOW
        verb = "update" if action == Action.update_event else "delete"
        return _deny(f"Not authorized to {verb} this event")

    if action == Action.list_events:
        if resource is None or resource.approved or sees_pending_events(role):
            return ALLOW
        return _deny("Event is not approved yet")

    if action == Action.rsvp_event:
        if resource is None:
            raise ValueError("rsvp_event needs the target event")
        if resource.approved or role == Role.admin:
            return ALLOW
        return _deny("Event not approved yet")

    raise ValueError(f"Unknown action: {action!r}")


def require(role: Role, actor_id: str, action: Action, resource: Optional[Any] = None) -> None:
    """Raise ``AuthorizationError`` unless ``can`` allows the action."""
    decision = can(role, actor_id, action, resource)
    if not decision:
        raise AuthorizationError(decision.reason)
