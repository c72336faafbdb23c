"""Record validation hooks.

SQLModel table models skip pydantic validation on construction, so models
opt in by defining ``validate_record()``. The hook runs it for every new or
modified instance right before the session flushes, and aborts the flush
when any model reports errors.
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from src.crudwizard.core.db.errors import RecordValidationError


class ValidatingSession(Session):
    """Sync session class used under AsyncSession; validation hooks attach here."""


def _validate_pending(session: Session, flush_context: Any, instances: Any) -> None:
    errors: dict[str, list[str]] = {}
    for instance in (*session.new, *session.dirty):
        validate = getattr(instance, "validate_record", None)
        if validate is None:
            continue
        messages = validate()
        if messages:
            errors.setdefault(type(instance).__name__, []).extend(messages)
    if errors:
        raise RecordValidationError(errors)


def register_validation_hooks(session_class: type[Session] = ValidatingSession) -> None:
    """Run model validation before every flush of sessions of this class."""
    if event.contains(session_class, "before_flush", _validate_pending):
        return
    event.listen(session_class, "before_flush", _validate_pending)
