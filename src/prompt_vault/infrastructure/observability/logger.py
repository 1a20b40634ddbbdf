from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any, TypeAlias

from pydantic import ValidationError

from prompt_vault.models.events import DEFAULT_EVENT, VAULT_EVENT_SCHEMAS, VAULT_NAMESPACE

EventData: TypeAlias = Mapping[str, Any]


def qualify_event_name(event_name: str, namespace: str) -> str:
    """Prefix ``event_name`` with ``namespace`` unless it is already under it."""

    name = (event_name or "").strip().strip(".")
    ns = (namespace or "").strip().strip(".")
    if not name:
        return f"{ns}.invalid_event" if ns else "invalid_event"
    if not ns or name == ns or name.startswith(f"{ns}."):
        return name
    return f"{ns}.{name}"


def _validate_payload(full_event: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Registered vault events must match their schema; everything else passes through."""

    schema = VAULT_EVENT_SCHEMAS.get(full_event)
    if schema is None:
        if full_event.startswith(f"{VAULT_NAMESPACE}."):
            raise ValueError(f"Unknown vault event '{full_event}' (add to VAULT_EVENT_SCHEMAS)")
        return payload

    try:
        model = schema.model_validate(payload, strict=True)
    except ValidationError as e:
        raise ValueError(f"Invalid payload for event '{full_event}': {e}") from e
    return model.model_dump(mode="python")


class VaultLogger(logging.LoggerAdapter):
    """
    LoggerAdapter that:
    - stamps each record with session_id + event_id
    - adds a default event for plain log lines
    - provides .event() for domain events validated against their payload schema
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        namespace: str = VAULT_NAMESPACE,
        session_id: str | None = None,
    ) -> None:
        self._namespace = namespace
        self._session_id = session_id or uuid.uuid4().hex
        super().__init__(logger, {"namespace": namespace, "session_id": self._session_id})

    @property
    def session_id(self) -> str:
        return self._session_id

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        caller_extra = kwargs.pop("extra", None)
        extra = dict(self.extra or {})

        if caller_extra is not None:
            if not isinstance(caller_extra, Mapping):
                raise TypeError("logging 'extra' must be a mapping")
            extra.update(caller_extra)

        extra["session_id"] = self._session_id
        extra["event_id"] = str(extra.get("event_id") or uuid.uuid4().hex)
        extra.setdefault("event", qualify_event_name(DEFAULT_EVENT, self._namespace))

        data = extra.get("data")
        if data is not None and not isinstance(data, Mapping):
            extra["data"] = {"value": data}

        kwargs["extra"] = extra
        return msg, kwargs

    def event(
        self,
        name: str,
        *,
        message: str | None = None,
        level: int = logging.INFO,
        data: EventData | None = None,
        **fields: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return

        full_name = qualify_event_name(name, self._namespace)

        payload: dict[str, Any] = {}
        if data:
            payload.update(dict(data))
        if fields:
            payload.update(fields)
        payload = _validate_payload(full_name, payload)

        extra: dict[str, Any] = {"event": full_name}
        if payload:
            extra["data"] = payload

        self.log(level, message or full_name, extra=extra)


class NullLogger(VaultLogger):
    """A VaultLogger that discards all log/event output."""

    def __init__(self, *, session_id: str = "null") -> None:
        base_logger = logging.Logger("prompt_vault.null")
        base_logger.addHandler(logging.NullHandler())
        base_logger.propagate = False
        base_logger.disabled = True
        super().__init__(base_logger, session_id=session_id)

    def __bool__(self) -> bool:
        return False


__all__ = ["NullLogger", "VaultLogger", "qualify_event_name"]
