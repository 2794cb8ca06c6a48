# src/cephcsi_manifests/observers/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from .events import BaseEvent, new_ctx
from .interface import Observer

log = logging.getLogger("cephcsi_manifests")


class EventBus:
    def __init__(self, observers: Optional[List[Observer]] = None, *, run_id: Optional[str] = None):
        self._observers = list(observers or [])
        self.run_id = new_ctx(run_id)["run_id"]

    def ctx(self) -> dict[str, Any]:
        return new_ctx(self.run_id)

    def emit(self, event: BaseEvent) -> None:
        for ob in self._observers:
            try:
                ob.notify(event)
            except Exception:
                # a broken observer must not abort manifest generation
                log.warning("observer %s failed on %s", type(ob).__name__,
                            type(event).__name__, exc_info=True)
