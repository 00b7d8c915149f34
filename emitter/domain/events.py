"""Event value passed to handlers on dispatch."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Event(BaseModel):
    """One dispatch of a type.

    ``data`` is ``None`` when the dispatch carried no payload.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    data: Any = None
