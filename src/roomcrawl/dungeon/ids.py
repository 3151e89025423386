from __future__ import annotations

import itertools


class IdFactory:
    """Sequential identifiers scoped to one floor.

    Rooms and content share one counter so every id on a floor is unique.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def room_id(self) -> str:
        return f"room_{next(self._counter)}"

    def content_id(self) -> str:
        return f"content_{next(self._counter)}"
