from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from csv_explorer.core.view_state import DEFAULT_COLUMN_WIDTH, ColumnLayout, ViewStateStore

logger = logging.getLogger(__name__)

MIN_COLUMN_WIDTH = 20


@dataclass(frozen=True)
class Pointer:
    x: float


class PointerCapture:
    """
    Stand-in for the pointer-move / pointer-release listeners a drag holds.

    Acquired once per gesture and released exactly once at gesture end.
    """

    def __init__(self) -> None:
        self.active = False
        self.acquired_count = 0
        self.released_count = 0

    def acquire(self) -> None:
        if self.active:
            raise RuntimeError("Pointer capture already held by another gesture")
        self.active = True
        self.acquired_count += 1

    def release(self) -> None:
        if not self.active:
            return
        self.active = False
        self.released_count += 1


@dataclass
class GestureHandle:
    column_index: int
    start_x: float
    start_width: float
    width: float
    finished: bool = False


class ResizeGesture:
    """
    Column drag-resize as an explicit gesture:

        handle = gesture.begin(index, pointer)
        gesture.update(handle, pointer)
        layout = gesture.end(handle)

    end() always releases the pointer capture; with commit=True it also writes
    the new width into the layout and persists it. Use ``drag`` to get the
    end() call on every exit path.
    """

    def __init__(
            self,
            store: ViewStateStore,
            layout: ColumnLayout,
            capture: Optional[PointerCapture] = None,
            min_width: float = MIN_COLUMN_WIDTH,
            max_width: Optional[float] = None,
            default_width: float = DEFAULT_COLUMN_WIDTH,
    ) -> None:
        self.store = store
        self.layout = layout
        self.capture = capture or PointerCapture()
        self.min_width = min_width
        self.max_width = max_width
        self.default_width = default_width

    def _clamp(self, width: float) -> float:
        width = max(self.min_width, width)
        if self.max_width is not None:
            width = min(self.max_width, width)
        return width

    def begin(self, column_index: int, pointer: Pointer) -> GestureHandle:
        self.capture.acquire()
        start_width = self.layout.width_for(column_index, self.default_width)
        return GestureHandle(
            column_index=column_index,
            start_x=pointer.x,
            start_width=start_width,
            width=start_width,
        )

    def update(self, handle: GestureHandle, pointer: Pointer) -> None:
        if handle.finished:
            return
        handle.width = self._clamp(handle.start_width + (pointer.x - handle.start_x))

    def end(self, handle: GestureHandle, commit: bool = True) -> ColumnLayout:
        if handle.finished:
            return self.layout
        handle.finished = True
        try:
            if commit:
                self.layout = self.layout.with_width(handle.column_index, handle.width)
                self.store.save(self.layout)
                logger.info(
                    "Column resized",
                    extra={"column_index": handle.column_index, "width": handle.width},
                )
        finally:
            self.capture.release()
        return self.layout

    @contextmanager
    def drag(self, column_index: int, pointer: Pointer) -> Iterator[GestureHandle]:
        """
        Scoped gesture. A normal exit commits the width; an exception releases
        the capture without committing and re-raises.
        """
        handle = self.begin(column_index, pointer)
        try:
            yield handle
        except BaseException:
            self.end(handle, commit=False)
            raise
        self.end(handle, commit=True)
