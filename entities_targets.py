# entities_targets.py
#
# Host-page elements treated as destructible targets. The game never owns
# the element: it only hides it when shot and shows it again on exit.

from dataclasses import dataclass
from typing import Any, Iterable, List, Protocol

from config import TARGET_MIN_SIZE
from entities_utils import Rect


class TargetHandle(Protocol):
    """What the host must expose for each candidate element."""

    rect: Any
    overlay: bool

    def set_visible(self, visible: bool) -> None: ...


@dataclass
class PageTarget:
    handle: Any
    rect: Rect
    alive: bool = True

    def hide(self) -> None:
        self.alive = False
        self.handle.set_visible(False)

    def restore(self) -> None:
        self.handle.set_visible(True)


def is_eligible(rect, viewport_w, viewport_h, min_size=TARGET_MIN_SIZE):
    return (
        rect.width > min_size and rect.height > min_size
        and rect.x >= 0 and rect.y >= 0
        and rect.x + rect.width <= viewport_w
        and rect.y + rect.height <= viewport_h
    )


def scan_targets(handles: Iterable[TargetHandle], viewport_w, viewport_h) -> List[PageTarget]:
    """Snapshot the eligible handles; rectangles are frozen from here on."""
    targets = []
    for handle in handles:
        if getattr(handle, "overlay", False) or not getattr(handle, "visible", True):
            continue
        r = handle.rect
        rect = Rect(r.x, r.y, r.width, r.height)
        if is_eligible(rect, viewport_w, viewport_h):
            targets.append(PageTarget(handle=handle, rect=rect))
    return targets
