"""
docsite Diagram Renderer Trigger

Keeps diagram markup rendered without the page author calling a render
function by hand. While mounted, a background task polls the page's diagram
blocks and invokes the render hook whenever some are still unprocessed.

The render hook is an injected, optional capability: a no-argument callable
that renders pending blocks and marks them processed. It may be absent, in
which case every tick is a no-op.
"""

import asyncio
import html
import logging
import re
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

RenderHook = Callable[[], None]

DEFAULT_POLL_INTERVAL = 0.1

MERMAID_BLOCK_RE = re.compile(
    r'<div class="mermaid"(?P<attrs>[^>]*)>(?P<body>.*?)</div>',
    re.DOTALL,
)


@dataclass
class DiagramBlock:
    """One diagram element and its processed marker."""

    source: str
    processed: bool = False
    rendered: str = ""
    start: int = -1
    end: int = -1


class DiagramDocument:
    """The diagram blocks of one rendered page."""

    def __init__(self, blocks: list[DiagramBlock] | None = None, html_text: str = ""):
        self.blocks = blocks if blocks is not None else []
        self.html_text = html_text

    @classmethod
    def from_html(cls, html_text: str) -> "DiagramDocument":
        """Collect every `<div class="mermaid">` block of a page."""
        blocks = [
            DiagramBlock(
                source=html.unescape(match.group("body")).strip(),
                processed="data-processed" in match.group("attrs"),
                start=match.start(),
                end=match.end(),
            )
            for match in MERMAID_BLOCK_RE.finditer(html_text)
        ]
        return cls(blocks, html_text)

    def unprocessed(self) -> list[DiagramBlock]:
        return [b for b in self.blocks if not b.processed]

    def to_html(self) -> str:
        """Page HTML with rendered blocks swapped in and marked processed."""
        parts: list[str] = []
        cursor = 0
        for block in self.blocks:
            if block.start < 0 or not (block.processed and block.rendered):
                continue
            parts.append(self.html_text[cursor:block.start])
            parts.append(f'<div class="mermaid" data-processed="true">{block.rendered}</div>')
            cursor = block.end
        parts.append(self.html_text[cursor:])
        return "".join(parts)


class DiagramRenderTrigger:
    """
    Owned, cancellable poller for one mounted page.

    start() creates the polling task, stop() cancels it. A hook error
    raised inside poll_once() propagates to the caller; the background loop
    logs it with traceback and keeps ticking.
    """

    def __init__(
        self,
        document: DiagramDocument,
        render_hook: RenderHook | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        missing_hook_warn_after: int = 0,
    ):
        self.document = document
        self.render_hook = render_hook
        self.interval = interval
        self.missing_hook_warn_after = missing_hook_warn_after

        self._missing_hook_ticks = 0
        self._missing_hook_warned = False

        # Background poller task
        self._poll_task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def poll_once(self) -> bool:
        """Single tick. Returns True when the render hook was invoked."""
        pending = self.document.unprocessed()
        if not pending:
            self._missing_hook_ticks = 0
            return False

        if self.render_hook is None:
            self._missing_hook_ticks += 1
            if (
                self.missing_hook_warn_after > 0
                and self._missing_hook_ticks >= self.missing_hook_warn_after
                and not self._missing_hook_warned
            ):
                self._missing_hook_warned = True
                logger.warning(
                    f"{len(pending)} diagram block(s) still unrendered after "
                    f"{self._missing_hook_ticks} polls: no render hook available"
                )
            return False

        self.render_hook()
        return True

    async def _poll(self) -> None:
        """Background loop: tick, then sleep for the interval."""
        while True:
            try:
                self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Diagram render hook failed")
            await asyncio.sleep(self.interval)

    async def start(self) -> None:
        """Start the background poller."""
        if self._poll_task is not None:
            return
        self._missing_hook_ticks = 0
        self._missing_hook_warned = False
        self._poll_task = asyncio.create_task(self._poll())
        logger.debug(f"Diagram trigger started (polling every {self.interval}s)")

    async def stop(self) -> None:
        """Stop the background poller."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            try:
                await self._poll_task
            except asyncio.CancelledError:
                pass
            self._poll_task = None
            logger.debug("Diagram trigger stopped")

    async def wait_rendered(self, timeout: float) -> None:
        """Wait until no block is left unprocessed (asyncio.TimeoutError otherwise)."""

        async def _wait() -> None:
            while self.document.unprocessed():
                await asyncio.sleep(self.interval)

        await asyncio.wait_for(_wait(), timeout=timeout)
