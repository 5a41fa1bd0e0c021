"""
docsite Mermaid CLI render hook

Renders diagram blocks ahead of time with the mermaid-cli `mmdc` binary so
the static output ships SVG instead of raw diagram source. Failed blocks are
replaced by an error panel and still marked processed, so the trigger does
not retry them forever.

The hook runs `mmdc` synchronously and blocks the event loop while it does,
so a surrounding asyncio timeout cannot interrupt it. `total_timeout` bounds
one hook call instead: each block gets what is left of it, and blocks reached
after it runs out get the error panel without being rendered.
"""

import html
import logging
import shutil
import subprocess
import tempfile
import time
from pathlib import Path

from docsite.sitelog import sitelog
from docsite.theme.diagrams import DiagramBlock, DiagramDocument

logger = logging.getLogger(__name__)

MMDC_EXECUTABLE = "mmdc"


def _extract_mmdc_error(stderr_text: str) -> str:
    lines = [line.strip() for line in (stderr_text or "").splitlines() if line.strip()]
    if not lines:
        return "unknown error"
    return "\n".join(lines[:8])


def _error_panel(block: DiagramBlock, message: str) -> str:
    return (
        f'<div class="mermaid-error">{html.escape(message)}</div>'
        f'<pre><code class="language-mermaid">{html.escape(block.source)}</code></pre>'
    )


class MermaidCliHook:
    """No-argument render hook bound to one page's diagram document."""

    def __init__(
        self,
        document: DiagramDocument,
        executable: str = MMDC_EXECUTABLE,
        timeout: float = 60.0,
        total_timeout: float | None = None,
    ):
        self.document = document
        self.executable = executable
        self.timeout = timeout
        self.total_timeout = total_timeout

    @staticmethod
    def available(executable: str = MMDC_EXECUTABLE) -> bool:
        return shutil.which(executable) is not None

    def __call__(self) -> None:
        deadline = None
        if self.total_timeout is not None:
            deadline = time.monotonic() + self.total_timeout

        for block in self.document.unprocessed():
            timeout = self.timeout
            if deadline is not None:
                timeout = min(timeout, deadline - time.monotonic())

            if timeout <= 0:
                message = f"not rendered: {self.total_timeout}s render budget used up"
                sitelog.diagram_error(message)
                block.rendered = _error_panel(block, message)
            else:
                try:
                    block.rendered = self._render_svg(block.source, timeout)
                except (OSError, RuntimeError, subprocess.SubprocessError) as e:
                    sitelog.diagram_error(str(e))
                    block.rendered = _error_panel(block, str(e))
            block.processed = True

    def _render_svg(self, source: str, timeout: float) -> str:
        with tempfile.TemporaryDirectory(prefix="docsite-mmdc-") as tmp:
            input_path = Path(tmp) / "diagram.mmd"
            output_path = Path(tmp) / "diagram.svg"
            input_path.write_text(source, encoding="utf-8")

            result = subprocess.run(
                [self.executable, "-i", str(input_path), "-o", str(output_path), "-q"],
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            if result.returncode != 0 or not output_path.exists():
                raise RuntimeError(f"mmdc failed: {_extract_mmdc_error(result.stderr)}")

            logger.debug(f"Rendered diagram ({len(source)} chars)")
            return output_path.read_text(encoding="utf-8")
