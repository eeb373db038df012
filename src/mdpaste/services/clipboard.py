"""Clipboard sources for the paste command."""

from typing import Optional

import pyperclip
import structlog

from mdpaste.services.exceptions import ClipboardUnavailableError

logger = structlog.get_logger()


class SystemClipboard:
    """Reads the OS clipboard through pyperclip."""

    async def read_text(self) -> Optional[str]:
        """
        Read the clipboard's text content.

        Returns:
            Clipboard text ("" when the clipboard is empty)

        Raises:
            ClipboardUnavailableError: If no clipboard mechanism is available
                (e.g. a headless session without xclip/xsel/wl-clipboard)
        """
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.error("clipboard_unavailable", error=str(e))
            raise ClipboardUnavailableError(f"Could not read clipboard: {e}") from e

        logger.debug("clipboard_read", length=len(text or ""))
        return text


class TextSource:
    """Serves text that was read elsewhere (a file or stdin)."""

    def __init__(self, text: Optional[str]):
        self.text = text

    async def read_text(self) -> Optional[str]:
        return self.text
