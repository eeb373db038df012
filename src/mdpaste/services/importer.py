"""Paste workflow: clipboard markdown into the active note or new notes.

With a focused note the whole payload is appended to it. Without one, the
payload is split at its top-level headings and each section becomes a new
note. Per-line and per-section failures are skipped; anything else aborts
the paste and is reported once.
"""

from typing import Optional

import structlog

from md_outline.builder import BuildStats, OutlineBuilder, split_lines
from md_outline.splitter import split_sections
from mdpaste.models.config import ImportConfig
from mdpaste.models.result import PasteResult
from mdpaste.services.host import ClipboardSource, Notifier, Record, RecordStore, Workspace

logger = structlog.get_logger()

APPEND_TOAST_MS = 3000
IMPORT_TOAST_MS = 4000


class MarkdownImporter:
    """Runs the paste command against injected collaborators.

    Example:
        >>> importer = MarkdownImporter(clipboard, workspace, store, notifier)
        >>> result = await importer.paste_markdown()
        >>> result.created_count
        2
    """

    def __init__(
        self,
        clipboard: ClipboardSource,
        workspace: Workspace,
        store: RecordStore,
        notifier: Notifier,
        settings: Optional[ImportConfig] = None,
    ):
        """Initialize importer.

        Args:
            clipboard: Source of the markdown payload
            workspace: Reports the focused note and handles navigation
            store: Creates and looks up notes
            notifier: Shows results to the user
            settings: Conversion settings (defaults if None)
        """
        self.clipboard = clipboard
        self.workspace = workspace
        self.store = store
        self.notifier = notifier
        self.settings = settings or ImportConfig()

    def _builder(self, record: Record) -> OutlineBuilder:
        return OutlineBuilder(
            record,
            code_language=self.settings.code_language,
            indent_width=self.settings.indent_width,
        )

    async def paste_markdown(self) -> Optional[PasteResult]:
        """Read the clipboard and paste it.

        Returns:
            PasteResult, or None if the clipboard was empty or the paste failed
        """
        try:
            text = await self.clipboard.read_text()
            if not text or not text.strip():
                logger.info("paste_skipped_empty_input")
                self.notifier.notify(
                    "Clipboard is empty",
                    "Copy some markdown text first!",
                    level="warning",
                )
                return None

            active = self.workspace.get_active_record()
            if active is not None:
                stats = await self.paste_into_note(active, text)
                result = PasteResult(
                    mode="append",
                    items_created=stats.created,
                    items_dropped=stats.dropped,
                )
                self.notifier.notify(
                    "Paste Complete", result.summary(), auto_dismiss_ms=APPEND_TOAST_MS
                )
                logger.info("paste_appended", created=stats.created, dropped=stats.dropped)
                return result

            result = await self.import_sections(text)
            if result.record_ids:
                self.workspace.navigate_to(result.record_ids[0])
            self.notifier.notify(
                "Import Complete", result.summary(), auto_dismiss_ms=IMPORT_TOAST_MS
            )
            logger.info(
                "paste_imported",
                notes=result.created_count,
                created=result.items_created,
                dropped=result.items_dropped,
            )
            return result

        except Exception as e:
            logger.error("paste_failed", error=str(e), exc_info=True)
            self.notifier.notify(
                "Paste Failed",
                str(e) or "Could not read clipboard.",
                level="error",
            )
            return None

    async def import_sections(self, text: str) -> PasteResult:
        """Create one note per section of text.

        Sections whose note can't be created are skipped.
        """
        sections = split_sections(
            text,
            default_title=self.settings.default_title,
            fallback_title=self.settings.fallback_title,
        )
        logger.info("sections_split", count=len(sections))

        record_ids: list[str] = []
        totals = BuildStats()
        for section in sections:
            outcome = await self.create_note_from_markdown(section.title, section.body)
            if outcome is None:
                continue
            record_id, stats = outcome
            record_ids.append(record_id)
            totals.created += stats.created
            totals.dropped += stats.dropped

        return PasteResult(
            mode="import",
            record_ids=record_ids,
            items_created=totals.created,
            items_dropped=totals.dropped,
        )

    async def paste_into_note(self, record: Record, markdown: str) -> BuildStats:
        """Append markdown after the last existing item of a note."""
        existing = await record.get_line_items()
        last_item = existing[-1] if existing else None

        stats = await self._builder(record).build(split_lines(markdown), last_item)
        await record.commit()
        return stats

    async def create_note_from_markdown(
        self, title: str, markdown: str
    ) -> Optional[tuple[str, BuildStats]]:
        """Create a note titled `title` holding markdown.

        Returns:
            (record id, build stats), or None if the note couldn't be created
        """
        record_id = await self.store.create_new_record(title)
        if not record_id:
            logger.warning("record_creation_failed", title=title)
            return None

        record = self.store.get_record(record_id)
        if record is None:
            logger.warning("record_lookup_failed", title=title, record_id=record_id)
            return None

        stats = await self._builder(record).build(split_lines(markdown))
        await record.commit()
        logger.info(
            "section_imported",
            title=title,
            record_id=record_id,
            created=stats.created,
            dropped=stats.dropped,
        )
        return record_id, stats
