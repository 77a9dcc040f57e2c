from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, Optional

from .results import VocabOut

EXPORT_PREFIX = "jlpt-vocab-export"


def export_filename(kind: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{EXPORT_PREFIX}-{today.isoformat()}.{kind}"


def to_csv(entries: Iterable[VocabOut], include_created_at: bool = True) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    if include_created_at:
        writer.writerow(["word", "created_at"])
        for e in entries:
            writer.writerow([e.word, e.created_at.isoformat()])
    else:
        writer.writerow(["word"])
        for e in entries:
            writer.writerow([e.word])
    return buf.getvalue()


def to_markdown(
    entries: Iterable[VocabOut],
    style: str = "table",
    exported_on: Optional[date] = None,
) -> str:
    """
    Render the collection as Markdown.
    style="table" gives a Word / Added Date table, style="list" a bullet list.
    """
    if style not in ("table", "list"):
        raise ValueError("style must be 'table' or 'list'")

    items = list(entries)
    exported_on = exported_on or date.today()
    lines = [
        "# JLPT Vocabulary Export",
        "",
        f"Exported on: {exported_on.isoformat()}",
        f"Total words: {len(items)}",
        "",
    ]
    if style == "table":
        lines.append("| Word | Added Date |")
        lines.append("|---|---|")
        for e in items:
            word = e.word.replace("|", "\\|")
            lines.append(f"| {word} | {e.created_at.date().isoformat()} |")
    else:
        lines.extend(f"- {e.word}" for e in items)

    return "\n".join(lines) + "\n"
