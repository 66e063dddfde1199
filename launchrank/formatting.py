from launchrank.constants import (
    ALTERNATIVE_NAME_LABEL,
    APPLICATION_LABEL,
    AREA_LABEL,
    COMMAND_LABEL,
    NOTE_LABEL,
    SUBTITLE_PREPOSITION,
)
from launchrank.models import Entry


def format_title(entry: Entry) -> str:
    return entry.name + (entry.glyph or "")


def format_subtitle(entry: Entry) -> str:
    return f'{AREA_LABEL} "{entry.area}" {SUBTITLE_PREPOSITION} {entry.type}'


def format_tooltip(entry: Entry) -> str:
    """Multi-line tooltip; the command is shown as written, placeholders unexpanded."""
    lines = [
        f"{APPLICATION_LABEL}: {entry.type}",
        f"{AREA_LABEL}: {entry.area}",
    ]
    if entry.alt_names:
        lines.append(f"{ALTERNATIVE_NAME_LABEL}: {', '.join(entry.alt_names)}")
    lines.append(f"{COMMAND_LABEL}: {entry.command}")

    text = "\n".join(lines)
    if entry.note:
        text += f"\n\n{NOTE_LABEL}: {entry.note}"
    return text
