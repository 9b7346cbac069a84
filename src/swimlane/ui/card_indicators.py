"""Pure functions for building card indicator text."""

from datetime import date

from rich.text import Text

from swimlane.model.board import Card
from swimlane.ui.constants import ICON_ASSIGNEE, ICON_CALENDAR, PRIORITY_STYLES


def due_label(due: date, today: date) -> str:
    """Short relative label for a due date.

    today → "today", tomorrow → "1d", two days ago → "-2d"
    """
    days = (due - today).days
    if days == 0:
        return "today"
    return f"{days}d"


def build_footer_text(card: Card, today: date | None = None) -> Text:
    """Build footer indicators for a card.

    Priority in its colour, an assignee marker, and the due date
    (red once it is today or past).
    """
    today = today or date.today()
    parts: list[Text] = []

    if card.priority:
        parts.append(Text(card.priority, style=PRIORITY_STYLES.get(card.priority, "")))

    if card.assignee_id:
        parts.append(Text(ICON_ASSIGNEE))

    if card.due_date:
        style = "red" if card.due_date <= today else ""
        parts.append(Text(f"{ICON_CALENDAR}{due_label(card.due_date, today)}", style=style))

    if not parts:
        return Text()

    result = parts[0]
    for part in parts[1:]:
        result.append(" ")
        result.append(part)
    return result
