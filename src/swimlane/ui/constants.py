"""Icons and labels used across the board UI."""

ICON_BOARD = "📋"
ICON_ARCHIVED = "🗄"
ICON_CALENDAR = "📅"
ICON_ASSIGNEE = "👤"
ICON_LOCKED = "🔒"

ICON_SYNC_IDLE = "✔"
ICON_SYNC_ACTIVE = "⟳"
ICON_SYNC_FAILED = "✖"

PRIORITY_STYLES = {
    "low": "green",
    "medium": "yellow",
    "high": "dark_orange",
    "urgent": "bold red",
}
