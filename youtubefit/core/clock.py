from datetime import date


def get_today() -> date:
    """Current date for cooldown windows and week defaults (overridden in tests)."""
    return date.today()
