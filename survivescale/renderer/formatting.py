"""Formatting helpers for money and health."""

BILLION = 1_000_000_000
MILLION = 1_000_000

HEALTH_BAR_WIDTH = 10


def format_money(amount: int) -> str:
    """Format money in compact form, e.g. ``$1.07B``, ``$2.50M`` or ``$12,345``."""
    if amount >= BILLION:
        return f"${amount / BILLION:.2f}B"
    elif amount >= MILLION:
        return f"${amount / MILLION:.2f}M"
    return f"${amount:,}"


def health_percent(health: int) -> int:
    """Clamp health to a 0-100 percentage."""
    return max(0, min(100, health))


def health_bar(health: int, width: int = HEALTH_BAR_WIDTH) -> str:
    """Render health as a bar of filled and empty blocks.

    Healthy companies (above 60%) show green blocks, weaker ones red.
    """
    percent = health_percent(health)
    filled = round(percent * width / 100)
    block = "🟩" if percent > 60 else "🟥"
    return block * filled + "⬜" * (width - filled)
