"""Theme label value object."""

THEME_NOT_IDENTIFIED = "THEME NOT IDENTIFIED"


def is_identified(theme: str | None) -> bool:
    return bool(theme) and theme != THEME_NOT_IDENTIFIED
