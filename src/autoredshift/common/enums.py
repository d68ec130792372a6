from enum import Enum


class DaySection(Enum):
    """Coarse classification of the time elapsed since waking up.

    The value doubles as the display name and as the key of the matching
    wallpaper entry in the config file.
    """

    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"

    def __str__(self) -> str:
        return self.value
