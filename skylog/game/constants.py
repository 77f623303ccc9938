"""
SKYLOG Game Constants
Save store names and event types.
"""

# Save database
SAVE_KEY_PREFIX = "skylog_"
STORE_NAMES = ("player", "planes", "game", "stories")

# Game events
EVENT_TYPES = ("weather", "festival", "incident", "special")

# Driver status output
STATUS_EVERY_TICKS = 60
