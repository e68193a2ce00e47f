MINUTES_PER_DAY = 24 * 60
MAX_INTERVAL_DAYS = 100 * 365

DEFAULT_EASE = 2.5
EASE_FLOOR = 1.3
AGAIN_EASE_PENALTY = 0.2
HARD_EASE_PENALTY = 0.15
EASY_EASE_BONUS = 0.15

HARD_MULTIPLIER = 1.2
EASY_BONUS = 1.3

FUZZ_THRESHOLD_DAYS = 2
FUZZ_MIN = 0.95      # multiplier lies in [FUZZ_MIN, FUZZ_MAX)
FUZZ_MAX = 1.05

DEFAULT_DECK_SETTINGS = {
    "learning_steps": (1, 10),   # minutes
    "graduating_interval": 1,    # days
    "easy_interval": 4,          # days
}
