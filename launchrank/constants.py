# --- Score Bands ---
# Only the first qualifying tier contributes; bonuses keep tiers in separate bands.

NAME_BONUS = 20
MID_BONUS = 10


# --- Search Precision ---
# Minimum raw match score for a fuzzy hit.

PRECISION_LEVELS: dict[str, int] = {
    "regular": 50,
    "low": 20,
    "none": 0,
}
DEFAULT_PRECISION = PRECISION_LEVELS["regular"]


# --- Display Labels ---

AREA_LABEL = "Area"
SUBTITLE_PREPOSITION = "in"
APPLICATION_LABEL = "Application"
ALTERNATIVE_NAME_LABEL = "Alternative names"
COMMAND_LABEL = "Command"
NOTE_LABEL = "Note"

# Width of `Area "` in the rendered subtitle, so area offsets line up with it.
AREA_PREFIX_WIDTH = len(f'{AREA_LABEL} "')


# --- Results ---

DEFAULT_MAX_RESULTS = 20
