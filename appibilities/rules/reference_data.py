"""Reference data — device display sizes and typography conventions.

Sizes are logical points, ``WIDTHxHEIGHT``. Portrait and landscape are listed
separately because artboard matching compares width first.
"""

# ──────────────────────────────────────────────────────────────────────
# DISPLAY SIZES
# ──────────────────────────────────────────────────────────────────────

APPLE_WATCH_SIZES: list[str] = [
    "136x170", "170x136",
    "156x195", "195x156",
    "162x197", "197x162",
    "184x224", "224x184",
    "176x215", "215x176",
    "198x242", "242x198",
]

APPLE_TV_SIZES: list[str] = ["1920x1080", "1080x1920"]

TOUCH_BAR_SIZES: list[str] = ["1085x30"]

IPHONE_SIZES: list[str] = [
    "375x667", "667x375",
    "375x812", "812x375",
    "414x896", "896x414",
    "390x844", "844x390",
    "428x926", "926x428",
]

IPAD_SIZES: list[str] = [
    "768x1024", "1024x768",
    "744x1133", "1133x744",
    "810x1080", "1080x810",
    "834x1112", "1112x834",
    "820x1180", "1180x820",
    "1024x1366", "1366x1024",
]

APPLE_DISPLAY_SIZES: list[str] = (
    APPLE_WATCH_SIZES + APPLE_TV_SIZES + TOUCH_BAR_SIZES + IPHONE_SIZES + IPAD_SIZES
)


# ──────────────────────────────────────────────────────────────────────
# TAP TARGETS
# ──────────────────────────────────────────────────────────────────────

# Human Interface Guidelines minimum hit area, in points
MIN_TAP_TARGET = 44

# Symbol instance names that usually mean "something you tap"
TAPPABLE_NAME_PATTERN = ".*(action|button|btn|cta|icon|link).*"


# ──────────────────────────────────────────────────────────────────────
# TYPOGRAPHY
# ──────────────────────────────────────────────────────────────────────

ALLOWED_FONT_WEIGHTS: list[str] = ["Regular", "Medium", "Semibold", "Bold"]

# San Francisco switches from the Text to the Display cut at this size
SF_DISPLAY_MIN_SIZE = 20

