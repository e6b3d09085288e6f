"""Internal constants shared across the library."""

BASE_URL = "https://jsonplaceholder.typicode.com/posts"
USER_AGENT = "quotesync/0.1"

#: Category filter value meaning "no filter".
ALL_CATEGORIES = "all"

#: Category given to remote quotes that arrive without one.
SERVER_CATEGORY = "Server"

#: Completed push results kept until drained by ``wait_for_pushes``; older ones are dropped.
MAX_PUSH_RESULTS = 100

# ------------------------------------------------------------------
# Storage keys
# ------------------------------------------------------------------

QUOTES_KEY = "quotes"
SELECTED_CATEGORY_KEY = "selectedCategory"
LAST_VIEWED_KEY = "lastViewedQuote"

# ------------------------------------------------------------------
# Seed collection used when the durable cache is empty
# ------------------------------------------------------------------

DEFAULT_QUOTES: tuple[tuple[str, str], ...] = (
    (
        "The only limit to our realization of tomorrow is our doubts of today.",
        "Motivational",
    ),
    (
        "Life is really simple, but we insist on making it complicated.",
        "Life",
    ),
    (
        "To be yourself in a world that is constantly trying to make you something else "
        "is the greatest accomplishment.",
        "Wisdom",
    ),
)
