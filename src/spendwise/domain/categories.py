"""Category label set and the static classification tables.

The label set is a closed contract: downstream aggregation and the CLI rely
on these exact strings. ``CATEGORY_RULES`` is scanned in declared order, so
more specific categories (Coffee & Bakery) sit ahead of broader ones
(Dining) that share keywords.
"""

from spendwise.domain.entities import SmartHint

DEFAULT_CATEGORY = "Other"

CATEGORY_RULES: dict[str, tuple[str, ...]] = {
    "Groceries": (
        "grocery", "safeway", "trader joe", "whole foods", "kroger", "walmart",
        "target", "costco", "aldi", "publix", "wegmans", "heb ", "food", "market",
        "sprouts", "instacart", "sam's club", "supermercado", "supermarche",
        "supermarkt", "lidl", "carrefour", "tesco", "sainsbury", "oxxo",
    ),
    "Coffee & Bakery": (
        "starbucks", "coffee", "cafe", "café", "espresso", "dunkin", "peet",
        "blue bottle", "philz", "bakery", "boulangerie", "patisserie",
        "panaderia", "panadería", "bäckerei", "baeckerei", "donut", "bagel",
        "croissant", "tim hortons",
    ),
    "Dining": (
        "restaurant", "mcdonald", "chipotle", "doordash", "uber eats",
        "ubereats", "grubhub", "seamless", "postmates", "pizza", "burger",
        "taco", "sushi", "thai", "indian", "chinese", "mexican", "ramen",
        "kitchen", "grill", "diner", "taqueria", "trattoria",
        "ristorante", "brasserie", "bistro", "restaurante",
    ),
    "Clubs": (
        "nightclub", "night club", "club", "lounge", "discoteca", "cover charge",
        "resident advisor", "dice.fm",
    ),
    "Bikes & Scooters": (
        "citi bike", "citibike", "lime", "bird app", "revel", "lyft bike",
        "jump bike", "scooter", "bike share", "bikeshare", "tier mobility",
        "voi technology", "ecobici",
    ),
    "Transport": (
        "uber", "lyft", "gas", "shell", "chevron", "exxon", "bp ", "parking",
        "transit", "metro", "subway", "bart", "caltrain", "amtrak", "mta",
        "clipper", "taxi", "cabify", "didi",
    ),
    "Shopping": (
        "amazon", "amzn", "ebay", "etsy", "clothing", "shoes", "nordstrom",
        "macys", "gap", "old navy", "zara", "h&m", "uniqlo", "best buy",
        "apple store", "ikea", "home depot", "mercado libre", "liverpool",
    ),
    "Entertainment": (
        "netflix", "spotify", "hulu", "disney", "hbo", "movie", "theater",
        "theatre", "cinema", "cinepolis", "concert", "ticket", "game", "steam",
        "playstation", "xbox", "museum", "bowling",
    ),
    "Health": (
        "pharmacy", "farmacia", "apotheke", "pharmacie", "cvs", "walgreens",
        "doctor", "medical", "hospital", "dental", "vision", "gym", "fitness",
        "clinic", "clinica", "healthcare", "equinox",
    ),
    "Bills": (
        "electric", "water", "gas bill", "internet", "phone", "verizon",
        "at&t", "t-mobile", "comcast", "insurance", "pg&e", "con edison",
        "utility", "spectrum",
    ),
    "Subscriptions": (
        "subscription", "monthly", "annual", "membership", "patreon",
        "substack", "icloud", "google storage", "openai", "github", "adobe",
    ),
    "Bars": (
        "bar ", "pub", "brewery", "tavern", "wine", "liquor", "beer",
        "cocktail", "cantina", "biergarten", "taproom",
    ),
    "Travel": (
        "airline", "hotel", "airbnb", "vrbo", "booking", "expedia", "flight",
        "united", "delta", "american airlines", "southwest", "jetblue",
        "aeromexico", "volaris", "hostel",
    ),
    "Payment": (
        "payment thank you", "autopay", "automatic payment", "online payment",
        "payment received", "pago recibido",
    ),
    "Other": (),
}

CATEGORIES: tuple[str, ...] = tuple(CATEGORY_RULES)

CATEGORY_COLORS: dict[str, str] = {
    "Groceries": "#22c55e",
    "Coffee & Bakery": "#a16207",
    "Dining": "#f97316",
    "Clubs": "#d946ef",
    "Bikes & Scooters": "#84cc16",
    "Transport": "#3b82f6",
    "Shopping": "#ec4899",
    "Entertainment": "#8b5cf6",
    "Health": "#14b8a6",
    "Bills": "#64748b",
    "Subscriptions": "#6366f1",
    "Bars": "#eab308",
    "Travel": "#06b6d4",
    "Payment": "#10b981",
    "Other": "#9ca3af",
}

# Categories that are not spending; aggregation leaves them out of expense totals
NON_EXPENSE_CATEGORIES: frozenset[str] = frozenset({"Payment"})

# A pattern ending in "*" names a processor prefix recognized by the merchant
# normalizer; any other pattern is a substring of the description.
SMART_HINTS: tuple[SmartHint, ...] = (
    SmartHint("sq*", "Dining", "Square point-of-sale, most often a cafe, food truck or small restaurant"),
    SmartHint("tst*", "Dining", "Toast point-of-sale, used almost exclusively by restaurants and bars"),
    SmartHint("dd*", "Dining", "DoorDash order"),
    SmartHint("clv*", "Dining", "Clover point-of-sale, common at counter-service restaurants"),
    SmartHint("paypal*", "Shopping", "PayPal checkout, usually an online purchase"),
    SmartHint("pp*", "Shopping", "PayPal checkout, usually an online purchase"),
    SmartHint("sp*", "Shopping", "Shopify storefront purchase"),
    SmartHint("py*", "Shopping", "Payment processor used by small online shops"),
    SmartHint("apple.com/bill", "Subscriptions", "Recurring App Store or iCloud charge"),
    SmartHint("google", "Subscriptions", "Google Play or Google service charge"),
)


def is_valid_category(category: str) -> bool:
    """Return True if the label belongs to the category set."""
    return category in CATEGORY_RULES


def is_expense_category(category: str) -> bool:
    """Return True if transactions in this category count as spending."""
    return category not in NON_EXPENSE_CATEGORIES


def category_color(category: str) -> str:
    """Return the display color for a category label."""
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[DEFAULT_CATEGORY])
