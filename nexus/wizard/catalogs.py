"""Fixed option catalogs offered by the profile flows.

Each catalog maps a stored id to display metadata. Stored rows only ever
hold the ids (or, for free-form lists, the labels themselves).
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class CatalogItem:
    """Display metadata for one catalog entry."""

    id: str
    label: str
    icon: str = ""


def _catalog(*items: CatalogItem) -> dict[str, CatalogItem]:
    return {item.id: item for item in items}


# =============================================================================
# Personal profile
# =============================================================================

WORK_INTERESTS: Final[dict[str, CatalogItem]] = _catalog(
    CatalogItem("hospitality", "Hospitality", "coffee"),
    CatalogItem("retail", "Retail", "shopping-bag"),
    CatalogItem("food", "Food Service", "utensils"),
    CatalogItem("delivery", "Delivery", "package"),
    CatalogItem("events", "Events", "users"),
    CatalogItem("driver", "Driver", "car"),
    CatalogItem("household", "Household", "home"),
    CatalogItem("other", "Other", "sparkles"),
)

TRANSPORT_MODES: Final[dict[str, CatalogItem]] = _catalog(
    CatalogItem("car", "Car", "car"),
    CatalogItem("bus", "Bus", "bus"),
    CatalogItem("bike", "Bike", "bike"),
    CatalogItem("train", "Train", "train"),
    CatalogItem("walk", "Walk", "circle-dot"),
    CatalogItem("mix", "Mix of All", "globe"),
)

GENERAL_INTERESTS: Final[tuple[str, ...]] = (
    "Surfing", "Beach Volleyball", "Gym", "Running", "Hiking", "Gaming",
    "Photography", "Coffee", "Hospitality", "Music Production", "Content Creation",
    "Fashion", "Design", "Cars", "Sustainability", "Cooking", "Travel",
    "Festivals", "Reading", "Yoga", "Art", "Tech", "Fitness", "Nature",
)  # fmt: skip

QUICK_FACTS: Final[dict[str, CatalogItem]] = _catalog(
    CatalogItem("early-bird", "Early Bird", "🌅"),
    CatalogItem("night-owl", "Night Owl", "🌙"),
    CatalogItem("team-player", "Team Player", "🤝"),
    CatalogItem("solo-worker", "Solo Worker", "💼"),
    CatalogItem("coffee-lover", "Coffee Lover", "☕"),
    CatalogItem("tea-person", "Tea Person", "🍵"),
    CatalogItem("dog-person", "Dog Person", "🐕"),
    CatalogItem("cat-person", "Cat Person", "🐈"),
    CatalogItem("beach-lover", "Beach Lover", "🏖️"),
    CatalogItem("city-person", "City Person", "🏙️"),
    CatalogItem("music-always", "Music Always", "🎵"),
    CatalogItem("quiet-worker", "Quiet Worker", "🤫"),
    CatalogItem("social-butterfly", "Social Butterfly", "🦋"),
    CatalogItem("detail-oriented", "Detail Oriented", "🔍"),
    CatalogItem("big-picture", "Big Picture", "🖼️"),
    CatalogItem("creative-mind", "Creative Mind", "🎨"),
)

PERSONALITY_PROMPTS: Final[dict[str, tuple[str, ...]]] = {
    "Daily Life & Preferences": (
        "My go-to comfort snack is...",
        "The app I open first every morning is...",
        "If you looked at my screen time, you'd see way too much of...",
        "My current binge-watch obsession is...",
        "The last thing that made me laugh way too hard was...",
    ),
    "Social & Culture": (
        "My friends always call me the one who...",
        "The best concert or event I've been to is...",
        "My ideal weekend on the Gold Coast looks like...",
        "A movie I'll never get tired of watching is...",
        "My playlist would not be complete without...",
    ),
    "Fun & Random": (
        "A random fact I love sharing is...",
        "My most used emoji is...",
        "The weirdest food combo I actually enjoy is...",
        "If I could teleport right now, I'd go to...",
        "My guilty pleasure show, song, or trend is...",
    ),
    "Interests & Hobbies": (
        "A hobby I could talk about for hours is...",
        "Something I've recently gotten into is...",
        "My favorite way to stay active is...",
        "If I could instantly get good at one thing, it would be...",
        "The game I always win (or always lose) is...",
    ),
    "Personality & Vibes": (
        "My friends know me for always...",
        "A little thing that instantly makes me happy is...",
        "I'd describe myself in three emojis...",
        "The best compliment I've ever gotten is...",
        "Something I do that always makes people smile is...",
    ),
    "Aspirations & Self": (
        "A skill I want to learn just for fun is...",
        "My dream travel destination is...",
        "The best advice I've ever gotten is...",
        "The last time I tried something new was when...",
        "One thing I'm passionate about outside of study or work is...",
    ),
}

ALL_PROMPTS: Final[tuple[str, ...]] = tuple(
    prompt for prompts in PERSONALITY_PROMPTS.values() for prompt in prompts
)

DAYS_OF_WEEK: Final[tuple[str, ...]] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
TIME_SLOTS: Final[tuple[str, ...]] = ("AM", "PM", "EVE")

# =============================================================================
# Professional profile
# =============================================================================

SOFT_SKILLS: Final[tuple[str, ...]] = (
    "Communication", "Teamwork", "Problem Solving", "Time Management",
    "Customer Service", "Leadership", "Adaptability", "Work Ethic",
    "Attention to Detail", "Flexibility", "Interpersonal Skills",
    "Conflict Resolution", "Active Listening", "Patience", "Reliability",
    "Multitasking", "Positive Attitude", "Quick Learning",
)  # fmt: skip

TECHNICAL_SKILLS: Final[tuple[str, ...]] = (
    "Cash Handling", "Food Safety", "Barista Skills", "POS Systems",
    "Inventory Management", "Food Preparation", "Cleaning & Sanitation",
    "Heavy Lifting", "Driving License", "First Aid Certified",
    "Forklift Operation", "Basic Computer Skills", "Microsoft Office",
    "Social Media", "Data Entry", "JavaScript", "Python", "Excel",
)  # fmt: skip

SKILL_SOFT = "soft"
SKILL_TECHNICAL = "technical"
SKILL_CUSTOM = "custom"


def skill_category(skill: str) -> str:
    """Derive a skill's display category from catalog membership.

    Skills are stored without a category; user-added skills that appear in
    neither catalog are reported as custom.
    """
    if skill in SOFT_SKILLS:
        return SKILL_SOFT
    if skill in TECHNICAL_SKILLS:
        return SKILL_TECHNICAL
    return SKILL_CUSTOM


# =============================================================================
# Company profile
# =============================================================================

COMPANY_SIZES: Final[tuple[str, ...]] = (
    "1-10 employees",
    "11-50 employees",
    "51-200 employees",
    "201-500 employees",
    "501-1000 employees",
    "1000+ employees",
)

INDUSTRIES: Final[tuple[str, ...]] = (
    "Technology",
    "Healthcare",
    "Finance",
    "Retail",
    "Education",
    "Manufacturing",
    "Hospitality",
    "Real Estate",
    "Marketing",
    "Consulting",
    "Non-profit",
    "Other",
)
