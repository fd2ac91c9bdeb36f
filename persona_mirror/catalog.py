"""Persona taxonomy: trait vocabularies, the 12 reference fingerprints and
their display tables.

These tables are configuration data. Keys are stable identifiers shared by
PERSONAS, PERSONA_DETAILS and GROUP_PERSONA_DETAILS.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


# ── Trait vocabularies (ordered: index distance drives similarity) ──────────

TRAIT_VALUES: dict[str, list[str]] = {
    "group_size": ["small", "medium", "large"],
    "socialness": ["introvert", "ambivert", "extrovert"],
    "budget_level": ["budget", "moderate", "premium"],
    "generosity": ["low", "medium", "high"],
    "payment_speed": ["slow", "medium", "fast"],
    "activity_level": ["low", "medium", "high"],
    "time_preference": ["morning", "afternoon", "evening", "night"],
}

TRAIT_WEIGHTS: dict[str, float] = {
    "group_size": 1.5,
    "socialness": 2.0,
    "budget_level": 1.2,
    "generosity": 1.8,
    "payment_speed": 1.0,
    "activity_level": 1.5,
    "time_preference": 0.8,
}


@dataclass(frozen=True)
class Persona:
    """Seven-trait behavioral fingerprint."""

    group_size: str
    socialness: str
    budget_level: str
    generosity: str
    payment_speed: str
    activity_level: str
    time_preference: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


# ── Reference fingerprints ──────────────────────────────────────────────────

PERSONAS: dict[str, Persona] = {
    "momFriend": Persona(
        group_size="medium", socialness="ambivert", budget_level="moderate",
        generosity="high", payment_speed="fast", activity_level="medium",
        time_preference="afternoon",
    ),
    "partyAnimal": Persona(
        group_size="large", socialness="extrovert", budget_level="moderate",
        generosity="medium", payment_speed="slow", activity_level="high",
        time_preference="night",
    ),
    "foodieExplorer": Persona(
        group_size="small", socialness="ambivert", budget_level="premium",
        generosity="high", payment_speed="medium", activity_level="medium",
        time_preference="evening",
    ),
    "budgetHawk": Persona(
        group_size="small", socialness="introvert", budget_level="budget",
        generosity="low", payment_speed="fast", activity_level="low",
        time_preference="afternoon",
    ),
    "ghost": Persona(
        group_size="small", socialness="introvert", budget_level="moderate",
        generosity="low", payment_speed="slow", activity_level="low",
        time_preference="evening",
    ),
    "hypePerson": Persona(
        group_size="large", socialness="extrovert", budget_level="moderate",
        generosity="high", payment_speed="fast", activity_level="high",
        time_preference="evening",
    ),
    "planner": Persona(
        group_size="medium", socialness="ambivert", budget_level="moderate",
        generosity="medium", payment_speed="fast", activity_level="medium",
        time_preference="afternoon",
    ),
    "wildCard": Persona(
        group_size="medium", socialness="extrovert", budget_level="premium",
        generosity="high", payment_speed="medium", activity_level="high",
        time_preference="afternoon",
    ),
    "hometownHero": Persona(
        group_size="small", socialness="ambivert", budget_level="moderate",
        generosity="medium", payment_speed="medium", activity_level="low",
        time_preference="evening",
    ),
    "earlyBird": Persona(
        group_size="small", socialness="ambivert", budget_level="moderate",
        generosity="medium", payment_speed="fast", activity_level="medium",
        time_preference="morning",
    ),
    "nightOwl": Persona(
        group_size="medium", socialness="extrovert", budget_level="moderate",
        generosity="medium", payment_speed="medium", activity_level="medium",
        time_preference="night",
    ),
    "generousWhale": Persona(
        group_size="medium", socialness="ambivert", budget_level="premium",
        generosity="high", payment_speed="fast", activity_level="medium",
        time_preference="evening",
    ),
}


# ── Individual display details ──────────────────────────────────────────────

PERSONA_DETAILS: dict[str, dict] = {
    "momFriend": {
        "emoji": "🎯",
        "description": "The Mom Friend - Always organized, takes care of everyone",
        "traits": ["Organized", "Caring", "Reliable", "Quick to settle bills"],
    },
    "partyAnimal": {
        "emoji": "🎉",
        "description": "The Party Animal - Lives for big nights out",
        "traits": ["Social butterfly", "Night owl", "Loves crowds", "Forgets to pay back"],
    },
    "foodieExplorer": {
        "emoji": "🍜",
        "description": "The Foodie Explorer - Quality over quantity, loves trying new places",
        "traits": ["Adventurous eater", "Premium tastes", "Generous tipper", "Small groups"],
    },
    "budgetHawk": {
        "emoji": "💸",
        "description": "The Budget Hawk - Watches every penny, splits to the cent",
        "traits": ["Cost-conscious", "Quick settler", "Prefers deals", "Small gatherings"],
    },
    "ghost": {
        "emoji": "👻",
        "description": "The Ghost - Hard to pin down, slow to respond",
        "traits": ["Rarely organizes", "Slow payer", "Prefers intimate settings", "Low activity"],
    },
    "hypePerson": {
        "emoji": "🌟",
        "description": "The Hype Person - Brings the energy, everyone's cheerleader",
        "traits": ["Super social", "Generous", "Quick payer", "Always planning"],
    },
    "planner": {
        "emoji": "📅",
        "description": "The Planner - Has the itinerary ready, organized to a T",
        "traits": ["Detail-oriented", "Reliable", "Balanced spender", "Medium groups"],
    },
    "wildCard": {
        "emoji": "🎲",
        "description": "The Wild Card - Spontaneous, unpredictable, always fun",
        "traits": ["Spontaneous", "High energy", "Premium spender", "Very generous"],
    },
    "hometownHero": {
        "emoji": "🏠",
        "description": "The Hometown Hero - Knows all the local spots, sticks to favorites",
        "traits": ["Local expert", "Creature of habit", "Balanced", "Loyal friend"],
    },
    "earlyBird": {
        "emoji": "☕",
        "description": "The Early Bird - Morning person, likes brunch and coffee dates",
        "traits": ["Morning enthusiast", "Punctual", "Organized", "Loves breakfast spots"],
    },
    "nightOwl": {
        "emoji": "🦉",
        "description": "The Night Owl - Comes alive after dark, late night adventures",
        "traits": ["Night person", "Spontaneous", "Social", "Prefers late meetups"],
    },
    "generousWhale": {
        "emoji": "💰",
        "description": "The Generous Whale - Big spender, loves treating friends",
        "traits": ["Very generous", "Premium tastes", "Quick payer", "Loves to host"],
    },
}

UNKNOWN_PERSONA_DETAILS: dict = {
    "emoji": "❓",
    "description": "Unknown persona type",
    "traits": [],
}


# ── Group-flavoured display details (collective phrasing) ───────────────────

GROUP_PERSONA_DETAILS: dict[str, dict] = {
    "hypePerson": {
        "description": "The Party Crew - Always planning the next big event",
        "traits": ["High energy group", "Frequent events", "Generous with each other", "Quick to settle up"],
    },
    "planner": {
        "description": "The Organized Squad - Everything runs like clockwork",
        "traits": ["Well-organized", "Reliable members", "Balanced spending", "Regular meetups"],
    },
    "partyAnimal": {
        "description": "The Social Circle - Living for the weekend",
        "traits": ["Loves big gatherings", "Night owls", "Occasional payment delays", "High activity"],
    },
    "foodieExplorer": {
        "description": "The Culinary Club - Quality dining experiences",
        "traits": ["Premium tastes", "Small intimate groups", "Food-focused events", "Generous tippers"],
    },
    "budgetHawk": {
        "description": "The Budget Conscious Crew - Smart spenders",
        "traits": ["Cost-effective events", "Quick settlers", "Prefers deals", "Smaller gatherings"],
    },
    "nightOwl": {
        "description": "The Late Night Gang - Best after dark",
        "traits": ["Prefer evening activities", "Spontaneous plans", "Social and active", "Medium sized groups"],
    },
    "earlyBird": {
        "description": "The Morning Club - Rise and shine together",
        "traits": ["Morning activities", "Punctual members", "Organized", "Breakfast lovers"],
    },
    "wildCard": {
        "description": "The Adventure Squad - Always trying something new",
        "traits": ["Spontaneous adventures", "High energy", "Premium experiences", "Very generous"],
    },
    "momFriend": {
        "description": "The Care Crew - Looking out for each other",
        "traits": ["Supportive group", "Caring members", "Reliable", "Quick to help out"],
    },
    "hometownHero": {
        "description": "The Local Legends - Know all the best spots",
        "traits": ["Creature of habit", "Local favorites", "Loyal friends", "Balanced lifestyle"],
    },
    "generousWhale": {
        "description": "The VIP Circle - No expense spared",
        "traits": ["Premium experiences", "Very generous", "Quick payers", "Love to host"],
    },
    "ghost": {
        "description": "The Low-Key Collective - Relaxed and casual",
        "traits": ["Low activity", "Intimate settings", "Slow to organize", "Casual vibes"],
    },
}
