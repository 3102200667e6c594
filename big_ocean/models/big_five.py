"""Big Five reference data: traits, facets, level codes and steering hints.

The model has 5 traits with 6 facets each (30 facets).  Facet names carry
no trait prefix ("imagination", not "openness_imagination").  Scores are
always stored on facets; trait values are always derived from them.
"""

from __future__ import annotations

from typing import Final

from big_ocean.settings import FACET_LEVEL_THRESHOLD

TRAITS: Final[tuple[str, ...]] = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)

FACETS_BY_TRAIT: Final[dict[str, tuple[str, ...]]] = {
    "openness": (
        "imagination",
        "artistic_interests",
        "emotionality",
        "adventurousness",
        "intellect",
        "liberalism",
    ),
    "conscientiousness": (
        "self_efficacy",
        "orderliness",
        "dutifulness",
        "achievement_striving",
        "self_discipline",
        "cautiousness",
    ),
    "extraversion": (
        "friendliness",
        "gregariousness",
        "assertiveness",
        "activity_level",
        "excitement_seeking",
        "cheerfulness",
    ),
    "agreeableness": (
        "trust",
        "morality",
        "altruism",
        "cooperation",
        "modesty",
        "sympathy",
    ),
    "neuroticism": (
        "anxiety",
        "anger",
        "depression",
        "self_consciousness",
        "immoderation",
        "vulnerability",
    ),
}

ALL_FACETS: Final[tuple[str, ...]] = tuple(
    facet for trait in TRAITS for facet in FACETS_BY_TRAIT[trait]
)

FACET_TO_TRAIT: Final[dict[str, str]] = {
    facet: trait for trait, facets in FACETS_BY_TRAIT.items() for facet in facets
}

FACETS_PER_TRAIT: Final[int] = 6


def is_facet_name(name: str) -> bool:
    return name in FACET_TO_TRAIT


def display_name(identifier: str) -> str:
    """Human-readable name for a trait or facet identifier."""
    return identifier.replace("_", " ").title()


# ── Facet level codes ─────────────────────────────────────────────────────
# Each facet has a [low, high] pair of globally unique two-letter codes.
# The first letter is the trait initial.

FACET_LEVEL_CODES: Final[dict[str, tuple[str, str]]] = {
    # Openness
    "imagination": ("OP", "OV"),
    "artistic_interests": ("OL", "OA"),
    "emotionality": ("OS", "OE"),
    "adventurousness": ("OC", "OD"),
    "intellect": ("OF", "OI"),
    "liberalism": ("OT", "OR"),
    # Conscientiousness
    "self_efficacy": ("CD", "CA"),
    "orderliness": ("CS", "CM"),
    "dutifulness": ("CI", "CO"),
    "achievement_striving": ("CR", "CE"),
    "self_discipline": ("CF", "CP"),
    "cautiousness": ("CB", "CL"),
    # Extraversion
    "friendliness": ("ER", "EW"),
    "gregariousness": ("ES", "EG"),
    "assertiveness": ("ED", "EA"),
    "activity_level": ("EC", "EB"),
    "excitement_seeking": ("EP", "ET"),
    "cheerfulness": ("EM", "EL"),
    # Agreeableness
    "trust": ("AS", "AT"),
    "morality": ("AD", "AI"),
    "altruism": ("AF", "AG"),
    "cooperation": ("AC", "AH"),
    "modesty": ("AO", "AU"),
    "sympathy": ("AL", "AE"),
    # Neuroticism
    "anxiety": ("NC", "NA"),
    "anger": ("NP", "NF"),
    "depression": ("NB", "NS"),
    "self_consciousness": ("NU", "NW"),
    "immoderation": ("ND", "NI"),
    "vulnerability": ("NR", "NV"),
}

FACET_LEVEL_LABELS: Final[dict[str, str]] = {
    "OP": "Concrete", "OV": "Visionary",
    "OL": "Utilitarian", "OA": "Aesthetic",
    "OS": "Stoic", "OE": "Expressive",
    "OC": "Consistent", "OD": "Daring",
    "OF": "Focused", "OI": "Inquisitive",
    "OT": "Traditional", "OR": "Progressive",
    "CD": "Tentative", "CA": "Capable",
    "CS": "Spontaneous", "CM": "Methodical",
    "CI": "Independent", "CO": "Devoted",
    "CR": "Easygoing", "CE": "Driven",
    "CF": "Freewheeling", "CP": "Persistent",
    "CB": "Decisive", "CL": "Deliberate",
    "ER": "Reserved", "EW": "Welcoming",
    "ES": "Solitary", "EG": "Sociable",
    "ED": "Deferential", "EA": "Commanding",
    "EC": "Unhurried", "EB": "Energetic",
    "EP": "Serene", "ET": "Adventurous",
    "EM": "Reflective", "EL": "Radiant",
    "AS": "Guarded", "AT": "Trusting",
    "AD": "Shrewd", "AI": "Principled",
    "AF": "Self-reliant", "AG": "Giving",
    "AC": "Competitive", "AH": "Harmonious",
    "AO": "Forthright", "AU": "Unassuming",
    "AL": "Objective", "AE": "Compassionate",
    "NC": "Composed", "NA": "Vigilant",
    "NP": "Patient", "NF": "Fiery",
    "NB": "Buoyant", "NS": "Melancholy",
    "NU": "Poised", "NW": "Self-aware",
    "ND": "Restrained", "NI": "Impulsive",
    "NR": "Sturdy", "NV": "Tender",
}


def facet_level_code(facet: str, score: float) -> str:
    """Map a facet score (0–20) to its low or high two-letter code."""
    low, high = FACET_LEVEL_CODES[facet]
    return low if score <= FACET_LEVEL_THRESHOLD else high


def facet_level_label(code: str) -> str:
    return FACET_LEVEL_LABELS[code]


# ── Interviewer steering hints ────────────────────────────────────────────
# Natural conversation angles that elicit signal for a facet without
# naming the facet.

STEERING_HINTS: Final[dict[str, str]] = {
    # Openness
    "imagination": "Ask about daydreaming, creative scenarios, or 'what if' thinking",
    "artistic_interests": "Explore appreciation for art, music, literature, or beauty",
    "emotionality": "Discuss emotional experiences, depth of feelings, or sensitivity",
    "adventurousness": "Ask about trying new things, travel, or unfamiliar experiences",
    "intellect": "Explore curiosity about ideas, philosophy, or abstract concepts",
    "liberalism": "Discuss openness to different viewpoints or unconventional ideas",
    # Conscientiousness
    "self_efficacy": "Ask about confidence in handling challenges or achieving goals",
    "orderliness": "Explore how they organize their space, time, or belongings",
    "dutifulness": "Discuss keeping commitments, following rules, or obligations",
    "achievement_striving": "Ask about goals, ambitions, or drive for excellence",
    "self_discipline": "Explore staying focused on tasks or resisting distractions",
    "cautiousness": "Discuss decision-making process, planning, or risk evaluation",
    # Extraversion
    "friendliness": "Ask about warmth toward others or making new connections",
    "gregariousness": "Explore preference for social gatherings vs solitude",
    "assertiveness": "Discuss taking charge, speaking up, or leading",
    "activity_level": "Ask about pace of life, busyness, or energy levels",
    "excitement_seeking": "Explore thrill-seeking, stimulation, or excitement",
    "cheerfulness": "Discuss general mood, optimism, or expressing joy",
    # Agreeableness
    "trust": "Ask about trusting others or giving people benefit of the doubt",
    "morality": "Explore honesty, straightforwardness, or ethical considerations",
    "altruism": "Discuss helping others, volunteering, or selfless acts",
    "cooperation": "Ask about compromising, working with others, or avoiding conflict",
    "modesty": "Explore humility, self-perception, or comfort with praise",
    "sympathy": "Discuss empathy for others' struggles or compassion",
    # Neuroticism
    "anxiety": "Gently explore worrying, uncertainty, or feeling nervous",
    "anger": "Ask about frustration triggers or how they handle irritation",
    "depression": "Gently discuss low moods, discouragement, or sadness",
    "self_consciousness": "Explore comfort in social situations or self-awareness",
    "immoderation": "Ask about impulse control, cravings, or temptations",
    "vulnerability": "Discuss handling stress, pressure, or overwhelming situations",
}
