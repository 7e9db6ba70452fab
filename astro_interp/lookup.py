# astro_interp/lookup.py
# CONSTANTS - domain tables shared by the key codec, loaders and folder scan

OBJECT_NAMES = [
    # Planets
    "Earth", "Sun", "Moon", "Mercury", "Venus", "Mars", "Jupiter", "Saturn",
    "Uranus", "Neptune", "Pluto",
    # Asteroids & points
    "Chiron", "Ceres", "Pallas", "Juno", "Vesta",
    "North Node", "South Node", "Lilith", "Fortune", "Vertex", "East Point",
    # House cusps
    "Ascendant", "2nd Cusp", "3rd Cusp", "Nadir", "5th Cusp", "6th Cusp",
    "Descendant", "8th Cusp", "9th Cusp", "Midheaven", "11th Cusp", "12th Cusp",
]

SIGNS = [
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces"
]

ASPECT_NAMES = [
    "Conjunct", "Opposite", "Square", "Trine", "Sextile", "Inconjunct",
    "Semisextile", "Semisquare", "Sesquiquadrate", "Quintile", "Biquintile",
    "Semiquintile", "Septile", "Biseptile", "Triseptile", "Novile",
    "Binovile", "Quadnovile", "Undecile", "Biundecile", "Triundecile",
    "Quadundecile", "Quinundecile", "Decile",
]

# Alternate spellings accepted wherever a name token is resolved
ALIASES_OBJECTS = {
    "ASC": "Ascendant",
    "AC": "Ascendant",
    "DSC": "Descendant",
    "DC": "Descendant",
    "MC": "Midheaven",
    "IC": "Nadir",
    "True Node": "North Node",
    "Part of Fortune": "Fortune",
    "Black Moon Lilith": "Lilith",
}

ALIASES_ASPECTS = {
    "Conjunction": "Conjunct",
    "Opposition": "Opposite",
    "Quincunx": "Inconjunct",
    "Sesquisquare": "Sesquiquadrate",
}

OBJECT_COUNT = len(OBJECT_NAMES)        # valid object ids: 0..OBJECT_COUNT-1
SIGN_COUNT = len(SIGNS)                 # valid sign ids: 1..12
HOUSE_COUNT = 12                        # valid house ids: 1..12
ASPECT_COUNT = len(ASPECT_NAMES)        # valid aspect ids: 0..ASPECT_COUNT

WILDCARD = -1
WILDCARD_TOKEN = "*"

# Section headers of the interpretation text format
SECTION_METADATA = "metadata"
SECTION_PLANET_MEANINGS = "planet_meanings"
SECTION_SIGN_DESCRIPTIONS = "sign_descriptions"
SECTION_HOUSE_AREAS = "house_areas"
SECTION_COMBINATIONS = "combinations"
SECTION_ASPECTS = "aspects"
SECTION_ASPECT_COMBINATIONS = "aspect_combinations"
SECTION_TEMPLATES = "templates"

STYLE_FILE_SECTIONS = frozenset({
    SECTION_METADATA,
    SECTION_PLANET_MEANINGS,
    SECTION_SIGN_DESCRIPTIONS,
    SECTION_HOUSE_AREAS,
    SECTION_COMBINATIONS,
    SECTION_ASPECTS,
    SECTION_ASPECT_COMBINATIONS,
    SECTION_TEMPLATES,
})

# Per-object .ais files inside a style folder carry no aspects or templates
FOLDER_FILE_SECTIONS = frozenset({
    SECTION_METADATA,
    SECTION_PLANET_MEANINGS,
    SECTION_SIGN_DESCRIPTIONS,
    SECTION_HOUSE_AREAS,
    SECTION_COMBINATIONS,
    SECTION_ASPECT_COMBINATIONS,
})

METADATA_KEYS = ("name", "author", "version", "description")

# Filesystem layout of an interpretations directory
STYLES_DIRNAME = "styles"
STYLE_CONF = "style.conf"
SIGNS_DIRNAME = "signs"
AIS_SUFFIX = ".ais"
ACTIVE_LINK = "active"
ACTIVE_POINTER = "active.txt"


def is_valid_object(obj: int) -> bool:
    return 0 <= obj < OBJECT_COUNT


def is_valid_sign(sign: int) -> bool:
    return 1 <= sign <= SIGN_COUNT


def is_valid_house(house: int) -> bool:
    return 1 <= house <= HOUSE_COUNT


def is_valid_aspect(asp: int) -> bool:
    return 0 <= asp <= ASPECT_COUNT


def object_name(obj: int) -> str:
    """Return the display name for an object id."""
    if not is_valid_object(obj):
        raise ValueError(f"Object id {obj} out of range 0..{OBJECT_COUNT - 1}")
    return OBJECT_NAMES[obj]
