# -*- coding: utf-8 -*-
"""Consolidated vocabulary tables and scoring constants for title matching.

This module provides a single source of truth for all lookup data used across:
- Title normalization (noise words stripped before comparison)
- Term extraction (stop words, loose Chinese/English filter list)
- Keyword categorization (tag → category, vocabulary → category)
- Supplier title processing (brand aliases, vitola names)
- Match scoring (default weights and tolerances)

Tables can be extended from matcher.toml without touching scoring logic.
All other modules should import constants from here.
"""

# ============================================================================
# NORMALIZATION NOISE WORDS
# ============================================================================

# Whole-word noise for normalize_title. Single words only: removal is done
# with Unicode word boundaries and must not join neighbouring words.
TITLE_NOISE_WORDS = [
    "cigar",
    "cigars",
    "box",
    "boxes",
    "pack",
    "packs",
    "tube",
    "tubes",
    "pcs",
    "new",
    "original",
    "genuine",
    "authentic",
    "premium",
    "sale",
    "雪茄",
    "正品",
]

# Loose substring noise for filter_noise_words. Chinese marketing/packaging
# words have no word boundaries, so they are removed as raw substrings.
FILTER_NOISE_WORDS = [
    # Chinese
    "雪茄",
    "正品",
    "原装",
    "进口",
    "古巴",
    "包邮",
    "现货",
    "特价",
    "盒装",
    "支装",
    "礼盒",
    "单支",
    "整盒",
    "手工",
    "行货",
    # English
    "free shipping",
    "imported",
    "handmade",
    "hand made",
    "cuban",
    "cigars",
    "cigar",
    "genuine",
    "original",
    "authentic",
    "in stock",
    "premium",
]

STOP_WORDS = {"the", "and", "for", "with"}

# ============================================================================
# TERM EXTRACTION PATTERNS
# ============================================================================

# Re-scanned on the raw (unnormalized) title
TERM_DIMENSION_PATTERN = r"\d+(?:x|X|×|\*|/)\d+"
TERM_COUNT_PATTERN = r"\d+\s*(?:支|pcs|个|-count|count|ct)(?![a-z])"
TERM_COUNT_FALLBACK_PATTERN = r"(?:box|pack) of \d+"

# Dimension parsing: "LENGTH x RG" or "RG x LENGTH" (operand order resolved
# with the ring gauge range below)
DIMENSION_PAIR_PATTERN = r"(\d+)\s*(?:x|X|×|\*)\s*(\d+)"
RING_GAUGE_MIN = 20
RING_GAUGE_MAX = 70

# Millimetres per unit
UNIT_TO_MM = {
    "mm": 1.0,
    "cm": 10.0,
    "inch": 25.4,
}

# ============================================================================
# KEYWORD CATEGORIZATION
# ============================================================================

CATEGORY_BRAND = "brand"
CATEGORY_MODEL = "model"
CATEGORY_VITOLA = "vitola"
CATEGORY_SPECIAL_EDITION = "special_edition"
CATEGORY_YEAR = "year"
CATEGORY_COUNT = "count"
CATEGORY_DIMENSIONS = "dimensions"
CATEGORY_PACKAGING = "packaging"
CATEGORY_GENERIC = "generic"

TAG_CATEGORIES = {
    "BRAND": CATEGORY_BRAND,
    "SERIES": CATEGORY_MODEL,
    "VITOLA": CATEGORY_VITOLA,
    "SPECIAL": CATEGORY_SPECIAL_EDITION,
    "YEAR": CATEGORY_YEAR,
    "COUNT": CATEGORY_COUNT,
    "DIM": CATEGORY_DIMENSIONS,
    "PACK": CATEGORY_PACKAGING,
}

KEYWORD_DIMENSION_PATTERNS = [
    r"\d+[x×*/]\d+",
    r"^\d+/\d+$",
]

KEYWORD_COUNT_PATTERNS = [
    r"^\d+-Count( box)?$",
    r"^Count: \d+$",
    r"^\d+支/盒$",
    r"^\d+支装$",
]

KEYWORD_YEAR_PATTERN = r"^(19|20)\d{2}$"

# Context fields checked in order when a product context is supplied
CONTEXT_CATEGORY_FIELDS = [
    ("brand", CATEGORY_BRAND),
    ("model", CATEGORY_MODEL),
    ("vitola", CATEGORY_VITOLA),
]

# Vocabulary → category, checked in table order after the context lookup
VOCABULARY_CATEGORIES = {
    CATEGORY_SPECIAL_EDITION: [
        "limited edition",
        "edicion limitada",
        "edición limitada",
        "regional edition",
        "edicion regional",
        "anniversary",
        "aniversario",
        "reserva",
        "gran reserva",
        "commemorative",
        "lcdh",
        "限量",
        "限量版",
        "珍藏",
        "纪念",
        "特别版",
        "地区限定",
    ],
    CATEGORY_PACKAGING: [
        "box",
        "tube",
        "tubos",
        "pack",
        "cabinet",
        "slb",
        "sbn",
        "bundle",
        "盒",
        "铝管",
        "木盒",
        "纸盒",
        "礼盒",
    ],
}

# ============================================================================
# SUPPLIER TITLE PROCESSING
# ============================================================================

# Canonical brand → aliases (English and Chinese). Matched on the normalized
# title, longest alias first.
BRAND_ALIASES = {
    "Cohiba": ["cohiba", "高希霸"],
    "Montecristo": ["montecristo", "monte cristo", "蒙特克里斯托", "蒙特"],
    "Romeo y Julieta": ["romeo y julieta", "romeo julieta", "罗密欧与朱丽叶", "罗密欧"],
    "Partagas": ["partagas", "partagás", "帕特加斯", "帕塔加斯"],
    "Hoyo de Monterrey": ["hoyo de monterrey", "hoyo", "好友"],
    "H. Upmann": ["h upmann", "upmann", "乌普曼"],
    "Bolivar": ["bolivar", "bolívar", "玻利瓦尔"],
    "Trinidad": ["trinidad", "特立尼达"],
    "Punch": ["punch", "潘趣"],
    "Ramon Allones": ["ramon allones", "拉蒙阿隆斯"],
    "Davidoff": ["davidoff", "大卫杜夫"],
    "Arturo Fuente": ["arturo fuente", "fuente", "富恩特"],
    "Padron": ["padron", "padrón", "帕德龙"],
    "Quai d'Orsay": ["quai dorsay", "quai d orsay", "奥赛"],
    "Juan Lopez": ["juan lopez", "胡安洛佩斯"],
}

# Vitola names as they appear in titles, longest first at lookup time
VITOLA_NAMES = [
    "double corona",
    "petit corona",
    "petit robusto",
    "corona gorda",
    "siglo vi",
    "siglo v",
    "siglo iv",
    "siglo iii",
    "siglo ii",
    "siglo i",
    "robusto",
    "churchill",
    "corona",
    "torpedo",
    "belicoso",
    "lancero",
    "panetela",
    "lonsdale",
    "piramide",
    "pirámide",
    "perfecto",
    "figurado",
    "gordo",
    "toro",
    "罗布图",
    "丘吉尔",
    "皇冠",
    "鱼雷",
    "长矛",
]

# ============================================================================
# PRODUCT TYPE / PACKAGING DETECTION
# ============================================================================

ACCESSORY_KEYWORDS = [
    "cutter",
    "lighter",
    "humidor",
    "ashtray",
    "punch cutter",
    "scissors",
    "cigar case",
    "雪茄套",
    "humidifier",
    "雪茄剪",
    "打火机",
    "保湿盒",
    "烟灰缸",
]

CIGARETTE_KEYWORDS = [
    "cigarette",
    "cigarettes",
    "香烟",
]

PRODUCT_TYPE_ACCESSORY = "accessory"
PRODUCT_TYPE_CIGARETTE = "cigarette"
PRODUCT_TYPE_CIGAR = "cigar"

# Checked in order, first hit wins
PACKAGING_TYPES = {
    "box": ["box", "cabinet", "盒"],
    "tube": ["tube", "tubos", "铝管"],
    "pack": ["pack", "bundle", "捆"],
}

PACKAGING_BOX_OF_PATTERN = r"box of (\d+)"

# ============================================================================
# SCORING
# ============================================================================

DEFAULT_WEIGHTS = {
    "brand": 40,
    "vitola": 20,
    "dimensions": 20,
    "term": 5,
    "term_cap": 20,
    "ring_tolerance": 2,
    "length_tolerance": 10,
    "min_term_length": 3,
}

SIMILARITY_THRESHOLD = 0.8

# ============================================================================
# CATALOG LAYOUT
# ============================================================================

DEFAULT_CATALOG_COLUMNS = {
    "identifier": "id",
    "sku": "sku",
    "title": "title",
    "brand": "brand",
    "seat_row": "seat_row",
    "seat_number": "seat_number",
}
