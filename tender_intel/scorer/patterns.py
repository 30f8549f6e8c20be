"""Ordered pattern tables that drive relevance, exclusion and classification.

Every table is a tuple of (compiled pattern, label or weight) evaluated in
order. Tables that classify return the first match, so ordering matters
wherever terms can co-occur ("framework call-off" is a call-off, not a
framework).
"""

import re
from re import Pattern
from typing import Tuple

PatternTable = Tuple[Tuple[Pattern, str], ...]
WeightTable = Tuple[Tuple[Pattern, int], ...]


def _ci(pattern: str) -> Pattern:
    return re.compile(pattern, re.IGNORECASE)


# Relevance gate: at least one must match title + description
SUPPLY_KEYWORDS: Tuple[Pattern, ...] = (
    _ci(r"electricity\s+supply"),
    _ci(r"energy\s+supply"),
    _ci(r"supply\s+of\s+electricity"),
    _ci(r"supply\s+of\s+energy"),
    _ci(r"electricity\s+framework"),
    _ci(r"power\s+purchase"),
    re.compile(r"\bPPA\b"),
    re.compile(r"\bCPPA\b"),
    _ci(r"half[\s-]?hourly"),
    _ci(r"\bHH\s+supply"),
    _ci(r"renewable\s+energy\s+supply"),
    _ci(r"green\s+energy"),
    re.compile(r"\bREGO\b"),
    _ci(r"utility\s+supply"),
    _ci(r"gas\s+and\s+electricity"),
    _ci(r"electricity\s+and\s+gas"),
    _ci(r"supply\s+of\s+gas\s+and\s+electricity"),
    _ci(r"supply\s+of\s+utilities"),
    _ci(r"licensed\s+supplier"),
    _ci(r"flexible\s+purchas"),
    _ci(r"flexible\s+procurement\s+and\s+supply"),
    _ci(r"electricity\s+procurement"),
    _ci(r"energy\s+procurement"),
    _ci(r"renewable\s+supply"),
    _ci(r"green\s+tariff"),
    _ci(r"energy\s+framework"),
    _ci(r"electricity\s+contract"),
    _ci(r"energy\s+contract"),
    _ci(r"electricity\s+tender"),
    _ci(r"energy\s+tender"),
    _ci(r"public\s+buying\s+organisation"),
    re.compile(r"\bPBO\b"),
    _ci(r"electricity\s+portfolio"),
)

# Adjacent-but-out-of-scope topics; first match supplies the exclusion label
EXCLUSION_PATTERNS: PatternTable = (
    (_ci(r"solar\s+(panel|install|farm|pv)"), "Solar installation"),
    (_ci(r"heat\s+network"), "Heat networks"),
    (_ci(r"ev\s+charg"), "EV charging"),
    (_ci(r"electric\s+vehicle\s+charg"), "EV charging"),
    (_ci(r"consultancy"), "Consultancy"),
    (_ci(r"energy\s+audit"), "Energy audit"),
    (_ci(r"metering\s+(service|install)"), "Metering"),
    (_ci(r"smart\s+meter"), "Smart metering"),
    (_ci(r"\bretrofit\b"), "Retrofit"),
    (_ci(r"\binsulation\b"), "Insulation"),
    (_ci(r"electrical\s+(works|install)"), "Electrical works"),
    (_ci(r"street\s+light"), "Street lighting"),
    (_ci(r"(power\s+)?generation\s+(plant|facility|asset)"), "Generation"),
    (_ci(r"traffic\s+management"), "Traffic management"),
    (_ci(r"\bCCTV\b"), "CCTV"),
    (_ci(r"\bgritting\b"), "Gritting"),
    (_ci(r"\bhighways?\b"), "Highways"),
    (_ci(r"\bconstruction\b"), "Construction"),
    (_ci(r"\bdemolition\b"), "Demolition"),
    (_ci(r"\bcleaning\s+(service|contract)"), "Cleaning"),
    (_ci(r"\bcatering\b"), "Catering"),
    (_ci(r"waste\s+(collection|management|disposal)"), "Waste management"),
    (_ci(r"water\s+supply"), "Water supply"),
    (_ci(r"\btelecoms?\b"), "Telecoms"),
    (re.compile(r"\bIT\s+services?\b"), "IT services"),
    (_ci(r"\bprinting\b"), "Printing"),
    (_ci(r"\bfurniture\b"), "Furniture"),
    (_ci(r"\bvehicles?\b"), "Vehicles"),
    (_ci(r"spill\s+response"), "Spill response"),
    (_ci(r"\bflood\b"), "Flood"),
    (_ci(r"\bdrainage\b"), "Drainage"),
    (_ci(r"\broad\s+(surface|maintenance|marking)"), "Roads"),
    (_ci(r"\bsignage\b"), "Signage"),
    (_ci(r"\bparking\b"), "Parking"),
    (_ci(r"security\s+(guard|service|patrol)"), "Security"),
    (_ci(r"\bHVAC\b"), "HVAC"),
    (_ci(r"\bplumbing\b"), "Plumbing"),
    (_ci(r"\broofing\b"), "Roofing"),
    (_ci(r"\bscaffolding\b"), "Scaffolding"),
    (_ci(r"\basbestos\b"), "Asbestos"),
    (_ci(r"pest\s+control"), "Pest control"),
    (_ci(r"\blandscaping\b"), "Landscaping"),
    (_ci(r"\bpostal\b"), "Postal"),
    (_ci(r"\bcourier\b"), "Courier"),
    (_ci(r"training\s+(service|provision|course)"), "Training"),
    (_ci(r"\brecruitment\b"), "Recruitment"),
    (_ci(r"legal\s+services?"), "Legal services"),
    (_ci(r"\btranslation\b"), "Translation"),
    (_ci(r"\badvertising\b"), "Advertising"),
    (_ci(r"media\s+buying"), "Media buying"),
)

# Procurement route, most specific first. "DPS" is matched case-sensitively.
PROCUREMENT_ROUTES: PatternTable = (
    (_ci(r"direct\s+award"), "Direct Award"),
    (_ci(r"call[\s-]?off"), "Framework Call-off"),
    (_ci(r"further\s+competition"), "Further Competition"),
    (_ci(r"mini[\s-]?competition"), "Mini Competition"),
    (_ci(r"dynamic\s+purchas"), "DPS"),
    (re.compile(r"\bDPS\b"), "DPS"),
    (_ci(r"open\s+(tender|procedure)"), "Open Tender"),
    (_ci(r"restricted\s+(tender|procedure)"), "Restricted"),
    (_ci(r"competitive\s+dialogue"), "Competitive Dialogue"),
    (_ci(r"framework"), "Framework"),
)

BUYER_TYPES: PatternTable = (
    (_ci(r"nhs|health|hospital|clinical|commissioning\s+group|medical"), "NHS Trust"),
    (_ci(r"universit|college"), "University"),
    (_ci(r"council|borough|county|city\s+of|district|metropolitan"), "Local Authority"),
    (_ci(r"housing|homes\s+(association|group)|habitation"), "Housing Association"),
    (_ci(r"police|fire|ambulance|emergency\s+service"), "Emergency Services"),
    (_ci(r"\bmod\b|ministry\s+of\s+defence|defence\b"), "MOD"),
    (_ci(r"school|academy|education|learning"), "Education"),
)

REGIONS: PatternTable = (
    (
        _ci(
            r"north\s*west|manchester|lancashire|liverpool|cheshire|cumbria|merseyside|"
            r"greater\s+manchester|warrington|bolton|salford|stockport|wigan|oldham|"
            r"rochdale|bury|tameside|trafford|preston|blackburn|blackpool"
        ),
        "North West",
    ),
    (
        _ci(r"north\s*east|newcastle|durham|sunderland|tyne|tees|yorkshire|leeds|sheffield|bradford|hull|\byork\b"),
        "North East / Yorkshire",
    ),
    (_ci(r"birmingham|nottingham|leicester|derby|coventry|wolverhampton|stoke|midlands"), "Midlands"),
    (_ci(r"\blondon\b|westminster|camden|hackney|tower\s+hamlets|islington|southwark|lambeth"), "London"),
    (_ci(r"south\s*east|kent|surrey|sussex|hampshire|berkshire|oxford|brighton"), "South East"),
    (_ci(r"south\s*west|bristol|bath|devon|cornwall|somerset|dorset|gloucester|wiltshire"), "South West"),
    (_ci(r"east\s+(anglia|of\s+england)|norfolk|suffolk|cambridge|essex|hertford|bedford"), "East of England"),
    (_ci(r"scotland|scottish|edinburgh|glasgow|aberdeen|dundee"), "Scotland"),
    (_ci(r"wales|welsh|cardiff|swansea|newport"), "Wales"),
    (_ci(r"northern\s+ireland|belfast"), "Northern Ireland"),
    (_ci(r"national|uk[\s-]?wide|across\s+the\s+uk|england\s+wide"), "National"),
)

# Every matching row adds its weight to the fit score
FIT_KEYWORDS: WeightTable = (
    (_ci(r"supply\s+of\s+electricity"), 6),
    (_ci(r"electricity\s+supply"), 5),
    (_ci(r"half[\s-]?hourly"), 5),
    (_ci(r"\bHH\s+(supply|data|meter)"), 5),
    (_ci(r"renewable\s+(energy|electricity)"), 4),
    (_ci(r"\bPPA\b|power\s+purchase\s+agreement"), 5),
    (_ci(r"\bREGO\b|renewable\s+energy\s+guarantee"), 5),
    (_ci(r"flexible\s+(purchas|supply|contract)"), 4),
    (_ci(r"green\s+tariff"), 4),
    (_ci(r"green\s+energy"), 3),
    (_ci(r"corporate\s+PPA|CPPA"), 5),
    (_ci(r"sleeved\s+PPA"), 5),
    (_ci(r"renewable\s+matching"), 4),
    (_ci(r"carbon\s+neutral"), 3),
    (_ci(r"net[\s-]?zero"), 3),
    (_ci(r"licensed\s+(electricity\s+)?supplier"), 5),
)

# CPV prefix bonuses; only the first (most specific) matching prefix counts
CPV_BONUSES: Tuple[Tuple[str, int], ...] = (
    ("09310", 4),  # Electricity
    ("09300", 3),  # Electricity, heating, solar and nuclear energy
    ("65310", 3),  # Electricity distribution
    ("31682", 2),  # Electricity supplies
    ("65000", 2),  # Public utilities
    ("09121", 2),
)

WIN_BONUSES: WeightTable = (
    (_ci(r"\bSME\b|sme[\s-]?friendly"), 2),
    (_ci(r"social\s+value"), 1),
    (_ci(r"local\s+supplier"), 1),
)

LARGE_FRAMEWORK_RE = _ci(r"framework")


def first_label(table: PatternTable, text: str, default: str) -> str:
    for pattern, label in table:
        if pattern.search(text):
            return label
    return default


def total_weight(table: WeightTable, text: str) -> int:
    return sum(weight for pattern, weight in table if pattern.search(text))
