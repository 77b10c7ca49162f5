"""Phonics pattern catalog and developmental word banks.

Word banks list example words per pattern and grade, lowest grade first.
Banks are cumulative when queried: a grade sees its own words plus all
earlier grades' words.
"""

import re

GRADE_ORDER = ("K", "1", "2", "3", "4", "5", "6")

# Catalog order is lookup priority for skill descriptions, so a longer
# pattern always precedes any catalog pattern it contains.
PHONICS_PATTERNS: dict[str, re.Pattern] = {
    # Trigraphs and digraphs
    "tch": re.compile(r"tch", re.I),
    "dge": re.compile(r"dge", re.I),
    "sh": re.compile(r"sh", re.I),
    "ch": re.compile(r"ch", re.I),
    "th": re.compile(r"th", re.I),
    "wh": re.compile(r"wh", re.I),
    "ph": re.compile(r"ph", re.I),
    "ck": re.compile(r"ck", re.I),
    "ng": re.compile(r"ng", re.I),

    # Blends (word-initial)
    "scr": re.compile(r"\bscr", re.I),
    "spr": re.compile(r"\bspr", re.I),
    "str": re.compile(r"\bstr", re.I),
    "spl": re.compile(r"\bspl", re.I),
    "squ": re.compile(r"\bsqu", re.I),
    "bl": re.compile(r"\bbl", re.I),
    "br": re.compile(r"\bbr", re.I),
    "cl": re.compile(r"\bcl", re.I),
    "cr": re.compile(r"\bcr", re.I),
    "dr": re.compile(r"\bdr", re.I),
    "fl": re.compile(r"\bfl", re.I),
    "fr": re.compile(r"\bfr", re.I),
    "gl": re.compile(r"\bgl", re.I),
    "gr": re.compile(r"\bgr", re.I),
    "pl": re.compile(r"\bpl", re.I),
    "pr": re.compile(r"\bpr", re.I),
    "sc": re.compile(r"\bsc", re.I),
    "sk": re.compile(r"\bsk", re.I),
    "sl": re.compile(r"\bsl", re.I),
    "sm": re.compile(r"\bsm", re.I),
    "sn": re.compile(r"\bsn", re.I),
    "sp": re.compile(r"\bsp", re.I),
    "st": re.compile(r"\bst", re.I),
    "sw": re.compile(r"\bsw", re.I),
    "tr": re.compile(r"\btr", re.I),
    "tw": re.compile(r"\btw", re.I),

    # Three-letter vowel patterns
    "igh": re.compile(r"igh", re.I),
    "ear": re.compile(r"ear", re.I),
    "air": re.compile(r"air", re.I),
    "ore": re.compile(r"ore", re.I),
    "are": re.compile(r"are", re.I),

    # Long vowel teams
    "ai": re.compile(r"ai", re.I),
    "ay": re.compile(r"ay", re.I),
    "ea": re.compile(r"ea", re.I),
    "ee": re.compile(r"ee", re.I),
    "ie": re.compile(r"ie", re.I),
    "oa": re.compile(r"oa", re.I),
    "oe": re.compile(r"oe", re.I),
    "ue": re.compile(r"ue", re.I),
    "ui": re.compile(r"ui", re.I),
    "ew": re.compile(r"ew", re.I),

    # R-controlled
    "ar": re.compile(r"ar", re.I),
    "er": re.compile(r"er", re.I),
    "ir": re.compile(r"ir", re.I),
    "or": re.compile(r"or", re.I),
    "ur": re.compile(r"ur", re.I),

    # Diphthongs
    "au": re.compile(r"au", re.I),
    "aw": re.compile(r"aw", re.I),
    "oi": re.compile(r"oi", re.I),
    "oy": re.compile(r"oy", re.I),
    "ou": re.compile(r"ou", re.I),
    "ow": re.compile(r"ow", re.I),

    # Consonant-vowel-consonant words
    "cvc": re.compile(r"^[bcdfghjklmnpqrstvwxyz][aeiou][bcdfghjklmnpqrstvwxyz]$", re.I),
}

PATTERN_FAMILIES = {
    "digraph": ("tch", "dge", "sh", "ch", "th", "wh", "ph", "ck", "ng"),
    "blend": (
        "scr", "spr", "str", "spl", "squ", "bl", "br", "cl", "cr", "dr", "fl", "fr",
        "gl", "gr", "pl", "pr", "sc", "sk", "sl", "sm", "sn", "sp", "st", "sw", "tr", "tw",
    ),
    "long vowel": ("igh", "ai", "ay", "ea", "ee", "ie", "oa", "oe", "ue", "ui", "ew"),
    "r-controlled": ("ear", "air", "ore", "are", "ar", "er", "ir", "or", "ur"),
    "diphthong": ("au", "aw", "oi", "oy", "ou", "ow"),
}

PHONICS_WORD_BANKS: dict[str, dict[str, list[str]]] = {
    # -------------------------
    # CONSONANT DIGRAPHS
    # -------------------------
    "sh": {
        "K": ["she"],
        "1": ["shop", "ship", "fish", "wish"],
        "2": ["shell", "shine", "flash", "brush", "fresh", "splash", "rush"],
        "3": ["foolish", "selfish", "bashful", "sunshine", "marshmallow"],
        "4": ["accomplish", "establish", "polish", "astonish", "refreshing"],
        "5": ["distinguished", "relationship", "scholarship", "establishment"],
        "6": ["sophisticated", "accomplishment", "distinguishable", "refreshment"]
    },
    "ch": {
        "K": ["chin"],
        "1": ["chat", "chop", "much", "rich"],
        "2": ["chair", "lunch", "reach", "beach", "teach", "branch"],
        "3": ["chapter", "teacher", "kitchen", "children", "sandwich"],
        "4": ["chocolate", "mechanic", "architect", "approach", "research"],
        "5": ["achievement", "archaeology", "technology", "architecture"],
        "6": ["characteristic", "choreography", "chronological", "mechanical"]
    },
    "th": {
        "K": ["the"],
        "1": ["that", "this", "then", "with"],
        "2": ["thing", "think", "three", "thank", "path", "math"],
        "3": ["brother", "mother", "father", "nothing", "something"],
        "4": ["together", "weather", "although", "birthday", "everything"],
        "5": ["mathematics", "throughout", "strengthen", "enthusiasm"],
        "6": ["authentication", "mathematician", "hypothetical", "sympathetic"]
    },
    "wh": {
        "K": [],
        "1": ["what", "when", "why"],
        "2": ["where", "white", "whale", "wheel", "while"],
        "3": ["whisper", "whistle", "whether", "somewhere"],
        "4": ["meanwhile", "whenever", "wherever", "overwhelm"],
        "5": ["overwhelmed", "overwhelming", "worthwhile"],
        "6": ["whereabouts", "overwhelmingly", "worthwhileness"]
    },
    "ph": {
        "K": [],
        "1": [],
        "2": ["phone"],
        "3": ["photo", "graph", "elephant"],
        "4": ["paragraph", "telephone", "alphabet", "photograph"],
        "5": ["geography", "biography", "philosophy", "symphony"],
        "6": ["photographer", "philosophical", "autobiography", "sophisticated"]
    },
    "ck": {
        "K": ["back"],
        "1": ["duck", "pack", "sock"],
        "2": ["pocket", "ticket", "rocket"],
        "3": ["backpack", "unlock", "thickest"],
        "4": ["knapsack", "checklist", "stockpile"],
        "5": ["interlock", "feedback", "hijack"],
        "6": ["counterattack", "reconstruct", "overclock"]
    },
    "ng": {
        "K": ["sing"],
        "1": ["ring", "long", "song"],
        "2": ["bring", "thing", "strong"],
        "3": ["belong", "spring", "string"],
        "4": ["clinging", "happening", "beginning"],
        "5": ["belonging", "outstanding", "undergoing"],
        "6": ["overhanging", "misunderstanding", "accompanying"]
    },
    "tch": {
        "K": ["catch"],
        "1": ["match", "witch", "pitch"],
        "2": ["kitchen", "stretch", "hatch"],
        "3": ["scratch", "dispatch", "snatch"],
        "4": ["outstretch", "sketching", "watchman"],
        "5": ["dispatching", "outmatched", "sketchbook"],
        "6": ["unmatched", "overstretched", "sketchiness"]
    },
    "dge": {
        "K": [],
        "1": ["badge", "edge"],
        "2": ["bridge", "judge", "fudge"],
        "3": ["knowledge", "pledge", "hedge"],
        "4": ["acknowledge", "abridge", "smudged"],
        "5": ["unacknowledged", "abridgment", "hedgerow"],
        "6": ["acknowledgment", "abridgements", "hedgehog"]
    },

    # -------------------------
    # CONSONANT BLENDS
    # -------------------------
    "bl": {
        "K": [],
        "1": ["blue", "blow"],
        "2": ["black", "block", "bloom", "blend", "blank"],
        "3": ["blanket", "problem", "trouble", "grumble"],
        "4": ["blizzard", "emblem", "incredible", "responsible"],
        "5": ["reasonable", "horrible", "terrible"],
        "6": ["unbelievable", "irresponsible", "uncomfortable"]
    },
    "br": {
        "K": [],
        "1": ["brown"],
        "2": ["bring", "brave", "bright", "bread", "break"],
        "3": ["brother", "breathe", "breakfast", "library"],
        "4": ["celebrate", "remember", "October", "November"],
        "5": ["celebration", "abbreviation"],
        "6": ["extraordinary", "embraceable"]
    },
    "cl": {
        "K": [],
        "1": ["clap"],
        "2": ["class", "clean", "close", "clock", "cloud"],
        "3": ["clothes", "climb", "include", "uncle"],
        "4": ["bicycle", "article", "particle"],
        "5": ["include", "conclude", "exclusive"],
        "6": ["exclusively", "including", "concluding"]
    },
    "dr": {
        "K": [],
        "1": ["drum", "drop"],
        "2": ["drink", "drive", "dream"],
        "3": ["dragon", "drawer", "dread"],
        "4": ["address", "drastic", "dribble"],
        "5": ["hydraulic", "dreadful", "dramatize"],
        "6": ["dramatically", "hydraulics", "overdramatize"]
    },
    "fr": {
        "K": [],
        "1": ["frog", "from"],
        "2": ["free", "fresh", "friend"],
        "3": ["frozen", "fright", "fringe"],
        "4": ["framework", "fragrance", "friction"],
        "5": ["infrastructure", "frustration", "fractional"],
        "6": ["reconfiguration", "fractionation", "frictionless"]
    },
    "gr": {
        "K": [],
        "1": ["green", "grab"],
        "2": ["great", "grass", "grow"],
        "3": ["ground", "grape", "grind"],
        "4": ["graduate", "grammar", "grumble"],
        "5": ["aggregation", "gratitude", "gravitate"],
        "6": ["congratulations", "gravitational", "aggregation"]
    },
    "pr": {
        "K": [],
        "1": ["prize", "print"],
        "2": ["press", "proud", "prove"],
        "3": ["problem", "protect", "promise"],
        "4": ["progress", "project", "process"],
        "5": ["provision", "promotion", "proportion"],
        "6": ["procrastination", "pronunciation", "proliferation"]
    },
    "tr": {
        "K": [],
        "1": ["tree", "trip"],
        "2": ["train", "trap", "true"],
        "3": ["treat", "track", "trade"],
        "4": ["transport", "translate", "transform"],
        "5": ["transmission", "transition", "transaction"],
        "6": ["transcontinental", "transformation", "transfiguration"]
    },
    "scr": {
        "K": [],
        "1": [],
        "2": ["scrap", "scrub", "screw"],
        "3": ["screen", "scrape", "scratch"],
        "4": ["scrolling", "scramble", "scrutiny"],
        "5": ["description", "prescription", "subscription"],
        "6": ["inscription", "circumscription", "transcription"]
    },
    "spr": {
        "K": [],
        "1": [],
        "2": ["spring", "spray", "spread"],
        "3": ["sprout", "sprang", "spruce"],
        "4": ["sprinkle", "sprinter", "sprained"],
        "5": ["springtime", "spreadsheet", "sprinkling"],
        "6": ["unspringing", "resprinkling", "springboard"]
    },
    "str": {
        "K": [],
        "1": [],
        "2": ["street", "strap", "strip"],
        "3": ["strong", "strike", "string"],
        "4": ["struggle", "stranger", "strategy"],
        "5": ["strengthen", "streamline", "structure"],
        "6": ["infrastructure", "misconstruction", "restructuring"]
    },
    "spl": {
        "K": [],
        "1": [],
        "2": ["split", "splash", "splat"],
        "3": ["splendid", "splinter", "splurge"],
        "4": ["splatter", "splitting", "splashed"],
        "5": ["splattering", "splintering", "splendour"],
        "6": ["unsplintered", "resplendent", "splinterproof"]
    },
    "squ": {
        "K": [],
        "1": [],
        "2": ["squid", "squat", "squash"],
        "3": ["square", "squeeze", "squirm"],
        "4": ["squirrel", "squabble", "squander"],
        "5": ["squiggly", "squashable", "squashiness"],
        "6": ["unsquashable", "squashinesses", "squarishness"]
    },

    # -------------------------
    # LONG VOWEL PATTERNS
    # -------------------------
    "ai": {
        "K": [],
        "1": [],
        "2": ["rain", "pain", "main", "train", "brain"],
        "3": ["explain", "remain", "afraid", "captain"],
        "4": ["mountain", "fountain", "certain", "curtain"],
        "5": ["maintain", "complain", "sustain", "obtain"],
        "6": ["entertainment", "ascertainment", "mountains"]
    },
    "ay": {
        "K": [],
        "1": ["day", "say", "way", "may", "play"],
        "2": ["today", "away", "always", "maybe", "birthday"],
        "3": ["yesterday", "holiday", "everyday", "anyway"],
        "4": ["Wednesday", "Saturday", "February", "January"],
        "5": ["anniversary", "extraordinary", "missionary"],
        "6": ["contemporary", "revolutionary", "extraordinary"]
    },
    "oa": {
        "K": [],
        "1": ["boat", "coat", "road"],
        "2": ["coach", "float", "throat"],
        "3": ["approach", "oatmeal", "goalpost"],
        "4": ["overload", "boasting", "coasting"],
        "5": ["floatation", "overcoat", "broadcoat"],
        "6": ["undercoating", "overboasting", "goalkeeping"]
    },
    "oe": {
        "K": [],
        "1": ["toe"],
        "2": ["foe", "hoe", "doe"],
        "3": ["goes", "heroes", "oboe"],
        "4": ["overthrow", "foreclose", "toeprint"],
        "5": ["foreboding", "foregoing", "foretold"],
        "6": ["foreknowledge", "foreordination", "foreclosure"]
    },
    "ie": {
        "K": [],
        "1": ["pie", "tie"],
        "2": ["die", "lie", "vie"],
        "3": ["chief", "thief", "brief"],
        "4": ["belief", "relief", "achieve"],
        "5": ["achievement", "grievance", "retrieval"],
        "6": ["misbelief", "unbelievable", "perceivable"]
    },
    "igh": {
        "K": [],
        "1": ["high"],
        "2": ["light", "night", "right"],
        "3": ["bright", "flight", "fright"],
        "4": ["delight", "insight", "twilight"],
        "5": ["highlight", "foresight", "oversight"],
        "6": ["enlightenment", "foresightedness", "overhighlight"]
    },
    "ee": {
        "K": [],
        "1": ["see", "bee", "tree"],
        "2": ["keep", "sleep", "green", "three", "free"],
        "3": ["thirteen", "fourteen", "fifteen", "between"],
        "4": ["agreement", "seventeen", "eighteen", "nineteen"],
        "5": ["committee", "guarantee", "volunteer", "engineering"],
        "6": ["engineering", "disagreement", "volunteering"]
    },
    "ea": {
        "K": [],
        "1": [],
        "2": ["eat", "sea", "tea", "read", "meat"],
        "3": ["teacher", "feature", "creature", "treasure"],
        "4": ["breakfast", "weather", "sweater", "feather"],
        "5": ["treatment", "agreement", "measurement", "achievement"],
        "6": ["entertainment", "disagreement", "rearrangement"]
    },
    "ew": {
        "K": [],
        "1": ["new", "few"],
        "2": ["blew", "grew", "threw"],
        "3": ["chew", "stew", "crew"],
        "4": ["review", "interview", "renew"],
        "5": ["preview", "overthrew", "withdrew"],
        "6": ["interviewer", "reviewable", "renewable"]
    },
    "ui": {
        "K": [],
        "1": [],
        "2": ["fruit", "suit"],
        "3": ["juice", "bruise", "pursuit"],
        "4": ["circuit", "cruise", "suitable"],
        "5": ["pursuing", "suitcase", "fruitful"],
        "6": ["circuitous", "unsuitable", "recruitment"]
    },

    # -------------------------
    # DIPHTHONGS & OTHER VOWEL TEAMS
    # -------------------------
    "ou": {
        "K": [],
        "1": ["out", "our"],
        "2": ["house", "mouse", "found"],
        "3": ["flower", "shout", "cloud"],
        "4": ["powerful", "allowance", "trouble"],
        "5": ["pronounce", "announce", "renounce"],
        "6": ["mispronounce", "announcement", "renouncement"]
    },
    "ow": {
        "K": [],
        "1": ["cow", "how", "now"],
        "2": ["brown", "down", "town"],
        "3": ["flower", "shower", "power"],
        "4": ["allow", "endow", "bestow"],
        "5": ["disallow", "overthrow", "withdrew"],
        "6": ["foreshadow", "overpower", "disempower"]
    },
    "oi": {
        "K": [],
        "1": ["oil", "boil"],
        "2": ["coin", "join", "point"],
        "3": ["voice", "choice", "spoil"],
        "4": ["appoint", "rejoice", "avoid"],
        "5": ["appointment", "disjointed", "loyalty"],
        "6": ["reappointment", "unavoidable", "disloyalty"]
    },
    "oy": {
        "K": [],
        "1": ["boy", "toy"],
        "2": ["joy", "enjoy", "ploy"],
        "3": ["royal", "loyal", "annoy"],
        "4": ["employ", "destroy", "deploy"],
        "5": ["employment", "enjoyment", "deployment"],
        "6": ["redeployment", "unemployment", "overjoyed"]
    },
    "au": {
        "K": [],
        "1": ["aunt", "auto"],
        "2": ["author", "haul", "fault"],
        "3": ["autumn", "pause", "cause"],
        "4": ["laundry", "auction", "audience"],
        "5": ["automatic", "autograph", "auditory"],
        "6": ["automation", "authorization", "autonomous"]
    },
    "aw": {
        "K": [],
        "1": ["saw", "paw"],
        "2": ["draw", "straw", "claw"],
        "3": ["crawl", "lawn", "yawn"],
        "4": ["awkward", "lawyer", "flawless"],
        "5": ["outlawed", "withdrawal", "overaw"],
        "6": ["foresaw", "outlawing", "withdrawals"]
    },

    # -------------------------
    # R-CONTROLLED VOWELS
    # -------------------------
    "ar": {
        "K": [],
        "1": ["car", "far", "arm"],
        "2": ["park", "farm", "star", "hard", "start"],
        "3": ["garden", "market", "partner", "apartment"],
        "4": ["particular", "ordinary", "barbarian"],
        "5": ["remarkable", "regarding", "apparatus"],
        "6": ["extraordinary", "particularly", "apparatus"]
    },
    "er": {
        "K": [],
        "1": [],
        "2": ["her", "over", "under", "after", "water"],
        "3": ["sister", "brother", "mother", "father", "other"],
        "4": ["however", "remember", "together", "another"],
        "5": ["nevertheless", "temperature", "different"],
        "6": ["refrigerator", "temperature", "nevertheless"]
    },
    "ir": {
        "K": [],
        "1": [],
        "2": ["bird", "girl", "first", "dirt"],
        "3": ["shirt", "third", "birthday", "circle"],
        "4": ["thirteen", "thirty", "confirm", "Birmingham"],
        "5": ["circulate", "circumstance", "Birmingham"],
        "6": ["circulation", "circumstances", "Birmingham"]
    },
    "or": {
        "K": [],
        "1": ["for", "or"],
        "2": ["more", "store", "door", "floor", "four"],
        "3": ["before", "morning", "important", "story"],
        "4": ["therefore", "explore", "support", "record"],
        "5": ["enormous", "performance", "transformed", "information"],
        "6": ["extraordinary", "performance", "transformed"]
    },
    "ur": {
        "K": [],
        "1": [],
        "2": ["turn", "burn", "hurt", "fur"],
        "3": ["during", "return", "turtle", "purple"],
        "4": ["furniture", "adventure", "picture"],
        "5": ["temperature", "cultural", "capture"],
        "6": ["architectural", "agricultural", "cultural"]
    },
    "ear": {
        "K": [],
        "1": ["ear"],
        "2": ["hear", "near", "fear"],
        "3": ["clear", "dear", "year"],
        "4": ["appear", "disappear", "volunteer"],
        "5": ["engineering", "reappearance", "clearance"],
        "6": ["mishearing", "unearthing", "reengineering"]
    },
    "air": {
        "K": [],
        "1": ["air"],
        "2": ["hair", "fair", "pair"],
        "3": ["chair", "stair", "repair"],
        "4": ["airplane", "airline", "airborne"],
        "5": ["millionaire", "declaration", "preparation"],
        "6": ["humanitarian", "declarative", "preparatory"]
    },
    "ore": {
        "K": [],
        "1": ["ore"],
        "2": ["more", "store", "core"],
        "3": ["before", "ignore", "score"],
        "4": ["explore", "restore", "shoreline"],
        "5": ["foresee", "foresight", "foreman"],
        "6": ["foreknowledge", "restoration", "exploration"]
    },
    "are": {
        "K": [],
        "1": ["are"],
        "2": ["care", "share", "bare"],
        "3": ["aware", "compare", "prepare"],
        "4": ["declare", "despair", "awarely"],
        "5": ["declaration", "preparation", "comparative"],
        "6": ["unpreparedness", "declarative", "comparatively"]
    }
}
