import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
ENTITY_KINDS = ("clients", "workers", "tasks")
REQUIRED_COLUMNS = _constants["REQUIRED_COLUMNS"]
ID_COLUMNS = _constants["ID_COLUMNS"]

MIN_PRIORITY_LEVEL = _constants["MIN_PRIORITY_LEVEL"]
MAX_PRIORITY_LEVEL = _constants["MAX_PRIORITY_LEVEL"]
HIGH_PRIORITY_LEVEL = _constants["HIGH_PRIORITY_LEVEL"]

MIN_QUALIFICATION_LEVEL = _constants["MIN_QUALIFICATION_LEVEL"]
MAX_QUALIFICATION_LEVEL = _constants["MAX_QUALIFICATION_LEVEL"]
QUALIFICATION_RANKS = _constants["QUALIFICATION_RANKS"]
SENIOR_QUALIFICATION_AVG = _constants["SENIOR_QUALIFICATION_AVG"]
JUNIOR_QUALIFICATION_AVG = _constants["JUNIOR_QUALIFICATION_AVG"]

SPEED_PRIORITY_KEYWORD = _constants["SPEED_PRIORITY_KEYWORD"]
DEFAULT_PRIORITY_WEIGHT = _constants["DEFAULT_PRIORITY_WEIGHT"]
DEFAULT_PHASE = _constants["DEFAULT_PHASE"]

BASE_CONFIDENCE = _constants["BASE_CONFIDENCE"]
SKILL_CONFIDENCE_BONUS = _constants["SKILL_CONFIDENCE_BONUS"]
PHASE_CONFIDENCE_BONUS = _constants["PHASE_CONFIDENCE_BONUS"]
LOAD_CONFIDENCE_BONUS = _constants["LOAD_CONFIDENCE_BONUS"]

RULE_KEYWORDS = [(name, tuple(words)) for name, words in _constants["RULE_KEYWORDS"]]
ATTRIBUTION_KEYWORDS = tuple(_constants["ATTRIBUTION_KEYWORDS"])

CLASSIFIER_TIMEOUT_SECONDS = _constants["CLASSIFIER_TIMEOUT_SECONDS"]
CLASSIFIER_MAX_ATTEMPTS = _constants["CLASSIFIER_MAX_ATTEMPTS"]
ADVISOR_BUDGET_SECONDS = _constants["ADVISOR_BUDGET_SECONDS"]
