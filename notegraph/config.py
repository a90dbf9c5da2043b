"""Configuration constants for the document graph pipeline."""

from pathlib import Path

# Directory names never descended into while scanning the corpus
EXCLUDE_DIRS = ("node_modules", "_site", ".git", "private")

HISTORY_FILENAME = ".learning-history.json"
DEFAULT_OUTPUT = Path("assets") / "data" / "knowledge-graph.json"

MAX_KEYWORDS = 15
MAX_CONCEPTS = 10
MAX_CLUSTER_KEYWORDS = 10
CONCEPT_MIN_LENGTH = 2  # exclusive bounds for bolded spans
CONCEPT_MAX_LENGTH = 50

# Difficulty heuristic weights
WORDS_PER_DIFFICULTY_POINT = 500
MAX_LENGTH_SCORE = 3
CONCEPT_WEIGHT = 0.2
CODE_BLOCK_WEIGHT = 0.3
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

SIMILARITY_THRESHOLD = 0.3

MOST_CONNECTED_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 30
WEEKS_PER_MONTH = 4.3

NEXT_TO_LEARN_LIMIT = 10
REVIEW_LIMIT = 10
REVIEW_MIN_DAYS = 7
SUGGESTED_KEYWORDS_LIMIT = 20
RELATED_DOCS_LIMIT = 5
LEARNING_PATH_STEPS = 8
WORDS_PER_MINUTE = 200

# Documents that are navigation or scaffolding, never study material
RECOMMENDATION_EXCLUDE_PATTERN = r"README|TEMPLATE|index\.md|NAVIGATION|JEKYLL"

LEARNING_PATH_TOPICS = [
    "algorithms",
    "languages",
    "web-development",
    "databases",
    "networking",
]

# Weekly goal multipliers per difficulty bucket
WEEKLY_GOAL_RATES = {
    "recommended": 0.05,
    "easy": 0.1,
    "medium": 0.05,
    "hard": 0.02,
}
WEEKLY_GOAL_MIN = 3
WEEKLY_GOAL_MAX = 7
