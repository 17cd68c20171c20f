import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PACKAGE_DIR = Path(__file__).parent
DEFAULT_LOOKUP_TABLES_PATH = PACKAGE_DIR / "data" / "lookup_tables.json"
LOOKUP_TABLES_PATH = Path(
    os.getenv("TALENTRANK_LOOKUP_TABLES", str(DEFAULT_LOOKUP_TABLES_PATH))
)
CANDIDATES_FILE = Path(os.getenv("TALENTRANK_CANDIDATES_FILE", "data/candidates.json"))
CANDIDATE_CACHE_SECONDS = float(os.getenv("CANDIDATE_CACHE_SECONDS", "5"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# LLM settings (Groq)
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
LLM_TEMPERATURE = 0.0
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "8"))
LLM_MAX_RETRIES = 1

# Embedding model (fastembed uses ONNX Runtime)
EMBEDDING_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
EMBEDDING_CONCURRENCY = int(os.getenv("EMBEDDING_CONCURRENCY", "16"))

# Requirement ranking weights (points on a 0-100 scale)
ROLE_WEIGHT = 45
ROLE_MISMATCH_PENALTY = 20
ROLE_MATCH_THRESHOLD = 0.3
RESPONSIBILITY_WEIGHT = 30
EXPERIENCE_WEIGHT = 20
LOCATION_WEIGHT = 15
SKILLS_WEIGHT = 15
EDUCATION_WEIGHT = 5
MAX_RELEVANCE = 0.95
MIN_RELEVANCE = 0.15

# Display thresholds for matching criteria
RESPONSIBILITY_DISPLAY_THRESHOLD = 0.1
EXPERIENCE_DISPLAY_THRESHOLD = 0.2
LOCATION_DISPLAY_THRESHOLD = 0.2
SKILLS_DISPLAY_THRESHOLD = 0.1
EDUCATION_DISPLAY_THRESHOLD = 0.2

# Responsibility matching
RESPONSIBILITY_PHRASE_WEIGHT = 1.5
RESPONSIBILITY_KEYWORD_RATIO = 0.6
RESPONSIBILITY_COVERAGE_TARGET = 0.7

# Keyword search
KEYWORD_FIELD_WEIGHTS = {
    "name": 0.2,
    "current_role": 0.35,
    "desired_role": 0.2,
    "technical_skills": 0.3,
    "soft_skills": 0.1,
    "current_company": 0.1,
    "location": 0.15,
    "summary": 0.15,
    "resume_text": 0.1,
}
KEYWORD_PHRASE_BOOST = 1.2
KEYWORD_TERM_BASE = 0.6
KEYWORD_OCCURRENCE_STEP = 0.25
KEYWORD_COVERAGE_WEIGHT = 0.2
KEYWORD_MIN_SCORE = 0.15
KEYWORD_MAX_RESULTS = 200

# Manual filter search
MANUAL_MIN_RELEVANCE = 0.3

# Similar candidates (job description drafting)
SIMILARITY_THRESHOLD = 0.3
SIMILAR_TOP_N = 15
FUZZY_MATCH_THRESHOLD = 80
JD_REFERENCE_CANDIDATES = 10
