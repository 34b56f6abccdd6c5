import re

# Queries that look legal go to the AI backend; small talk does not.
LEGAL_QUERY_RE = re.compile(
    r"\b(law|legal|ipc|section|police|court|lawyer|crime|theft|harassment|property"
    r"|accident|fraud|rights|complaint|fir)\b",
    re.IGNORECASE,
)

NO_MATCH_MESSAGE = "No direct match found. Please rephrase or choose a category from the menu."
NO_MATCH_SUGGESTION = "Try describing your situation in more detail or browse categories."

SOURCE_AI = "AI"
SOURCE_LOCAL = "Local"
