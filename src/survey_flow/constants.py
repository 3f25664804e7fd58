"""Survey-flow constants shared across the SDK.

These values are referenced by the navigator, the proceed checks, and the
answer piping substitutor.

Several constants can be overridden via environment variables so that
deployments can adjust limits without code changes.
"""

import os

# Question kinds that carry no answer.  The respondent can always proceed
# past them and they are excluded from progress counts.
DISPLAY_ONLY_TYPES: set[str] = {
    "SECTION_HEADER",
    "HIDDEN",
    "WELCOME_SCREEN",
    "END_SCREEN",
    "STATEMENT",
}

# Total a CONSTANT_SUM question must allocate when its settings omit ``total``.
# Overridable via DEFAULT_CONSTANT_SUM_TOTAL env var.
DEFAULT_CONSTANT_SUM_TOTAL = float(os.getenv("DEFAULT_CONSTANT_SUM_TOTAL", "100"))

# Upper bound on forward moves when replaying a path with fixed answers.
# Overridable via SURVEY_MAX_TRAVERSAL_STEPS env var.
MAX_TRAVERSAL_STEPS = int(os.getenv("SURVEY_MAX_TRAVERSAL_STEPS", "1000"))

# Number of title characters shown in the placeholder for an unanswered
# piped question, e.g. "[Your name is very very lon...]".
PIPE_PLACEHOLDER_TITLE_CHARS = int(os.getenv("PIPE_PLACEHOLDER_TITLE_CHARS", "30"))

# Field order used when piping an address-shaped answer into text.
ADDRESS_FIELDS: list[str] = ["street", "city", "state", "zip", "country"]
