"""Prompt construction for business matching and the chat assistant."""

from src.core.schemas import Business

NOT_AVAILABLE = "N/A"

MATCH_SYSTEM_PROMPT = (
    "You are a business matching algorithm that finds relevant local service "
    "providers for user queries. You reply with business IDs only."
)

ASSISTANT_SYSTEM_PROMPT = (
    "You are PRIZM, a direct and focused home improvement assistant. "
    "Answer exactly what is asked, no more and no less. "
    "Keep responses to 1-2 concise sentences.\n\n"
    "Key guidelines:\n"
    "- Answer only what is specifically asked\n"
    "- Use simple, clear English\n"
    "- If asked about non-home topics, simply state you can only help with home improvement\n"
    "- For dangerous tasks such as gas leaks, electrical hazards, or structural damage, "
    "briefly note that professional help is needed right away\n"
    "- Never promise specific prices\n"
    "- No additional suggestions or recommendations unless specifically requested"
)

_MATCH_INSTRUCTIONS = (
    "Analyze which businesses are relevant to the user's query. Consider what each "
    "business can actually do, not just literal keyword overlap: a request for a "
    "'home cooling solution' should match a business offering 'AC installation' or "
    "'HVAC' services.\n"
    "Only include businesses that are genuinely relevant to the query, ordered by "
    "relevance (most relevant first).\n"
    "Reply with ONLY a comma-separated list of business IDs, for example: 3, 1\n"
    "If none are relevant, reply with an empty message."
)


def _join(values: list[str] | None) -> str:
    return ", ".join(values) if values else NOT_AVAILABLE


def format_candidate(business: Business, position: int) -> str:
    """Render one business as a labeled record for the matching prompt."""
    rules = business.industry_rules
    return (
        f"Business {position}:\n"
        f"ID: {business.id}\n"
        f"Owner: User {business.user_id}\n"
        f"Description: {business.description or NOT_AVAILABLE}\n"
        f"Category: {business.category or NOT_AVAILABLE}\n"
        f"Location: {business.location or NOT_AVAILABLE}\n"
        f"Services: {_join(business.services)}\n"
        f"Keywords: {_join(rules.keywords if rules else None)}\n"
        f"Specializations: {_join(rules.specializations if rules else None)}"
    )


def build_match_prompt(query: str, candidates: list[Business]) -> str:
    """Assemble the user prompt asking the oracle to rank candidates for a query.

    Raises:
        ValueError: If there is nothing to match against.
    """
    if not candidates:
        msg = "cannot build a matching prompt without candidates"
        raise ValueError(msg)

    records = "\n\n".join(
        format_candidate(b, position) for position, b in enumerate(candidates, start=1)
    )
    return (
        "Match the following user query to the most relevant businesses.\n\n"
        f'User Query: "{query}"\n\n'
        f"{records}\n\n"
        f"{_MATCH_INSTRUCTIONS}"
    )
