import functools

import anthropic

from config.settings import ANTHROPIC_API_KEY, TIP_MODEL
from src.models import LogEntry

SYSTEM_PROMPT = """You're a caring, warm friend who knows a lot about menstrual health.
Keep it casual and conversational, not clinical.
Give practical, short tips, not long medical explanations.
If something sounds serious, gently recommend seeing a doctor.
Use at most one emoji.
Keep your response to 2-3 sentences."""

FALLBACK_TIP = "Be gentle with yourself today. Drink some water and rest when you can."


@functools.lru_cache(maxsize=1)
def get_client() -> anthropic.AsyncAnthropic:
    return anthropic.AsyncAnthropic(api_key=ANTHROPIC_API_KEY, max_retries=3)


def _format_entries_context(entries: list[LogEntry] | None) -> str:
    if not entries:
        return ""
    lines = []
    for entry in sorted(entries, key=lambda e: e.date, reverse=True)[:3]:
        parts = [f"flow {entry.flow.value}"]
        if entry.symptoms:
            parts.append("symptoms: " + ", ".join(entry.symptoms))
        if entry.mood:
            parts.append(f"mood: {entry.mood}")
        if entry.notes:
            parts.append(f"notes: {entry.notes}")
        lines.append(f"- {entry.date.isoformat()}: " + "; ".join(parts))
    return "\n\nRecent log entries:\n" + "\n".join(lines)


def _extract_text(response) -> str:
    if response.content:
        return response.content[0].text
    return FALLBACK_TIP


async def generate_wellness_tip(
    phase: str, day_of_cycle: int, entries: list[LogEntry] | None = None
) -> str:
    """Generate a short wellness tip for the given cycle phase and day."""
    user_msg = f"""It's day {day_of_cycle} of the menstrual cycle and the current phase is "{phase}".{_format_entries_context(entries)}

Give one short, encouraging tip for today."""

    response = await get_client().messages.create(
        model=TIP_MODEL,
        max_tokens=200,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": user_msg}],
    )
    return _extract_text(response)
