from scale_sentry.models.report import ChatMessage


SYSTEM_PROMPT = (
    "You are Scale Sentry, an elite performance engineer. Evaluate pull request diffs to forecast "
    "scalability risks, pinpoint bottlenecks, and recommend mitigation with evidence-backed reasoning."
)

TRUNCATION_NOTE = (
    "Note: The diff exceeded the analyzer limit and was truncated. "
    "Call this out explicitly if it affects confidence."
)

RESPONSE_FORMAT = """Please respond with GitHub-flavoured Markdown using this structure:
1. **Summary** - bullet list of the top 3 risks or 'No significant scalability risks detected'.
2. **Simulated Bottlenecks** - Markdown table with columns Component, Predicted Issue, Load Threshold (req/s), Latency Impact (ms), Confidence (%).
3. **Recommended Fixes** - ordered list with actionable optimisations aligned to the issues.
4. **Quick Wins** - bullet list of low-effort improvements or 'None'.
5. **Confidence** - percentage with a one-sentence justification.
If information is missing, state assumptions instead of inventing details."""


def truncate_diff(diff: str, limit: int) -> tuple[str, bool]:
    """Cut the diff to `limit` characters. Returns (text, truncated)."""
    if len(diff) <= limit:
        return diff, False
    return f"{diff[:limit]}\n... (diff truncated after {limit} characters)", True


def build_prompt(
    language: str,
    traffic_profile: str,
    heuristic_summary: str,
    diff: str,
    truncated: bool = False,
) -> list[ChatMessage]:
    """Build the system and user messages for the scalability review."""
    sections = [
        f"Primary stack focus: {language}",
        f"Traffic scenario to model: {traffic_profile}",
        f"Heuristic highlights (derived automatically):\n{heuristic_summary}",
    ]
    if truncated:
        sections.append(TRUNCATION_NOTE)
    sections.append(RESPONSE_FORMAT)
    sections.append(f"Diff to analyse (Git unified format):\n\n```diff\n{diff}\n```")

    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content="\n\n".join(sections)),
    ]
