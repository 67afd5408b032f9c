from .parser import AnalysisSummary


def build_report(
    pull_number: int,
    repo_full_name: str,
    model: str,
    content: str,
    summary: AnalysisSummary,
    truncated: bool = False,
    reviewer_name: str = "Scale Sentry AI",
) -> str:
    """Wrap the model output in the report posted on the pull request."""
    added = sum(record.added_lines for record in summary.files)
    header = [
        "## Scalability Simulator Report",
        f"- Repository: {repo_full_name}",
        f"- Pull Request: #{pull_number}",
        f"- Model: {model}",
        f"- Files with additions: {len(summary.files)} ({added} added lines)",
    ]
    if summary.highlighted_tags:
        header.append(f"- Signals: {', '.join(summary.highlighted_tags)}")
    if truncated:
        header.append("- Note: Diff truncated for analysis")

    footer = f"---\nGenerated by {reviewer_name}"
    return "\n".join(header) + f"\n\n{content}\n\n{footer}"
