import fnmatch
import re
from .parser import AnalysisSummary, FileRecord, Snippet, collect_tags


NO_ADDED_LINES = "No added lines detected in the diff."
SNIPPET_DIVIDER = "---"


def indent_text(text: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in re.split(r"\r?\n", text))


def _render_snippet(snippet: Snippet) -> str:
    header = f"{snippet.location}\n" if snippet.location else ""
    return header + "\n".join(snippet.lines)


def _render_file(record: FileRecord) -> str:
    lines = [
        f"- File: {record.path}",
        f"  Added lines: {record.added_lines}",
    ]
    if record.heuristics:
        lines.append(f"  Signals: {', '.join(record.heuristics)}")
    if record.snippets:
        previews = f"\n{SNIPPET_DIVIDER}\n".join(_render_snippet(s) for s in record.snippets)
        lines.append("  Snippets:\n" + indent_text(previews, 4))
    return "\n".join(lines)


def render_summary(summary: AnalysisSummary) -> str:
    """Render the analysis as a plain-text block for the model prompt."""
    if not summary.files:
        return NO_ADDED_LINES
    return "\n\n".join(_render_file(record) for record in summary.files)


def exclude_files(summary: AnalysisSummary, patterns: list[str]) -> AnalysisSummary:
    """Drop files matching any fnmatch pattern and recompute highlighted tags."""
    if not patterns:
        return summary
    kept = [
        record for record in summary.files
        if not any(fnmatch.fnmatch(record.path, pattern) for pattern in patterns)
    ]
    return AnalysisSummary(files=kept, highlighted_tags=collect_tags(kept))
