import re
from dataclasses import dataclass, field, replace
from enum import Enum
from .heuristics import DEFAULT_RULES, HeuristicRule, match_rules


MAX_SNIPPETS_PER_FILE = 3
MAX_LINES_PER_SNIPPET = 8

DELETED_FILE_PATH = "/dev/null"
_LINE_BREAK = re.compile(r"\r?\n")


class LineKind(str, Enum):
    FILE_SEPARATOR = "file-separator"
    NEW_FILE_HEADER = "new-file-header"
    HUNK_HEADER = "hunk-header"
    ADDED_LINE = "added-line"
    OTHER = "other"


@dataclass
class Snippet:
    location: str | None
    lines: list[str] = field(default_factory=list)


@dataclass
class FileRecord:
    path: str
    added_lines: int = 0
    heuristics: list[str] = field(default_factory=list)
    snippets: list[Snippet] = field(default_factory=list)


@dataclass
class AnalysisSummary:
    files: list[FileRecord]
    highlighted_tags: list[str]


@dataclass(frozen=True)
class ParseCursor:
    """Scan-local pointers: active file, active snippet and last hunk header."""
    file: FileRecord | None = None
    snippet: Snippet | None = None
    location: str | None = None


def classify_line(line: str) -> LineKind:
    if line.startswith("diff --git"):
        return LineKind.FILE_SEPARATOR
    if line.startswith("+++ "):
        return LineKind.NEW_FILE_HEADER
    if line.startswith("@@"):
        return LineKind.HUNK_HEADER
    if line.startswith("+") and not line.startswith("+++"):
        return LineKind.ADDED_LINE
    return LineKind.OTHER


def normalize_path(path: str) -> str:
    return path[2:] if path.startswith("b/") else path


def _contains(snippets: list[Snippet], snippet: Snippet) -> bool:
    return any(s is snippet for s in snippets)


def _collect_added_line(cursor: ParseCursor, content: str) -> ParseCursor:
    file = cursor.file
    file.added_lines += 1

    snippet = cursor.snippet
    if (
        snippet is None
        or not _contains(file.snippets, snippet)
        or len(snippet.lines) >= MAX_LINES_PER_SNIPPET
    ):
        if len(file.snippets) < MAX_SNIPPETS_PER_FILE:
            snippet = Snippet(location=cursor.location)
            file.snippets.append(snippet)
        else:
            snippet = None

    if snippet is not None:
        snippet.lines.append(content)
    return replace(cursor, snippet=snippet)


def step(
    files: dict[str, FileRecord],
    cursor: ParseCursor,
    line: str,
    rules: tuple[HeuristicRule, ...] | list[HeuristicRule] = DEFAULT_RULES,
) -> ParseCursor:
    """Apply one diff line to the file table and return the next cursor."""
    kind = classify_line(line)

    if kind is LineKind.FILE_SEPARATOR:
        return ParseCursor()

    if kind is LineKind.NEW_FILE_HEADER:
        path = line[4:].strip()
        if path == DELETED_FILE_PATH:
            return ParseCursor()
        path = normalize_path(path)
        record = files.get(path)
        if record is None:
            record = files[path] = FileRecord(path=path)
        return ParseCursor(file=record)

    if kind is LineKind.HUNK_HEADER:
        return replace(cursor, snippet=None, location=line.strip())

    if kind is LineKind.ADDED_LINE:
        if cursor.file is None:
            return cursor
        content = line[1:]
        cursor = _collect_added_line(cursor, content)
        heuristics = cursor.file.heuristics
        for description in match_rules(rules, content, cursor.file.path):
            if description not in heuristics:
                heuristics.append(description)
        return cursor

    # Context, removed and unrecognized lines only break the current snippet.
    return replace(cursor, snippet=None)


def analyze_diff(
    diff_text: str,
    rules: tuple[HeuristicRule, ...] | list[HeuristicRule] = DEFAULT_RULES,
) -> AnalysisSummary:
    """Count added lines, capture snippets and tag risk heuristics per file."""
    files: dict[str, FileRecord] = {}
    cursor = ParseCursor()

    for line in _LINE_BREAK.split(diff_text):
        cursor = step(files, cursor, line, rules)

    changed = [record for record in files.values() if record.added_lines > 0]
    return AnalysisSummary(files=changed, highlighted_tags=collect_tags(changed))


def collect_tags(files: list[FileRecord]) -> list[str]:
    tags: list[str] = []
    for record in files:
        for description in record.heuristics:
            if description not in tags:
                tags.append(description)
    return tags
