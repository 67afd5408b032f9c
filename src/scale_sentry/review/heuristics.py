import re
import logging
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeuristicRule:
    """A named predicate flagging a risk category in an added line."""
    id: str
    description: str
    predicate: Callable[[str, str], bool]


def regex_rule(
    rule_id: str,
    description: str,
    pattern: str,
    path_pattern: str | None = None,
) -> HeuristicRule:
    """Build a case-insensitive rule matching the line, or optionally the file path."""
    line_re = re.compile(pattern, re.IGNORECASE)
    path_re = re.compile(path_pattern, re.IGNORECASE) if path_pattern else None

    def predicate(line: str, path: str) -> bool:
        if line_re.search(line):
            return True
        return bool(path_re and path_re.search(path))

    return HeuristicRule(id=rule_id, description=description, predicate=predicate)


DEFAULT_RULES: tuple[HeuristicRule, ...] = (
    regex_rule(
        "database",
        "Database or query-intensive changes",
        r"(select\s+.+from|insert\s+into|update\s+.+set|delete\s+from|prisma\.|supabase\.|knex\.|sequelize\."
        r"|db\.query|\bquery\s*\(|\.raw\s*\(|\.transaction\s*\(|\.aggregate\s*\(|session\.execute\s*\(|\.objects\.)",
    ),
    regex_rule(
        "api-endpoint",
        "New or modified API endpoint handlers",
        r"(router\.(get|post|put|patch|delete)|app\.(get|post|put|patch|delete|route)"
        r"|export\s+(async\s+)?function\s+(GET|POST|PUT|PATCH|DELETE)|handler\s*=\s*async"
        r"|createPagesBrowserClient|NextResponse\.json|RequestHandler|Fastify\.)",
        path_pattern=r"routes?/",
    ),
    regex_rule(
        "loops",
        "Loops or iterations that could amplify load",
        r"(for\s*\(|while\s*\(|for\s+await|\.map\(|\.filter\(|\.reduce\(|\.forEach\(|\.flatMap\("
        r"|for\s+const\s+\[|Promise\.all\s*\(|Promise\.allSettled\s*\(|asyncio\.gather\s*\()",
    ),
    regex_rule(
        "external-calls",
        "Outbound network or third-party service calls",
        r"(fetch\(|axios\.|got\.|request\(|graphql\(|supabase\.from|stripe\.|twilio\.|s3\.|storage\."
        r"|await\s+rpc\(|httpx\.|requests\.(get|post|put|patch|delete))",
    ),
    regex_rule(
        "cpu-intensive",
        "CPU-intensive work (encryption, parsing, etc.)",
        r"(crypto\.|bcrypt\.|argon|scrypt|JSON\.parse|JSON\.stringify|zlib\.|pako\.|compression|image\."
        r"|sharp\.|for\s*\(.*length|Math\.(pow|sqrt|log)|new\s+RegExp|hashlib\.|re\.compile\s*\()",
    ),
    regex_rule(
        "concurrency",
        "Explicit concurrency or worker usage",
        r"(queue\.|worker\.|Bull\.|broker\.|cluster\.|threads\.|setImmediate|setTimeout|Atomics\."
        r"|SharedArrayBuffer|ThreadPoolExecutor|ProcessPoolExecutor)",
    ),
)


def match_rules(rules: tuple[HeuristicRule, ...] | list[HeuristicRule], line: str, path: str) -> list[str]:
    """Return descriptions of the rules that match, in rule order.

    A predicate that raises counts as a non-match.
    """
    matched = []
    for rule in rules:
        try:
            hit = rule.predicate(line, path)
        except Exception as e:
            logger.debug(f"Heuristic '{rule.id}' failed on {path}: {e}")
            continue
        if hit:
            matched.append(rule.description)
    return matched
