import pytest
from scale_sentry.review.heuristics import DEFAULT_RULES, HeuristicRule, match_rules, regex_rule


pytestmark = pytest.mark.unit


def test_default_rule_ids():
    assert [rule.id for rule in DEFAULT_RULES] == [
        "database",
        "api-endpoint",
        "loops",
        "external-calls",
        "cpu-intensive",
        "concurrency",
    ]


@pytest.mark.parametrize(
    "line, description",
    [
        ('const rows = await db.query("SELECT * FROM users");', "Database or query-intensive changes"),
        ("await prisma.user.findMany()", "Database or query-intensive changes"),
        ("insert into orders values (1)", "Database or query-intensive changes"),
        ('router.get("/users", listUsers);', "New or modified API endpoint handlers"),
        ("export async function POST(req) {", "New or modified API endpoint handlers"),
        ("return NextResponse.json(data);", "New or modified API endpoint handlers"),
        ("items.forEach(item => process(item));", "Loops or iterations that could amplify load"),
        ("await Promise.all(jobs);", "Loops or iterations that could amplify load"),
        ("const res = await axios.get(url);", "Outbound network or third-party service calls"),
        ("await stripe.charges.create(payload);", "Outbound network or third-party service calls"),
        ("const data = JSON.parse(body);", "CPU-intensive work (encryption, parsing, etc.)"),
        ("const hash = await bcrypt.hash(pw, 12);", "CPU-intensive work (encryption, parsing, etc.)"),
        ("const root = Math.sqrt(n);", "CPU-intensive work (encryption, parsing, etc.)"),
        ("setTimeout(run, 100);", "Explicit concurrency or worker usage"),
        ("await queue.add('email', job);", "Explicit concurrency or worker usage"),
        ("const buf = new SharedArrayBuffer(1024);", "Explicit concurrency or worker usage"),
    ],
)
def test_default_rules_flag_lines(line, description):
    assert description in match_rules(DEFAULT_RULES, line, "src/app.ts")


def test_rules_are_case_insensitive():
    assert "Database or query-intensive changes" in match_rules(DEFAULT_RULES, "DELETE FROM sessions", "a.sql")


def test_plain_line_matches_nothing():
    assert match_rules(DEFAULT_RULES, "const total = a + b;", "src/math.ts") == []


def test_api_endpoint_matches_routes_path():
    matched = match_rules(DEFAULT_RULES, "const total = a + b;", "src/routes/users.ts")
    assert matched == ["New or modified API endpoint handlers"]


def test_regex_rule_without_path_pattern():
    rule = regex_rule("print", "Print calls", r"\bprint\(")

    assert rule.predicate("PRINT(x)", "a.py") is True
    assert rule.predicate("x = 1", "print(/a.py") is False


def test_raising_predicate_is_a_non_match():
    def broken(line, path):
        raise ValueError("bad rule")

    rules = [
        HeuristicRule(id="broken", description="Broken", predicate=broken),
        HeuristicRule(id="all", description="Everything", predicate=lambda line, path: True),
    ]
    assert match_rules(rules, "x", "a.py") == ["Everything"]
