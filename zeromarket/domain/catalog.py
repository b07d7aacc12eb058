# zeromarket/domain/catalog.py
"""
Built-in sample packages.

Served when the database has no matching row so a fresh deployment still
answers lookups for the well-known demo skills.
"""
from typing import List, Optional

from .models import SkillPackage, ToolEntry

BASE = "https://registry.zeromarket.dev/wasm"


def _tool(namespace: str, package: str, version: str, name: str, description: str) -> ToolEntry:
    prefix = f"{BASE}/{namespace}/{package}/{version}"
    return ToolEntry(
        name=name,
        description=description,
        wasm_url=f"{prefix}/{name}.wasm",
        manifest_url=f"{prefix}/{name}.manifest.json",
    )


PACKAGES: List[SkillPackage] = [
    SkillPackage(
        namespace="zeroclaw",
        name="weather",
        version="1.2.0",
        description="Real-time weather for any city via Open-Meteo. No API key required.",
        tags=["weather", "api", "utility", "free"],
        author="zeroclaw",
        downloads=18_420,
        verified=True,
        published_at="2026-01-15",
        readme="# weather\n\nFetch real-time weather data for any city without an API key.",
        tools=[
            _tool("zeroclaw", "weather", "1.2.0", "get_weather", "Get current weather for a city"),
            _tool("zeroclaw", "weather", "1.2.0", "get_forecast", "Get 7-day weather forecast for a city"),
        ],
    ),
    SkillPackage(
        namespace="zeroclaw",
        name="github-pr-summary",
        version="0.8.1",
        description="Summarize GitHub pull requests: diff, reviews, CI status, in one shot.",
        tags=["github", "git", "devtools", "productivity"],
        author="zeroclaw",
        downloads=9_870,
        verified=True,
        published_at="2026-01-28",
        readme="# github-pr-summary\n\nSummarize any GitHub PR in one call.",
        tools=[
            _tool("zeroclaw", "github-pr-summary", "0.8.1", "github_pr_summary",
                  "Fetch and summarize a GitHub pull request"),
            _tool("zeroclaw", "github-pr-summary", "0.8.1", "github_pr_diff",
                  "Fetch the raw diff of a GitHub pull request"),
        ],
    ),
    SkillPackage(
        namespace="zeroclaw",
        name="jira-connector",
        version="1.0.3",
        description="Read, create, and update Jira issues directly from your agent.",
        tags=["jira", "project-management", "productivity", "atlassian"],
        author="zeroclaw",
        downloads=7_210,
        verified=True,
        published_at="2026-02-01",
        readme="# jira-connector\n\nConnect your ZeroClaw agent to Jira Cloud or Server.",
        tools=[
            _tool("zeroclaw", "jira-connector", "1.0.3", "jira_get_issue", "Fetch a Jira issue by key"),
            _tool("zeroclaw", "jira-connector", "1.0.3", "jira_create_issue", "Create a new Jira issue"),
        ],
    ),
    SkillPackage(
        namespace="community",
        name="json-validator",
        version="0.5.0",
        description="Validate any JSON payload against a JSON Schema definition.",
        tags=["json", "schema", "validation", "utility"],
        author="zeroclaw_user",
        downloads=4_320,
        published_at="2026-01-20",
        readme="# json-validator\n\nValidate JSON payloads against a schema.",
        tools=[
            _tool("community", "json-validator", "0.5.0", "validate_json",
                  "Validate a JSON string against a JSON Schema"),
        ],
    ),
    SkillPackage(
        namespace="community",
        name="markdown-formatter",
        version="1.1.0",
        description="Format, lint, and prettify Markdown documents with configurable rules.",
        tags=["markdown", "formatting", "docs", "utility"],
        author="zeroclaw_maintainer",
        downloads=3_190,
        published_at="2026-01-18",
        readme="# markdown-formatter\n\nLint and prettify Markdown documents.",
        tools=[
            _tool("community", "markdown-formatter", "1.1.0", "format_markdown",
                  "Format a Markdown string according to style rules"),
        ],
    ),
    SkillPackage(
        namespace="community",
        name="currency-converter",
        version="0.3.2",
        description="Convert between 170+ currencies using live exchange rates.",
        tags=["finance", "currency", "api", "utility"],
        author="zeroclaw_node",
        downloads=2_880,
        published_at="2026-02-05",
        readme="# currency-converter\n\nConvert between currencies using live rates.",
        tools=[
            _tool("community", "currency-converter", "0.3.2", "convert_currency",
                  "Convert an amount from one currency to another"),
        ],
    ),
    SkillPackage(
        namespace="community",
        name="html-to-markdown",
        version="2.0.0",
        description="Convert HTML content to clean, readable Markdown.",
        tags=["html", "markdown", "conversion", "utility"],
        author="zeroclaw_service",
        downloads=5_640,
        published_at="2026-01-10",
        readme="# html-to-markdown\n\nConvert HTML to clean Markdown.",
        tools=[
            _tool("community", "html-to-markdown", "2.0.0", "html_to_markdown",
                  "Convert an HTML string to Markdown"),
        ],
    ),
    SkillPackage(
        namespace="community",
        name="cron-parser",
        version="0.2.1",
        description="Parse and describe cron expressions in plain English.",
        tags=["cron", "scheduling", "utility", "devtools"],
        author="zeroclaw_user",
        downloads=1_950,
        published_at="2026-02-10",
        readme="# cron-parser\n\nHuman-readable cron expression parser.",
        tools=[
            _tool("community", "cron-parser", "0.2.1", "parse_cron",
                  "Parse a cron expression and return a human-readable description"),
        ],
    ),
]


def matches_query(pkg: SkillPackage, query: str) -> bool:
    """Case-insensitive substring match on name, namespace, description or a tag."""
    q = query.lower()
    return (
        q in pkg.name.lower()
        or q in pkg.namespace.lower()
        or q in pkg.description.lower()
        or any(q in t.lower() for t in pkg.tags)
    )


class FallbackCatalog:
    def __init__(self, packages: List[SkillPackage] = PACKAGES):
        self._packages = tuple(packages)

    def all(self) -> List[SkillPackage]:
        return list(self._packages)

    def get(self, namespace: str, name: str) -> Optional[SkillPackage]:
        for p in self._packages:
            if p.namespace == namespace and p.name == name:
                return p
        return None

    def search(self, query: str) -> List[SkillPackage]:
        if not query:
            return self.all()
        return [p for p in self._packages if matches_query(p, query)]
