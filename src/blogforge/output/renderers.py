"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from blogforge.output.console import create_console, get_output, score_style

if TYPE_CHECKING:
    from rich.console import Console

    from blogforge.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    # For list results, return slugs only
    items = result.data.get("items") or result.data.get("results")
    if items and isinstance(items, list):
        return "\n".join(str(item["slug"]) for item in items if item.get("slug"))

    slug = result.data.get("slug")
    if slug:
        return str(slug)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="bf.ok")
    op = Text(f"  {result.op}", style="bf.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="bf.key")
    if key == "slug":
        v = Text(str(value), style="bf.slug")
    elif key in ("path", "config"):
        v = Text(str(value), style="bf.path")
    elif key == "title":
        v = Text(str(value), style="bf.title")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":"), ensure_ascii=False))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _draft_text(is_draft: Any) -> Text:
    if is_draft:
        return Text("draft", style="bf.draft")
    return Text("published", style="bf.published")


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


_ITEM_COLUMNS: dict[str, list[str]] = {
    "article": ["author", "category", "locale", "status", "publishedAt"],
    "author": ["role"],
    "category": ["description"],
}


def _item_table(
    collection: str,
    items: list[dict[str, Any]],
    *,
    show_matches: bool = False,
    verbose: bool = False,
) -> Table:
    """Build a Rich Table for a list of content records."""
    columns = list(_ITEM_COLUMNS.get(collection, []))
    if collection == "article" and verbose:
        columns.append("tags")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Slug", style="bf.slug", no_wrap=True)
    table.add_column("Name" if collection == "author" else "Title", style="bf.title")
    for col in columns:
        table.add_column("Published" if col == "publishedAt" else col.title())
    if show_matches:
        table.add_column("Matches", style="dim")

    for item in items:
        row: list[Any] = [str(item.get("slug", "")), str(item.get("title", ""))]
        for col in columns:
            if col == "status":
                row.append(_draft_text(item.get("isDraft")))
            elif col == "tags":
                row.append(", ".join(item.get("tags", [])))
            else:
                row.append(str(item.get(col, "")))
        if show_matches:
            row.append(", ".join(item.get("matches", [])))
        table.add_row(*row)

    return table


def _counter_table(counts: dict[str, int]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Value")
    table.add_column("Count", justify="right")
    for key, value in counts.items():
        table.add_row(key, str(value))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="bf.error")
    op = Text(f"  {result.op}", style="bf.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err is None or not err.detail:
        return
    # Validation issues are always useful; other detail only when verbose.
    for issue in err.detail.get("issues", []):
        console.print(f"  [bf.error]-[/bf.error] {escape(str(issue))}")
    if verbose:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "issues":
                console.print(f"    {k}: {v}")


# ── Record renderers ──────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/update/delete/publish/unpublish results."""
    _status_line(console, result)
    for key in ("collection", "slug", "title", "path", "isDraft"):
        if key in result.data:
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]) or "none")


def _render_single_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a get result as a panel with frontmatter."""
    d = result.data
    frontmatter: dict[str, Any] = d.get("frontmatter", {})
    lines: list[str] = []
    for key, value in frontmatter.items():
        if key in ("slug", "title", "name"):
            continue
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, ensure_ascii=False)
        lines.append(f"{key}: {value}")

    content = "\n".join(lines)
    body = d.get("body", "")
    if verbose and body:
        content += f"\n\n{body.strip()}"

    title = f"{d.get('slug', '?')} — {d.get('title') or 'Untitled'}"
    console.print(Panel(escape(content), title=escape(title), border_style="dim", expand=False))
    if verbose:
        console.print(Text(f"  {d.get('path', '')}", style="bf.path"))


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list or search results as a table."""
    items = result.data.get("items", [])
    collection = str(result.data.get("collection", "article"))
    table = _item_table(
        collection, items, show_matches=result.op == "search", verbose=verbose
    )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} {collection} record(s)")


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render content statistics."""
    d = result.data
    _status_line(console, result)
    for key in ("articles", "published", "drafts", "featured", "authors", "categories"):
        _field(console, key, d.get(key, 0))
    for key, title in (
        ("by_locale", "Articles by locale"),
        ("by_category", "Articles by category"),
        ("by_author", "Articles by author"),
        ("by_tag", "Articles by tag"),
    ):
        counts = d.get(key) or {}
        if counts and (verbose or key != "by_tag"):
            console.print()
            console.print(Text(title, style="bold"))
            console.print(_counter_table(counts))


# ── Validation renderers ──────────────────────────────────────────────


def _render_issues(console: Console, issues: list[dict[str, Any]], *, verbose: bool) -> None:
    """Print issues grouped by collection."""
    severity_styles = {"error": "bf.error", "warning": "bf.warning"}
    by_collection: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_collection.setdefault(str(issue.get("collection", "unknown")), []).append(issue)

    for collection, group in by_collection.items():
        console.print(f"\n[bold]{collection}[/bold]")
        for issue in group:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            where = escape(f" [{issue.get('file')}]") if issue.get("file") else ""
            category = f" ({issue.get('category')})" if verbose and issue.get("category") else ""
            console.print(f"  {prefix}{where}{category}: {escape(str(issue.get('message', '')))}")


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    issues = d.get("issues", [])
    total = d.get("total", 0)
    if not issues:
        console.print(f"[bf.ok]OK[/bf.ok]  All {total} {d.get('collection')} record(s) are valid.")
        return
    _render_issues(console, issues, verbose=verbose)
    console.print(f"\n{d.get('valid', 0)} valid, {d.get('invalid', 0)} invalid of {total}")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render doctor check results with issues grouped by collection."""
    d = result.data
    issues = d.get("issues", [])
    counts = d.get("counts", {})
    summary = ", ".join(f"{n} {name}(s)" for name, n in counts.items())
    if not issues:
        console.print(f"[bf.ok]OK[/bf.ok]  No issues found ({summary}).")
        return
    _render_issues(console, issues, verbose=verbose)
    console.print(f"\n{d.get('errors', 0)} errors, {d.get('warnings', 0)} warnings ({summary})")


# ── SEO renderer ──────────────────────────────────────────────────────

_FACTOR_LABELS: dict[str, str] = {
    "title": "Title",
    "description": "Description",
    "keyword": "Keyword",
    "headings": "Headings",
    "links": "Links",
    "anchorText": "Anchor Text",
    "readability": "Readability",
    "imageAlt": "Images",
    "wordCount": "Word Count",
}


def _factor_summary(name: str, factor: dict[str, Any]) -> str:
    if name in ("title", "description"):
        suffix = ", keyword" if factor.get("keyword_present") else ""
        return f"{factor.get('length', 0)} chars{suffix}"
    if name == "keyword":
        first = "yes" if factor.get("in_first_paragraph") else "no"
        return f"Density: {factor.get('density', 0)}%, first para: {first}"
    if name == "headings":
        kw = "yes" if factor.get("keyword_in_heading") else "no"
        return f"H1: {factor.get('h1', 0)}, H2: {factor.get('h2', 0)}, keyword: {kw}"
    if name == "links":
        return f"Int: {factor.get('internal', 0)}, Ext: {factor.get('external', 0)}"
    if name == "anchorText":
        return (
            f"Descriptive: {factor.get('descriptive', 0)}, "
            f"Non-desc: {factor.get('non_descriptive', 0)}"
        )
    if name == "readability":
        return f"~{factor.get('avg_words', 0)} words/sentence"
    if name == "imageAlt":
        total = factor.get("total", 0)
        return f"{total - factor.get('missing_alt', 0)}/{total} with alt"
    if name == "wordCount":
        return f"{factor.get('words', 0)} words"
    return ""


def _status_text(score: float) -> Text:
    if score == 1:
        return Text("PASS", style="bf.ok")
    if score >= 0.5:
        return Text("PARTIAL", style="bf.warning")
    return Text("FAIL", style="bf.error")


def _render_seo(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render SEO reports: per-article factor tables (verbose) plus a summary."""
    results = result.data.get("results", [])
    if not results:
        console.print("No articles to analyze.")
        return

    show_details = verbose or len(results) == 1
    for report in results if show_details else []:
        score = float(report.get("score", 0))
        title = escape(str(report.get("title", "")))
        console.print(f"\n[bold]{title}[/bold] [dim]({report.get('file')})[/dim]")
        console.print(
            f"[{score_style(score)}]Overall SEO Score: {round(score * 100)}% "
            f"(Grade {report.get('grade')})[/{score_style(score)}]"
        )
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Factor", style="bold")
        table.add_column("Result")
        table.add_column("Recommendation")
        table.add_column("Status")
        for name, label in _FACTOR_LABELS.items():
            factor = report.get("factors", {}).get(name)
            if factor is None:
                continue
            table.add_row(
                label,
                _factor_summary(name, factor),
                str(factor.get("recommendation", "")),
                _status_text(float(factor.get("score", 0))),
            )
        console.print(table)

    summary = Table(show_header=True, pad_edge=False, expand=False)
    summary.add_column("Article", style="bf.slug")
    summary.add_column("Keyword", style="dim")
    summary.add_column("Score", justify="right")
    summary.add_column("Grade", justify="center")
    for report in results:
        score = float(report.get("score", 0))
        style = score_style(score)
        summary.add_row(
            str(report.get("slug", "")),
            str(report.get("keyword") or "-"),
            Text(f"{round(score * 100)}%", style=style),
            Text(str(report.get("grade", "")), style=style),
        )
    console.print()
    console.print(Text("SEO Summary", style="bold"))
    console.print(summary)


# ── Image renderers ───────────────────────────────────────────────────


def _render_find_unused(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    unused = d.get("unused", [])
    total = d.get("total", 0)
    if not unused:
        console.print(f"[bf.ok]OK[/bf.ok]  All {total} images are in use.")
        return
    console.print(f"Found {len(unused)} unused image(s) out of {total} total:\n")
    for item in unused:
        size = _format_size(item["size"])
        console.print(f"  [bf.error]•[/bf.error] {escape(item['path'])} [dim]({size})[/dim]")
    console.print(f"\nTotal wasted space: {_format_size(d.get('wasted_bytes', 0))}")
    deleted = d.get("deleted", [])
    if deleted:
        console.print(f"[bf.ok]Deleted {len(deleted)} unused image(s).[/bf.ok]")


def _render_broken_refs(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    broken = result.data.get("broken", [])
    if not broken:
        console.print(
            f"[bf.ok]OK[/bf.ok]  All {result.data.get('checked', 0)} image references resolve."
        )
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Record", style="bf.slug")
    table.add_column("Image")
    table.add_column("Type")
    table.add_column("Line", justify="right")
    for ref in broken:
        table.add_row(
            f"{ref['collection']}/{ref['slug']}",
            ref["image"],
            "Frontmatter" if ref["kind"] == "frontmatter" else "Inline",
            str(ref["line"] or "-"),
        )
    console.print(f"Found {len(broken)} broken image reference(s):\n")
    console.print(table)


def _render_suggest_alt(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    missing = result.data.get("missing", [])
    if not missing:
        console.print("[bf.ok]OK[/bf.ok]  Every image has alt text.")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Record", style="bf.slug")
    table.add_column("Image")
    table.add_column("Line", justify="right")
    table.add_column("Suggested alt", style="bold")
    for item in missing:
        table.add_row(
            f"{item['collection']}/{item['slug']}",
            item["image"],
            str(item["line"]),
            item["suggestion"],
        )
    console.print(f"Found {len(missing)} image(s) without alt text:\n")
    console.print(table)
    updated = result.data.get("updated", [])
    if updated:
        console.print(f"\n[bf.ok]Updated {len(updated)} file(s).[/bf.ok]")


# ── Init renderer ─────────────────────────────────────────────────────


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render init results with project details and created directories."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "config", "multilingual", "default_language"):
        if key in d:
            _field(console, key, d[key])
    _field(console, "languages", ", ".join(d.get("languages", [])))
    created = d.get("directories_created", [])
    _field(console, "directories_created", len(created))
    if verbose:
        for directory in created:
            console.print(f"    {directory}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Records
    "create": _render_mutation,
    "update": _render_mutation,
    "delete": _render_mutation,
    "publish": _render_mutation,
    "unpublish": _render_mutation,
    "get": _render_single_item,
    "list": _render_item_table,
    "search": _render_item_table,
    "stats": _render_stats,
    # Doctor
    "validate": _render_validate,
    "check": _render_check,
    "seo_check": _render_seo,
    # Images
    "find_unused": _render_find_unused,
    "validate_references": _render_broken_refs,
    "suggest_alt": _render_suggest_alt,
    # Init
    "init": _render_init,
}
