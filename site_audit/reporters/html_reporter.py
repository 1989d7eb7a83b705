"""HTML report renderer: standalone HTML with score cards, sidebar navigation and To Do list."""

from __future__ import annotations

import html

from site_audit import __version__
from site_audit.models import CATEGORIES, AuditReport, Severity
from site_audit.reporters.markdown_reporter import category_label
from site_audit.scoring import verdict_for

_CSS = """
*, *::before, *::after { box-sizing: border-box; }
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    margin: 0; color: #1f2937; line-height: 1.6; background: #f8fafc;
}
.sidebar {
    position: fixed; top: 0; left: 0; bottom: 0; width: 250px;
    background: #0f172a; color: #cbd5e1; overflow-y: auto; padding: 20px 0;
}
.sidebar-header { padding: 0 20px 14px; border-bottom: 1px solid #1e293b; font-size: 0.85em; }
.sidebar-header strong { color: #f8fafc; font-size: 1.1em; }
.sidebar a {
    display: flex; justify-content: space-between; padding: 6px 20px;
    color: #cbd5e1; text-decoration: none; font-size: 0.9em;
}
.sidebar a:hover { background: #1e293b; color: #fff; }
.sidebar-footer { padding: 12px 20px; font-size: 0.75em; color: #64748b; }
.main { margin-left: 250px; padding: 32px 40px; max-width: 980px; }
h1 { border-bottom: 3px solid #4f46e5; padding-bottom: 8px; margin-top: 0; }
h2 { color: #3730a3; margin-top: 2em; }
code { background: #eef2ff; padding: 1px 6px; border-radius: 3px; font-size: 0.9em; }
blockquote { margin: 1em 0; padding: 10px 16px; border-left: 4px solid; }
.verdict-good { border-color: #16a34a; background: #f0fdf4; }
.verdict-needs-improvement { border-color: #d97706; background: #fffbeb; }
.verdict-poor { border-color: #dc2626; background: #fef2f2; }
.score-grid { display: flex; flex-wrap: wrap; gap: 14px; margin: 1em 0; }
.score-card {
    background: #fff; border: 1px solid #e2e8f0; border-radius: 8px;
    padding: 14px 20px; min-width: 130px; text-align: center;
}
.score-card .number { font-size: 2em; font-weight: 700; }
.score-card.overall { border-color: #4f46e5; }
.score-card.unavailable { opacity: 0.55; }
.score-high { color: #16a34a; }
.score-mid { color: #d97706; }
.score-low { color: #dc2626; }
.badge { display: inline-block; padding: 1px 9px; border-radius: 4px; color: #fff;
         font-size: 0.8em; font-weight: 700; }
.badge-high { background: #dc2626; }
.badge-medium { background: #d97706; }
.badge-low { background: #2563eb; }
.finding-card {
    background: #fff; border: 1px solid #e2e8f0; border-radius: 8px;
    padding: 12px 18px; margin-bottom: 1em;
}
.finding-card h3 { margin: 0 0 4px; font-size: 1.05em; }
.finding-meta { color: #64748b; font-size: 0.85em; }
.todo-item { display: flex; gap: 10px; padding: 6px 0; border-bottom: 1px solid #f1f5f9; }
.todo-item.checked .todo-title { text-decoration: line-through; color: #94a3b8; }
"""

_JS = """
document.querySelectorAll('.todo-item input[type="checkbox"]').forEach(function(cb) {
    cb.addEventListener('change', function() {
        this.closest('.todo-item').classList.toggle('checked', this.checked);
        var total = document.querySelectorAll('.todo-item').length;
        var done = document.querySelectorAll('.todo-item.checked').length;
        var counter = document.getElementById('todo-counter');
        if (counter) { counter.textContent = done + ' of ' + total + ' completed'; }
    });
});
"""


def _esc(text: str) -> str:
    return html.escape(text)


def _score_class(score: int) -> str:
    if score >= 90:
        return "score-high"
    if score >= 70:
        return "score-mid"
    return "score-low"


def render(report: AuditReport, todo_list: bool = True) -> str:
    """Render an AuditReport as a standalone HTML document."""
    scores = report.scores
    recs = report.recommendations
    verdict = verdict_for(scores.overall)
    errors = [r for r in report.results if r.error]
    severity_groups = [
        (Severity.HIGH, recs.high),
        (Severity.MEDIUM, recs.medium),
        (Severity.LOW, recs.low),
    ]

    # ── Sidebar ──
    sidebar = ['<div class="sidebar">']
    sidebar.append('<div class="sidebar-header">')
    sidebar.append(f"<strong>Site Audit</strong><br>{_esc(report.name)}")
    sidebar.append("</div>")
    sidebar.append('<nav><a href="#scores">Scores</a>')
    for severity, findings in severity_groups:
        if findings:
            sidebar.append(
                f'<a href="#sev-{severity.value}">{severity.value.upper()}'
                f"<span>{len(findings)}</span></a>"
            )
    if errors:
        sidebar.append(f'<a href="#errors">Errors<span>{len(errors)}</span></a>')
    if todo_list and recs.all:
        sidebar.append(f'<a href="#todo">To Do List<span>{len(recs.all)}</span></a>')
    sidebar.append("</nav>")
    sidebar.append(f'<div class="sidebar-footer">site-audit v{__version__}</div>')
    sidebar.append("</div>")

    # ── Main content ──
    main = ['<div class="main">']
    main.append("<h1>Site Audit Report</h1>")
    main.append(f"<p><strong>Repository:</strong> {_esc(report.repository)}<br>")
    main.append(f'<strong>Audit Time:</strong> {report.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC")}<br>')
    main.append(
        f"<strong>Files:</strong> {report.file_stats.total_files} "
        f"({report.file_stats.total_size:,} bytes)</p>"
    )

    verdict_cls = "verdict-" + verdict.lower().replace(" ", "-")
    main.append(f'<blockquote class="{verdict_cls}"><strong>{verdict}</strong> '
                f"&mdash; overall score {scores.overall}/100</blockquote>")

    main.append('<h2 id="scores">Scores</h2>')
    main.append('<div class="score-grid">')
    main.append(
        f'<div class="score-card overall"><div class="number {_score_class(scores.overall)}">'
        f"{scores.overall}</div>Overall</div>"
    )
    for category in CATEGORIES:
        extra = " unavailable" if category in report.unavailable_categories else ""
        main.append(
            f'<div class="score-card{extra}"><div class="number {_score_class(scores[category])}">'
            f"{scores[category]}</div>{_esc(category_label(category))}</div>"
        )
    main.append("</div>")
    if report.unavailable_categories:
        names = ", ".join(category_label(c) for c in report.unavailable_categories)
        main.append(f"<p><em>No findings available for: {_esc(names)}</em></p>")

    if report.technologies:
        main.append("<h2>Technologies</h2><ul>")
        for tech in report.technologies:
            main.append(f"<li>{_esc(tech.name)} ({_esc(tech.category)}, {tech.confidence}%)</li>")
        main.append("</ul>")

    # ── Findings by severity ──
    for severity, findings in severity_groups:
        if not findings:
            continue
        main.append(
            f'<h2 id="sev-{severity.value}"><span class="badge badge-{severity.value}">'
            f"{severity.value.upper()}</span> ({len(findings)})</h2>"
        )
        for f in findings:
            main.append('<div class="finding-card">')
            main.append(f"<h3>{_esc(f.title)}</h3>")
            main.append(
                f'<div class="finding-meta">{_esc(category_label(f.category))} &middot; '
                f"<code>{_esc(f.id)}</code></div>"
            )
            main.append(f"<p>{_esc(f.description)}</p>")
            if f.affected:
                affected = ", ".join(f"<code>{_esc(a)}</code>" for a in f.affected)
                main.append(f"<p><strong>Affected:</strong> {affected}</p>")
            if f.recommendations:
                main.append("<ul>")
                for rec in f.recommendations:
                    main.append(f"<li>{_esc(rec)}</li>")
                main.append("</ul>")
            main.append("</div>")

    if errors:
        main.append('<h2 id="errors">Errors</h2>')
        main.append("<ul>")
        for r in errors:
            main.append(f"<li><strong>{_esc(r.category)}/{_esc(r.detector_name)}</strong>: {_esc(r.error)}</li>")
        main.append("</ul>")

    # ── To Do List ──
    if todo_list and recs.all:
        main.append('<h2 id="todo">To Do List</h2>')
        main.append(
            f'<p>{len(recs.all)} item{"s" if len(recs.all) != 1 else ""} to address '
            f'&mdash; <span id="todo-counter">0 of {len(recs.all)} completed</span></p>'
        )
        for f in recs.all:
            first_step = f.recommendations[0] if f.recommendations else ""
            main.append(
                f'<div class="todo-item"><input type="checkbox">'
                f'<div><span class="badge badge-{f.severity.value}">{f.severity.value.upper()}</span> '
                f'<span class="todo-title">{_esc(f.title)}</span>'
                f"<div>{_esc(first_step)}</div></div></div>"
            )

    main.append("<hr>")
    main.append(f"<p><em>Generated by site-audit v{__version__}</em></p>")
    main.append("</div>")

    doc = ["<!DOCTYPE html>", '<html lang="en">', "<head>", '<meta charset="UTF-8">']
    doc.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
    doc.append(f"<title>Site Audit: {_esc(report.name)}</title>")
    doc.append(f"<style>{_CSS}</style>")
    doc.append("</head>")
    doc.append("<body>")
    doc.extend(sidebar)
    doc.extend(main)
    doc.append(f"<script>{_JS}</script>")
    doc.append("</body></html>")

    return "\n".join(doc)
