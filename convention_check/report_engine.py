"""
Report Engine — generate JSON / HTML / Text reports from a Report.
"""

import json
from datetime import datetime
from html import escape

from convention_check.config import APP_TITLE, MUST
from convention_check.models import Report


def generate_json_report(report: Report) -> str:
    """Full JSON output: documents, findings and summary."""
    return json.dumps(report.to_dict(), indent=2, default=str)


def generate_text_report(report: Report) -> str:
    """Plain text summary report."""
    lines = []
    lines.append("=" * 70)
    lines.append(f"  {APP_TITLE} Report: {report.name}")
    lines.append(f"  Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("=" * 70)
    lines.append("")

    # Summary
    lines.append(f"  Documents:        {report.total_documents}")
    lines.append(f"  Load Errors:      {report.errored_documents}")
    lines.append(f"  Findings:         {report.total_findings}")
    lines.append(f"  MUST Findings:    {report.must_findings}")
    lines.append(f"  SHOULD Findings:  {report.should_findings}")
    lines.append("")

    # Per-rule breakdown
    by_rule = report.summary_by_rule()
    if by_rule:
        lines.append("─" * 70)
        lines.append("  RULE BREAKDOWN")
        lines.append("─" * 70)
        for rule, stats in sorted(by_rule.items()):
            lines.append(f"  [{stats['severity']:<6}] {rule:<32} x{stats['count']}")
        lines.append("")

    # Detailed results
    lines.append("─" * 70)
    lines.append("  DETAILED RESULTS")
    lines.append("─" * 70)

    for doc in report.documents:
        icon = "✓" if doc.status == "pass" else ("✗" if doc.status == "fail" else "!")
        lines.append(f"\n  {icon}  {doc.name}  →  {doc.status.upper()}")
        if doc.error:
            lines.append(f"     {doc.error}")
            continue

        for f in doc.findings:
            lines.append(f"       {f.severity:<6} {f.rule}  {f.path or '/'}")
            lines.append(f"              {f.message}")

    lines.append("")
    lines.append("=" * 70)
    return "\n".join(lines)


def generate_html_report(report: Report) -> str:
    """HTML findings report with summary cards and a findings table."""
    rows = ""
    for doc in report.documents:
        if doc.error:
            rows += f"""
            <tr style="border-bottom:1px solid #e5e7eb;">
                <td style="padding:8px;text-align:center;color:#d97706;font-weight:700;">!</td>
                <td style="padding:8px;font-size:13px;color:#6b7280;">{escape(doc.name)}</td>
                <td style="padding:8px;" colspan="3">{escape(doc.error)}</td>
            </tr>"""
            continue
        for f in doc.findings:
            color = "#dc2626" if f.severity == MUST else "#d97706"
            rows += f"""
            <tr style="border-bottom:1px solid #e5e7eb;">
                <td style="padding:8px;text-align:center;color:{color};font-size:12px;font-weight:700;">{f.severity}</td>
                <td style="padding:8px;font-size:13px;color:#6b7280;">{escape(doc.name)}</td>
                <td style="padding:8px;font-family:monospace;">{escape(f.rule)}</td>
                <td style="padding:8px;font-family:monospace;color:#6b7280;">{escape(f.path or '/')}</td>
                <td style="padding:8px;">{escape(f.message)}</td>
            </tr>"""

    html = f"""
    <div style="font-family:'Segoe UI',system-ui,sans-serif;">
        <h2 style="margin:0 0 4px 0;">{escape(APP_TITLE)} Report</h2>
        <p style="margin:0 0 20px 0;color:#6b7280;">
            {escape(report.name)} &nbsp;·&nbsp; {datetime.now().strftime('%Y-%m-%d %H:%M')}
        </p>

        <!-- Summary cards -->
        <div style="display:flex;gap:16px;margin-bottom:24px;flex-wrap:wrap;">
            <div style="background:#fef2f2;border:1px solid #fecaca;border-radius:12px;padding:16px 24px;text-align:center;">
                <div style="font-size:32px;font-weight:700;color:#dc2626;">{report.must_findings}</div>
                <div style="font-size:12px;color:#6b7280;">MUST</div>
            </div>
            <div style="background:#fefce8;border:1px solid #fde68a;border-radius:12px;padding:16px 24px;text-align:center;">
                <div style="font-size:32px;font-weight:700;color:#d97706;">{report.should_findings}</div>
                <div style="font-size:12px;color:#6b7280;">SHOULD</div>
            </div>
            <div style="background:#f9fafb;border:1px solid #e5e7eb;border-radius:12px;padding:16px 24px;text-align:center;">
                <div style="font-size:32px;font-weight:700;color:#1d4ed8;">{report.total_documents}</div>
                <div style="font-size:12px;color:#6b7280;">DOCUMENTS</div>
            </div>
        </div>

        <!-- Findings table -->
        <h3 style="margin:0 0 12px 0;">Findings</h3>
        <div style="max-height:500px;overflow-y:auto;border:1px solid #d1d5db;border-radius:12px;">
            <table style="width:100%;border-collapse:collapse;">
                <thead>
                    <tr style="background:#f3f4f6;position:sticky;top:0;">
                        <th style="padding:10px;width:60px;">Sev</th>
                        <th style="padding:10px;text-align:left;">Document</th>
                        <th style="padding:10px;text-align:left;">Rule</th>
                        <th style="padding:10px;text-align:left;">Path</th>
                        <th style="padding:10px;text-align:left;">Message</th>
                    </tr>
                </thead>
                <tbody>
                    {rows if rows else '<tr><td colspan="5" style="padding:20px;text-align:center;color:#16a34a;">No findings. All checked schemas follow the conventions.</td></tr>'}
                </tbody>
            </table>
        </div>
    </div>
    """
    return html


def generate_report(report: Report, fmt: str = "text") -> str:
    generators = {
        "json": generate_json_report,
        "text": generate_text_report,
        "html": generate_html_report,
    }
    if fmt not in generators:
        raise ValueError(f"unknown report format '{fmt}' (expected one of {', '.join(generators)})")
    return generators[fmt](report)
