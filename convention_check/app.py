"""
API Convention Check — Gradio application.

Tabs: Dashboard | Upload & Run | Findings | Reports
"""

import tempfile
from html import escape

import gradio as gr

from convention_check.checker import ConventionChecker
from convention_check.config import APP_TITLE, APP_VERSION, MUST, SERVER_HOST, SERVER_PORT, SHOULD
from convention_check.orchestrator import run_convention_check
from convention_check.report_engine import generate_html_report, generate_text_report, generate_json_report
from convention_check.rules import discover_rules

EMPTY_HTML = "<p style='color:#9ca3af;text-align:center;padding:40px;'>Upload a schema file to get started.</p>"


# ── Callbacks ────────────────────────────────────────────────

def on_upload_and_run(schema_files, ignored_groups):
    """Handle schema upload → run all rules → return outputs for every tab."""
    if not schema_files:
        return (
            EMPTY_HTML,          # dashboard_html
            "No file uploaded",  # status
            EMPTY_HTML,          # results_html
            "",                  # text_report
            "{}",                # json_report
            gr.update(),         # json_download
        )

    paths = [f if isinstance(f, str) else f.name for f in schema_files]
    checker = ConventionChecker(ignore=ignored_groups or ())
    report = run_convention_check(paths, checker=checker)

    json_report = generate_json_report(report)
    status = (
        f"✓ Checked {report.total_documents} document(s): "
        f"{report.must_findings} MUST, {report.should_findings} SHOULD, "
        f"{report.errored_documents} load error(s)"
    )

    tmp = tempfile.NamedTemporaryFile(
        mode="w", suffix=".json", prefix="convention_report_", delete=False
    )
    tmp.write(json_report)
    tmp.close()

    return (
        _build_dashboard_html(report),
        status,
        generate_html_report(report),
        generate_text_report(report),
        json_report,
        gr.update(value=tmp.name, visible=True),
    )


def _build_dashboard_html(report):
    """Per-document cards with MUST / SHOULD counts."""
    cards = ""
    for doc in report.documents:
        border_color = {"pass": "#16a34a", "fail": "#dc2626"}.get(doc.status, "#d97706")
        detail = escape(doc.error) if doc.error else (
            f"<span style='color:#dc2626;font-weight:700;'>{doc.count(MUST)} MUST</span> &nbsp; "
            f"<span style='color:#d97706;font-weight:700;'>{doc.count(SHOULD)} SHOULD</span>"
        )
        cards += f"""
        <div style="min-width:240px;flex:1;background:#f8fafc;border-radius:14px;padding:18px;
                     border-left:5px solid {border_color};box-shadow:0 1px 3px rgba(0,0,0,0.08);">
            <div style="font-weight:700;font-size:14px;color:#1e293b;overflow:hidden;text-overflow:ellipsis;
                        white-space:nowrap;" title="{escape(doc.name)}">{escape(doc.name)}</div>
            <div style="font-size:12px;color:#6b7280;margin:4px 0 8px 0;">{doc.status.upper()}</div>
            <div style="font-size:13px;">{detail}</div>
        </div>"""

    clean = sum(1 for doc in report.documents if doc.status == "pass")
    total = report.total_documents
    score = round(clean / total * 100) if total > 0 else 0
    score_color = "#16a34a" if score >= 80 else ("#d97706" if score >= 50 else "#dc2626")

    return f"""
    <div style="font-family:'Segoe UI',system-ui,-apple-system,sans-serif;">
        <div style="display:flex;align-items:center;gap:32px;margin-bottom:28px;
                     background:linear-gradient(135deg,#0f172a,#1e293b);border-radius:16px;
                     padding:28px 36px;color:white;">
            <div style="text-align:center;">
                <div style="font-size:56px;font-weight:800;color:{score_color};">{score}%</div>
                <div style="font-size:13px;opacity:0.7;letter-spacing:1px;">CLEAN DOCUMENTS</div>
            </div>
            <div style="flex:1;">
                <h2 style="margin:0 0 8px 0;font-size:22px;">{escape(report.name)}</h2>
                <div style="display:flex;gap:24px;font-size:14px;opacity:0.85;">
                    <span>Documents: {total}</span>
                    <span>MUST: {report.must_findings}</span>
                    <span>SHOULD: {report.should_findings}</span>
                </div>
            </div>
        </div>
        <div style="display:flex;gap:14px;flex-wrap:wrap;">{cards}</div>
    </div>
    """


# ── Build the Gradio App ─────────────────────────────────────

def build_app():
    with gr.Blocks(title=APP_TITLE, theme=gr.themes.Soft()) as app:

        gr.Markdown(f"# {APP_TITLE}\nUpload JSON-Schema / OpenAPI files · Check naming and schema conventions")

        with gr.Tabs():

            with gr.Tab("📊 Dashboard"):
                dashboard_html = gr.HTML(value=EMPTY_HTML)

            with gr.Tab("📤 Upload & Run"):
                with gr.Row():
                    with gr.Column(scale=1):
                        schema_input = gr.File(
                            label="Upload schema files",
                            file_types=[".json", ".yaml", ".yml"],
                            file_count="multiple",
                            type="filepath",
                        )
                        ignored = gr.CheckboxGroup(
                            choices=sorted({r.group for r in discover_rules()}),
                            label="Skip rule groups",
                        )
                        run_btn = gr.Button("🔍 Run Checks", variant="primary")
                        status_text = gr.Textbox(label="Status", value="Ready — waiting for schema files", interactive=False)

                    with gr.Column(scale=2):
                        gr.Markdown("""
                        **Rule groups:**
                        - 💶 **money** — amount/currency Money objects, no binary floating point
                        - 🏷️ **generic** — `id`, `type` are strings, `created`/`modified` are date-time
                        - 🔗 **reference** — annotated references are named `<type>_id`
                        - 🏠 **address** — address and addressee structures
                        """)

            with gr.Tab("📋 Findings"):
                results_html = gr.HTML(value=EMPTY_HTML)

            with gr.Tab("📝 Reports"):
                with gr.Tabs():
                    with gr.Tab("Text Report"):
                        text_output = gr.Textbox(label="Text Report", lines=25)
                    with gr.Tab("JSON Report"):
                        json_output = gr.Textbox(label="JSON", lines=25, value="{}")
                        json_download = gr.File(label="Download JSON", visible=False)

        outputs = [dashboard_html, status_text, results_html, text_output, json_output, json_download]
        run_btn.click(fn=on_upload_and_run, inputs=[schema_input, ignored], outputs=outputs)
        schema_input.change(fn=on_upload_and_run, inputs=[schema_input, ignored], outputs=outputs)

    return app


# ── Launch ───────────────────────────────────────────────────

def main():
    print("=" * 70)
    print(f"  {APP_TITLE}  v{APP_VERSION}")
    print("=" * 70)
    print(f"\n  Starting Gradio server on http://{SERVER_HOST}:{SERVER_PORT}")
    print("  Press Ctrl+C to stop.\n")
    print("=" * 70)

    build_app().launch(
        server_name=SERVER_HOST,
        server_port=SERVER_PORT,
        share=False,
        show_error=True,
    )


if __name__ == "__main__":
    main()
