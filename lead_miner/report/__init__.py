# File: lead_miner/report/__init__.py
"""lead_miner.report: JSON и HTML отчёты по результатам сбора контактов."""

from lead_miner.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from lead_miner.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
