"""
Report Exports Template Engine

Materializes a ReportDocument into a print-styled HTML surface using Jinja2.
Each document section becomes one styled block.
"""

import logging
from typing import Any, Dict, List, Optional

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError, Undefined
from jinja2.sandbox import SandboxedEnvironment

from .formatters import format_currency, format_date, format_datetime, format_percentage
from .models import ReportDocument

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "export_report"

REPORT_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <meta name="generated" content="{{ generated_at | format_datetime }}">
    <style>
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            color: #333;
        }
        h1 {
            color: #2d5734;
            border-bottom: 2px solid #2d5734;
            padding-bottom: 10px;
            margin-bottom: 20px;
        }
        h2 {
            color: #4a7c5d;
            margin-top: 25px;
            margin-bottom: 15px;
        }
        table {
            width: 100%;
            border-collapse: collapse;
            margin: 15px 0;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 8px;
            text-align: left;
        }
        th {
            background-color: #f8f9fa;
            font-weight: 600;
        }
        .summary-card {
            background: #f8f9fa;
            border: 1px solid #e9ecef;
            border-radius: 8px;
            padding: 15px;
            margin: 10px 0;
        }
        .metric {
            display: inline-block;
            margin: 10px 15px 10px 0;
        }
        .metric-label {
            font-size: 12px;
            color: #666;
            text-transform: uppercase;
        }
        .metric-value {
            font-size: 18px;
            font-weight: 600;
            color: #333;
        }
        pre {
            background: #f8f9fa;
            padding: 15px;
            border-radius: 5px;
            white-space: pre-wrap;
            word-break: break-word;
        }
        .footer {
            margin-top: 40px;
            text-align: center;
            font-size: 12px;
            color: #666;
        }
        @media print {
            * {
                -webkit-print-color-adjust: exact !important;
                print-color-adjust: exact !important;
            }
            table { page-break-inside: auto; }
            tr { page-break-inside: avoid; page-break-after: auto; }
            .summary-card { break-inside: avoid; }
        }
    </style>
</head>
<body>
{% for section in sections %}
    {% if section.kind == "header" %}
    <div class="report-header">
        <h1>{{ section.heading }}</h1>
        {% for line in section.content %}
        <p><strong>{{ line.label }}:</strong> {{ line.value }}</p>
        {% endfor %}
    </div>
    {% elif section.kind == "metric_grid" %}
    <h2>{{ section.heading }}</h2>
    <div class="summary-card">
        {% for metric in section.content %}
        <div class="metric">
            <div class="metric-label">{{ metric.label }}</div>
            <div class="metric-value">{{ metric.value }}</div>
        </div>
        {% endfor %}
    </div>
    {% elif section.kind == "table" %}
    <h2>{{ section.heading }}</h2>
    <table>
        <thead>
            <tr>{% for column in section.content.columns %}<th>{{ column }}</th>{% endfor %}</tr>
        </thead>
        <tbody>
            {% for row in section.content.rows %}
            <tr>{% for cell in row %}<td>{{ cell }}</td>{% endfor %}</tr>
            {% else %}
            <tr><td colspan="{{ section.content.columns | length }}">No data available</td></tr>
            {% endfor %}
        </tbody>
    </table>
    {% elif section.kind == "raw_dump" %}
    <h2>{{ section.heading }}</h2>
    <pre>{{ section.content }}</pre>
    {% elif section.kind == "note" %}
    <p class="note"><em>{{ section.content }}</em></p>
    {% elif section.kind == "footer" %}
    <div class="footer">
        {% for line in section.content %}
        <p>{{ line }}</p>
        {% endfor %}
    </div>
    {% endif %}
{% endfor %}
</body>
</html>
"""


class TemplateLoader(BaseLoader):
    """Template loader backed by an in-memory dictionary"""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template loader

        Args:
            templates: Dictionary of template name to template content
        """
        self.templates = templates or {}

    def get_source(self, environment: Environment, template: str) -> tuple:
        """Get template source"""
        if template not in self.templates:
            raise TemplateError(f"Template '{template}' not found")

        source = self.templates[template]
        return source, None, lambda: True

    def add_template(self, name: str, content: str) -> None:
        """Add a template to the loader"""
        self.templates[name] = content

    def list_templates(self) -> List[str]:
        """List available templates"""
        return list(self.templates.keys())


class TemplateEngine:
    """
    Renders report documents to HTML

    Document data reaches templates as plain dictionaries, so templates can
    only read it.
    """

    def __init__(self, use_sandbox: bool = True, strict_undefined: bool = True):
        """
        Initialize template engine

        Args:
            use_sandbox: Use sandboxed environment for security
            strict_undefined: Raise errors for undefined variables
        """
        self.loader = TemplateLoader()

        environment_class = SandboxedEnvironment if use_sandbox else Environment
        self.env = environment_class(
            loader=self.loader,
            autoescape=True,
            undefined=StrictUndefined if strict_undefined else Undefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._setup_filters()

        self.loader.add_template(DEFAULT_TEMPLATE, REPORT_TEMPLATE.strip())

        logger.info(f"Initialized TemplateEngine with sandbox={use_sandbox}")

    def _setup_filters(self) -> None:
        """Register value formatting filters for custom templates"""
        self.env.filters["format_currency"] = format_currency
        self.env.filters["format_date"] = format_date
        self.env.filters["format_datetime"] = format_datetime
        self.env.filters["format_percentage"] = format_percentage

    def add_template(self, name: str, content: str) -> None:
        """
        Add a template to the engine

        Args:
            name: Template name
            content: Template content (HTML with Jinja2 syntax)
        """
        self.loader.add_template(name, content)
        logger.debug(f"Added template '{name}'")

    def list_templates(self) -> List[str]:
        """List available template names"""
        return self.loader.list_templates()

    def render_document(self, document: ReportDocument, template_name: str = DEFAULT_TEMPLATE) -> str:
        """
        Render a report document into HTML

        Args:
            document: Composed report document
            template_name: Name of the template to render

        Returns:
            Rendered HTML string

        Raises:
            TemplateError: If template rendering fails
        """
        context: Dict[str, Any] = document.to_dict()
        try:
            template = self.env.get_template(template_name)
            rendered_html = template.render(**context)
        except TemplateError as e:
            logger.error(f"Template rendering failed for '{template_name}': {e}")
            raise

        logger.debug(f"Rendered '{template_name}' for '{document.title}' ({len(rendered_html)} chars)")
        return rendered_html

    def validate_template(self, template_content: str) -> tuple[bool, Optional[str]]:
        """
        Validate template syntax

        Args:
            template_content: Template content to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            self.env.parse(template_content)
            return True, None
        except TemplateError as e:
            return False, str(e)
