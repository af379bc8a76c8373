"""Jinja2 environment for declaration XML and HTML preview templates."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from fop_tax.shared.formatters import (
    format_amount,
    format_rate,
    format_xml_amount,
    format_xml_date,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)

# XML money ("1234.56") and dates ("DDMMYYYY")
env.filters["money"] = format_xml_amount
env.filters["xml_date"] = format_xml_date

# Display money ("1 234,56") and rates ("5%")
env.filters["uah"] = format_amount
env.filters["rate"] = format_rate
