"""Static style rules for the site. Pure configuration, rendered to CSS once."""

from __future__ import annotations

from typing import Mapping

StyleRules = Mapping[str, Mapping[str, str]]

BLOG_LINK_STYLE: StyleRules = {
    ".blog-link": {
        "display": "block",
        "border-radius": "5px",
        "font-weight": "700",
        "padding": "0.5rem 1rem",
    },
    ".blog-link:link, .blog-link:visited": {
        "color": "#222426",
    },
    ".blog-link:hover, .blog-link:focus": {
        "transition": "background 0.1s ease-in-out 0s",
        "background-color": "hsla(303,74%,92%,0.4)",
        "text-decoration": "none",
    },
}

SECTION_HEADER_STYLE: StyleRules = {
    ".section-header": {
        "display": "flex",
        "flex-direction": "row",
        "justify-content": "space-between",
        "align-items": "baseline",
    },
}

LAYOUT_STYLE: StyleRules = {
    "body": {
        "margin": "0 auto",
        "max-width": "42rem",
        "padding": "2rem 1rem",
        "font-family": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
        "line-height": "1.6",
        "color": "#222426",
    },
    ".blog-list": {
        "padding-left": "0",
        "list-style": "none",
    },
}


def render_css(*rule_sets: StyleRules) -> str:
    blocks = []
    for rules in rule_sets:
        for selector, declarations in rules.items():
            body = "".join(f"  {name}: {value};\n" for name, value in declarations.items())
            blocks.append(f"{selector} {{\n{body}}}")
    return "\n".join(blocks) + "\n"


SITE_CSS = render_css(LAYOUT_STYLE, SECTION_HEADER_STYLE, BLOG_LINK_STYLE)
