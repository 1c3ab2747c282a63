"""HTML markup for the image menu, built from a ``LayoutPlan``."""

from __future__ import annotations

from html import escape
from typing import List

from .schemas import LayoutGroup, LayoutPlan, MenuEntry


_STYLE = """
* {{ box-sizing: border-box; margin: 0; padding: 0; }}
body {{
  width: {width}px;
  padding: {padding}px;
  font-family: "Noto Sans CJK SC", "Microsoft YaHei", sans-serif;
  background: #f4f6fb;
  color: #1f2937;
}}
h1 {{ font-size: 32px; margin-bottom: 20px; }}
h2 {{ font-size: 22px; margin: 18px 0 12px; color: #4b5563; }}
.grid {{ display: flex; flex-wrap: wrap; gap: {gap}px; }}
.item {{
  flex: 0 0 calc({basis:.4f}% - {offset:.4f}px);
  background: #ffffff;
  border-radius: 12px;
  padding: 16px;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
}}
.name {{ font-size: 20px; font-weight: 600; }}
.desc {{ font-size: 15px; color: #6b7280; margin: 6px 0; }}
.cmd {{ font-family: monospace; font-size: 15px; color: #2563eb; }}
footer {{ margin-top: 24px; font-size: 14px; color: #6b7280; }}
footer p + p {{ margin-top: 4px; }}
"""


def _item(entry: MenuEntry) -> str:
    return (
        '<div class="item">'
        f'<div class="name">{escape(entry.name)}</div>'
        f'<div class="desc">{escape(entry.description)}</div>'
        f'<div class="cmd">{escape(entry.command)}</div>'
        "</div>"
    )


def _group(group: LayoutGroup) -> str:
    parts: List[str] = ["<section>"]
    if group.category is not None:
        parts.append(f"<h2>📁 {escape(group.category)}</h2>")
    parts.append('<div class="grid">')
    parts.extend(_item(e) for e in group.entries)
    parts.append("</div></section>")
    return "".join(parts)


def build_markup(plan: LayoutPlan, title: str = "📋 功能菜单") -> str:
    """Return a standalone HTML document for ``plan``."""
    style = _STYLE.format(
        width=plan.display_width,
        padding=plan.padding_px,
        gap=plan.box.gap_px,
        basis=plan.box.flex_basis_percent,
        offset=plan.box.gap_offset_px,
    )
    body = "".join(_group(g) for g in plan.groups)
    footer = "".join(f"<p>{escape(line)}</p>" for line in plan.footer)
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        f"<style>{style}</style></head>"
        f"<body><h1>{escape(title)}</h1>{body}"
        f"<footer>{footer}</footer></body></html>"
    )
