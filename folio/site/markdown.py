"""Minimal Markdown → HTML converter (CommonMark-ish subset).

The goal is readable, deterministic output, not perfect rendering.
"""

from __future__ import annotations

import re

from ..content.models import slugify

_ORDERED_RE = re.compile(r"^\d+[.)]\s+")
_HR_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})\s*([\w+-]*)")


def markdown_to_html(md: str) -> str:
    md = md.replace("\r\n", "\n").replace("\r", "\n")
    lines = md.split("\n")

    out: list[str] = []
    heading_ids: dict[str, int] = {}

    def flush_paragraph(buf: list[str]) -> None:
        if not buf:
            return
        text = " ".join(s.strip() for s in buf if s.strip())
        if text:
            out.append(f"<p>{_inline(text)}</p>")
        buf.clear()

    i = 0
    para_buf: list[str] = []

    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        # Code fences
        fence = _FENCE_RE.match(stripped)
        if fence:
            flush_paragraph(para_buf)
            marker, lang = fence.group(1), fence.group(2)
            code_buf: list[str] = []
            i += 1
            while i < len(lines) and not lines[i].strip().startswith(marker):
                code_buf.append(lines[i])
                i += 1
            i += 1  # closing fence (or end of input)
            cls = f' class="language-{escape_attr(lang)}"' if lang else ""
            code_text = escape_text("\n".join(code_buf))
            out.append(f"<pre><code{cls}>{code_text}</code></pre>")
            continue

        # Horizontal rule
        if _HR_RE.match(stripped):
            flush_paragraph(para_buf)
            out.append("<hr>")
            i += 1
            continue

        # Table (GFM)
        if _looks_like_table_start(lines, i):
            flush_paragraph(para_buf)
            table_lines: list[str] = []
            while i < len(lines) and lines[i].strip().startswith("|"):
                table_lines.append(lines[i])
                i += 1
            out.append(_table_to_html(table_lines))
            continue

        # Headings
        if stripped.startswith("#"):
            level = len(stripped) - len(stripped.lstrip("#"))
            text = stripped[level:].strip().rstrip("#").strip()
            if level <= 6 and (not stripped[level:] or stripped[level] == " "):
                flush_paragraph(para_buf)
                anchor = _unique_id(slugify(_plain(text)), heading_ids)
                out.append(f'<h{level} id="{anchor}">{_inline(text)}</h{level}>')
                i += 1
                continue

        # Unordered list
        if stripped.startswith(("- ", "* ", "+ ")):
            flush_paragraph(para_buf)
            out.append("<ul>")
            while i < len(lines):
                s = lines[i].strip()
                if not s.startswith(("- ", "* ", "+ ")):
                    break
                out.append(f"<li>{_inline(s[2:].strip())}</li>")
                i += 1
            out.append("</ul>")
            continue

        # Ordered list
        if _ORDERED_RE.match(stripped):
            flush_paragraph(para_buf)
            out.append("<ol>")
            while i < len(lines):
                s = lines[i].strip()
                m = _ORDERED_RE.match(s)
                if not m:
                    break
                out.append(f"<li>{_inline(s[m.end():])}</li>")
                i += 1
            out.append("</ol>")
            continue

        # Blockquote
        if stripped.startswith(">"):
            flush_paragraph(para_buf)
            quoted: list[str] = []
            while i < len(lines):
                s = lines[i].strip()
                if not s.startswith(">"):
                    break
                quoted.append(s[1:].lstrip())
                i += 1
            out.append("<blockquote>")
            out.append(markdown_to_html("\n".join(quoted)))
            out.append("</blockquote>")
            continue

        # Blank line ends paragraph
        if not stripped:
            flush_paragraph(para_buf)
            i += 1
            continue

        para_buf.append(line)
        i += 1

    flush_paragraph(para_buf)
    return "\n".join(out)


def escape_text(text: str) -> str:
    # Block escaping (pre/code) – keep newlines.
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr(text: str) -> str:
    return escape_text(text).replace('"', "&quot;")


def safe_href(href: str | None) -> str | None:
    if href is None:
        return None
    cleaned = href.strip()
    if not cleaned:
        return None
    if cleaned.lower().startswith(("javascript:", "data:", "vbscript:")):
        return None
    return cleaned


def _inline(text: str) -> str:
    # Placeholder-based inline renderer (escape-by-default).
    replacements: list[str] = []

    def stash(html: str) -> str:
        token = f"@@{len(replacements)}@@"
        replacements.append(html)
        return token

    text = re.sub(r"`([^`]+)`", lambda m: stash(f"<code>{escape_text(m.group(1))}</code>"), text)

    def _image_repl(match: re.Match) -> str:
        src = safe_href(match.group(2))
        if not src:
            return match.group(1)
        title = match.group(3)
        title_attr = f' title="{escape_attr(title)}"' if title else ""
        return stash(f'<img src="{escape_attr(src)}" alt="{escape_attr(match.group(1))}"{title_attr}>')

    text = re.sub(r'!\[([^\]]*)\]\(([^)\s]+)(?:\s+"([^"]*)")?\)', _image_repl, text)

    def _link_repl(match: re.Match) -> str:
        href = safe_href(match.group(2))
        label = match.group(1)
        if not href:
            return label
        return stash(f'<a href="{escape_attr(href)}">{_emphasis(escape_text(label))}</a>')

    text = re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", _link_repl, text)

    escaped = _emphasis(escape_text(text))
    for idx, html in enumerate(replacements):
        escaped = escaped.replace(f"@@{idx}@@", html)
    return escaped


def _emphasis(escaped: str) -> str:
    escaped = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", escaped)
    escaped = re.sub(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])", r"<em>\1</em>", escaped)
    escaped = re.sub(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)", r"<em>\1</em>", escaped)
    return escaped


def _plain(text: str) -> str:
    text = re.sub(r"!?\[([^\]]*)\]\([^)]*\)", r"\1", text)
    return re.sub(r"[`*_]", "", text)


def _unique_id(base: str, seen: dict[str, int]) -> str:
    count = seen.get(base, 0)
    seen[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


def _looks_like_table_start(lines: list[str], i: int) -> bool:
    if i + 1 >= len(lines):
        return False
    header = lines[i].strip()
    sep = lines[i + 1].strip()
    if not header.startswith("|") or not sep.startswith("|"):
        return False
    # Separator row contains --- columns
    return "---" in sep


def _table_to_html(table_lines: list[str]) -> str:
    rows = [[p.strip() for p in line.strip().strip("|").split("|")] for line in table_lines]

    header = rows[0]
    body_rows = rows[2:]

    out = ["<table>", "<thead>", "<tr>"]
    for h in header:
        out.append(f"<th>{_inline(h)}</th>")
    out.extend(["</tr>", "</thead>", "<tbody>"])
    for r in body_rows:
        out.append("<tr>")
        for c in r:
            out.append(f"<td>{_inline(c)}</td>")
        out.append("</tr>")
    out.extend(["</tbody>", "</table>"])
    return "\n".join(out)
