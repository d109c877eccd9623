"""Rendering of rich-text documents (ProseMirror/TipTap JSON) to HTML."""

import re
from typing import Any, Dict, List
from markupsafe import Markup, escape

BLOCK_TAGS = {
    "paragraph": "p",
    "blockquote": "blockquote",
    "bulletList": "ul",
    "orderedList": "ol",
    "listItem": "li",
}

MARK_TAGS = {
    "bold": "strong",
    "italic": "em",
    "strike": "s",
    "code": "code",
    "underline": "u",
}

SAFE_LINK = re.compile(r"^(https?://|mailto:|/|#)", re.IGNORECASE)


def _render_marks(text: str, marks: List[Dict[str, Any]]) -> str:
    html = str(escape(text))
    for mark in marks:
        mark_type = mark.get("type")
        if mark_type in MARK_TAGS:
            tag = MARK_TAGS[mark_type]
            html = f"<{tag}>{html}</{tag}>"
        elif mark_type == "link":
            href = (mark.get("attrs") or {}).get("href") or ""
            if SAFE_LINK.match(href):
                html = f'<a href="{escape(href)}" target="_blank" rel="noopener noreferrer">{html}</a>'
    return html


def _render_node(node: Dict[str, Any]) -> str:
    node_type = node.get("type")
    children = "".join(_render_node(child) for child in node.get("content") or [])

    if node_type == "text":
        return _render_marks(node.get("text", ""), node.get("marks") or [])
    if node_type == "doc":
        return children
    if node_type == "heading":
        level = (node.get("attrs") or {}).get("level", 1)
        level = level if level in (1, 2, 3, 4, 5, 6) else 1
        return f"<h{level}>{children}</h{level}>"
    if node_type == "codeBlock":
        return f"<pre><code>{children}</code></pre>"
    if node_type == "hardBreak":
        return "<br>"
    if node_type == "horizontalRule":
        return "<hr>"
    if node_type in BLOCK_TAGS:
        tag = BLOCK_TAGS[node_type]
        return f"<{tag}>{children}</{tag}>"
    # Unsupported nodes keep their content
    return children


def render_rich_text(document: Any) -> Markup:
    """
    Render a rich-text document to HTML.

    Plain strings are rendered as one escaped paragraph.

    Args:
        document: ProseMirror JSON document, a string, or None

    Returns:
        Markup: Safe HTML
    """
    if not document:
        return Markup("")
    if isinstance(document, str):
        return Markup(f"<p>{escape(document)}</p>")
    if not isinstance(document, dict):
        return Markup("")
    return Markup(_render_node(document))


def plain_text(document: Any) -> str:
    """Return the text of a rich-text document, blocks separated by newlines."""
    if not document:
        return ""
    if isinstance(document, str):
        return document

    blocks: List[str] = []

    def walk(node: Dict[str, Any], buffer: List[str]) -> None:
        if node.get("type") == "text":
            buffer.append(node.get("text", ""))
            return
        if node.get("type") == "hardBreak":
            buffer.append("\n")
            return
        content = node.get("content") or []
        if node.get("type") in ("paragraph", "heading", "codeBlock"):
            inner: List[str] = []
            for child in content:
                walk(child, inner)
            blocks.append("".join(inner))
            return
        for child in content:
            walk(child, buffer)

    if isinstance(document, dict):
        walk(document, blocks)
    return "\n".join(block for block in blocks if block)


def count_words(document: Any) -> int:
    return len(plain_text(document).split())


def count_characters(document: Any) -> int:
    return len(plain_text(document).replace("\n", ""))
