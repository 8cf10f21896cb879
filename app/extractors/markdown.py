"""Convert a rendered HTML snapshot into markdown-like text.

The output keeps the structural cues the contact heuristics rely on:
headings, links, lists and tables. Everything else collapses to text.

The tree is walked with an explicit stack, so arbitrarily deep markup does
not hit the interpreter's recursion limit.
"""

import re
from collections.abc import Callable, Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

HIDDEN_MARKER = "data-render-hidden"

MAIN_CONTENT_SELECTOR = 'main, article, [role="main"], .content, #content'

_SKIPPED_TAGS = frozenset({"script", "style", "noscript", "iframe", "svg"})

_HEADING_PREFIX = {f"h{level}": "#" * level for level in range(1, 7)}

_DISPLAY_NONE_RE = re.compile(r"display\s*:\s*none", re.IGNORECASE)
_VISIBILITY_HIDDEN_RE = re.compile(r"visibility\s*:\s*hidden", re.IGNORECASE)

# (pending children, converted parts, wrapper applied to the joined parts).
# Pending children are DOM nodes, or ready-made frames for list items.
_Frame = tuple[Iterator, list[str], Callable[[str], str] | None]


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr(HIDDEN_MARKER) or tag.has_attr("hidden"):
        return True
    style = tag.get("style") or ""
    return bool(_DISPLAY_NONE_RE.search(style) or _VISIBILITY_HIDDEN_RE.search(style))


def _frame(tag: Tag, wrap: Callable[[str], str] | None = None) -> _Frame:
    return (iter(tag.children), [], wrap)


def _anchor(href: str | None, text: str) -> str:
    if href and text:
        return f"[{text}]({href})"
    if href:
        return f"[{href}]({href})"
    return text


def _convert_image(tag: Tag) -> str:
    src = tag.get("src") or ""
    if not src:
        return ""
    alt = tag.get("alt") or ""
    return f"![{alt}]({src})"


def _list_frame(tag: Tag, ordered: bool) -> _Frame:
    """Only direct <li> children become items."""
    def _item(index: int, item: Tag) -> _Frame:
        bullet = f"{index}." if ordered else "-"
        return _frame(item, lambda text: f"{bullet} {text.strip()}\n")

    items = tag.find_all("li", recursive=False)
    pending = (_item(index, item) for index, item in enumerate(items, start=1))
    return (pending, [], lambda text: "\n" + text)


def _convert_table(tag: Tag) -> str:
    md = "\n"
    for index, row in enumerate(tag.find_all("tr")):
        cells = [cell.get_text().strip() for cell in row.find_all(["th", "td"])]
        md += "| " + " | ".join(cells) + " |\n"
        if index == 0:
            md += "| " + " | ".join("---" for _ in cells) + " |\n"
    return md


def _open_element(tag: Tag) -> str | _Frame:
    """Leaf conversions return text; containers return a frame to walk."""
    name = tag.name.lower()

    if name in _HEADING_PREFIX:
        prefix = _HEADING_PREFIX[name]
        return _frame(tag, lambda text: f"\n{prefix} {text}\n")
    if name == "p":
        return _frame(tag, lambda text: f"\n{text}\n")
    if name == "br":
        return "\n"
    if name == "hr":
        return "\n---\n"
    if name in ("strong", "b"):
        return _frame(tag, lambda text: f"**{text}**")
    if name in ("em", "i"):
        return _frame(tag, lambda text: f"*{text}*")
    if name == "a":
        href = tag.get("href")
        return _frame(tag, lambda text: _anchor(href, text.strip()))
    if name == "img":
        return _convert_image(tag)
    if name == "ul":
        return _list_frame(tag, ordered=False)
    if name == "ol":
        return _list_frame(tag, ordered=True)
    if name == "blockquote":
        return _frame(tag, lambda text: f"\n> {text.strip()}\n")
    if name == "code":
        return f"`{tag.get_text()}`"
    if name == "pre":
        return f"\n```\n{tag.get_text()}\n```\n"
    if name == "table":
        return _convert_table(tag)
    return _frame(tag)


def _convert_tree(root: Tag) -> str:
    stack: list[_Frame] = [_frame(root)]
    while stack:
        pending, parts, wrap = stack[-1]
        node = next(pending, None)

        if node is None:
            stack.pop()
            text = "".join(parts)
            if wrap is not None:
                text = wrap(text)
            if not stack:
                return text
            stack[-1][1].append(text)
        elif isinstance(node, tuple):
            stack.append(node)
        elif isinstance(node, Tag):
            if node.name.lower() in _SKIPPED_TAGS or _is_hidden(node):
                continue
            opened = _open_element(node)
            if isinstance(opened, str):
                parts.append(opened)
            else:
                stack.append(opened)
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            parts.append(str(node))
    return ""


def _tidy(markdown: str) -> str:
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    markdown = re.sub(r"[ \t]+", " ", markdown)
    markdown = re.sub(r"\n +", "\n", markdown)
    return markdown.strip()


def select_root(soup: BeautifulSoup, full_page: bool) -> Tag:
    """Pick the element to convert: whole body, or the main content region."""
    body = soup.body or soup
    if full_page:
        return body
    return soup.select_one(MAIN_CONTENT_SELECTOR) or body


def html_to_markdown(html: str, full_page: bool = False) -> str:
    soup = BeautifulSoup(html, "html.parser")
    return _tidy(_convert_tree(select_root(soup, full_page)))
