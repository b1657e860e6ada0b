"""
Builders for mdast-shaped test trees.

Kept deliberately small: each builder returns a plain dict exactly as an
mdast parser would emit it, without position data.
"""

from mdslice.app.config import BehaviorConfig, SliceConfig, TextCleanupConfig


def text(value: str) -> dict:
    return {"type": "text", "value": value}


def inline_code(value: str) -> dict:
    return {"type": "inlineCode", "value": value}


def code(value: str, lang: str | None = None) -> dict:
    node = {"type": "code", "value": value}
    if lang is not None:
        node["lang"] = lang
    return node


def emphasis(*children: dict) -> dict:
    return {"type": "emphasis", "children": list(children)}


def strong(*children: dict) -> dict:
    return {"type": "strong", "children": list(children)}


def link(url: str, *children: dict) -> dict:
    return {"type": "link", "url": url, "children": list(children)}


def image(url: str, alt: str = "") -> dict:
    return {"type": "image", "url": url, "alt": alt}


def brk() -> dict:
    return {"type": "break"}


def paragraph(*children: dict) -> dict:
    return {"type": "paragraph", "children": list(children)}


def heading(depth: int, *children: dict) -> dict:
    return {"type": "heading", "depth": depth, "children": list(children)}


def blockquote(*children: dict) -> dict:
    return {"type": "blockquote", "children": list(children)}


def list_item(*children: dict) -> dict:
    return {"type": "listItem", "children": list(children)}


def bullet_list(*items: dict, ordered: bool = False) -> dict:
    return {"type": "list", "ordered": ordered, "children": list(items)}


def root(*children: dict) -> dict:
    return {"type": "root", "children": list(children)}


def hello_emphasis_test() -> dict:
    """paragraph[text("Hello "), emphasis[text("world")], text(" test")]"""
    return paragraph(text("Hello "), emphasis(text("world")), text(" test"))


def config(
    *,
    merge: bool = True,
    whitespace: str = "trim",
    preserve_empty_blocks: bool = True,
    **behavior,
) -> SliceConfig:
    """Build a SliceConfig from flat keyword arguments."""
    return SliceConfig(
        behavior=BehaviorConfig(**behavior),
        text=TextCleanupConfig(whitespace=whitespace, merge_adjacent_text=merge),
        preserve_empty_blocks=preserve_empty_blocks,
    )


def sample_document() -> dict:
    """A small document touching every node category."""
    return root(
        heading(1, text("Title")),
        paragraph(
            text("Some "),
            emphasis(text("emphasized")),
            text(" and "),
            inline_code("code"),
            text("."),
        ),
        bullet_list(
            list_item(paragraph(text("one"))),
            list_item(paragraph(text("two"), brk(), text("lines"))),
        ),
        code("print('hi')\n", lang="python"),
        blockquote(
            paragraph(
                text("quote "),
                link("https://example.test", text("here")),
                image("pic.png", alt="pic"),
            )
        ),
    )
