"""UI node tree produced by the preview renderer."""

from __future__ import annotations

import html
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

VOID_TAGS = frozenset({"img", "hr", "br"})


class UINode(BaseModel):
    """An element in the preview tree.

    String children are text and are HTML-escaped on output unless the
    node is marked ``raw`` (used for sanitized custom HTML and converted
    emphasis).
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    attrs: dict[str, str] = Field(default_factory=dict)
    children: list[UINode | str] = Field(default_factory=list)
    raw: bool = False

    def iter_nodes(self) -> Iterator[UINode]:
        """Depth-first walk over this node and every nested node."""
        yield self
        for child in self.children:
            if isinstance(child, UINode):
                yield from child.iter_nodes()

    def find_all(self, tag: str) -> list[UINode]:
        """All nodes in this tree with ``tag``."""
        return [node for node in self.iter_nodes() if node.tag == tag]

    def text_content(self) -> str:
        """Concatenated text of every string child in the tree."""
        return "".join(
            child if isinstance(child, str) else child.text_content() for child in self.children
        )

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attrs.items()
        )
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs} />"

        inner = "".join(
            child.to_html()
            if isinstance(child, UINode)
            else (child if self.raw else html.escape(child, quote=False))
            for child in self.children
        )
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


UINode.model_rebuild()


def node(
    tag: str, *children: UINode | str | None, raw: bool = False, **attrs: str | None
) -> UINode:
    """Build a UINode, dropping ``None`` children and attributes.

    Attribute names use ``_`` for ``-`` and a trailing ``_`` to avoid
    keywords: ``node("div", class_="card", data_id="x")``.
    """
    return UINode(
        tag=tag,
        attrs={
            name.rstrip("_").replace("_", "-"): value
            for name, value in attrs.items()
            if value is not None
        },
        children=[child for child in children if child is not None],
        raw=raw,
    )
