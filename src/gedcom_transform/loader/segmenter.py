# src/gedcom_transform/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from gedcom_transform.logging import get_logger

from .tokenizer import Token

log = get_logger(__name__)


@dataclass
class GEDCOMNode:
    """
    One GEDCOM line placed in its record tree.

    `value` is the line payload, "" when the line has none; CONT/CONC lines
    stay as children until `reconstruct_values` folds them in. `pointer` is
    the xref a record defines ("@I1@"), normally only set on level-0 nodes. `lineno`
    is the 1-based source line, kept for log messages.
    """

    level: int
    tag: str
    value: str = ""
    pointer: Optional[str] = None
    lineno: int = 0
    children: List["GEDCOMNode"] = field(default_factory=list)

    @classmethod
    def from_token(cls, tok: Token) -> "GEDCOMNode":
        return cls(
            level=tok.level,
            tag=tok.tag,
            value=tok.value,
            pointer=tok.pointer,
            lineno=tok.lineno,
        )

    # ---------- Helper / Mixin Methods ----------

    def add_child(self, child: "GEDCOMNode") -> None:
        self.children.append(child)

    def find_first(self, tag: str) -> Optional["GEDCOMNode"]:
        """Return the first direct child with this tag, or None."""
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def first_value(self, tag: str, default: str = "") -> str:
        """Value of the first direct child with this tag, or `default`."""
        child = self.find_first(tag)
        return child.value if child is not None else default

    def iter_subtree(self) -> Iterator["GEDCOMNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def __repr__(self) -> str:
        ptr = f" {self.pointer}" if self.pointer else ""
        return f"<GEDCOMNode {self.level}{ptr} {self.tag}: {self.value!r}>"


# ---------- SEGMENTER IMPLEMENTATION ----------

def segment_records(tokens: Iterable[Token]) -> List[GEDCOMNode]:
    """
    Convert a flat Token stream into a forest of level-0 GEDCOMNode records.

    Rules:
        - Level 0 tokens start a new root and reset the stack.
        - Any other token pops the stack while the top is at the same or a
          deeper level, then becomes the last child of the new top.
        - Levels may jump by more than one; the node nests under whatever
          shallower node is open.
        - A token with no open parent (before the first record) is dropped.
    """
    roots: List[GEDCOMNode] = []
    stack: List[GEDCOMNode] = []

    for tok in tokens:
        node = GEDCOMNode.from_token(tok)

        if tok.level == 0:
            roots.append(node)
            stack = [node]
            continue

        while stack and stack[-1].level >= tok.level:
            stack.pop()

        if not stack:
            log.debug("Dropping orphan line %d (level %d %s)", tok.lineno, tok.level, tok.tag)
            continue

        stack[-1].add_child(node)
        stack.append(node)

    return roots
