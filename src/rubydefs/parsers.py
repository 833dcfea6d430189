from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter as ts
import tree_sitter_ruby as tsruby
from pydantic import BaseModel, ConfigDict

from rubydefs.definitions import Definitions
from rubydefs.logger import logger

RUBY_LANGUAGE = ts.Language(tsruby.language())
_parser: Optional[ts.Parser] = None


def _get_parser() -> ts.Parser:
    global _parser
    if _parser is None:
        _parser = ts.Parser(RUBY_LANGUAGE)
    return _parser


class Comment(BaseModel):
    """A comment span in the original source buffer."""

    start_byte: int
    end_byte: int
    start_line: int


def comment_text(source: bytes, comment: Comment) -> str:
    return source[comment.start_byte : comment.end_byte].decode(
        "utf-8", errors="replace"
    )


class ParsedSource(BaseModel):
    """
    A Ruby source buffer together with its tree-sitter tree. Definitions
    yielded from here borrow the tree, so keep this object alive while
    they are in use.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: Optional[str] = None
    source: bytes
    tree: ts.Tree

    @property
    def root(self) -> ts.Node:
        return self.tree.root_node

    def definitions(self) -> Definitions:
        return Definitions(self.root)

    def comments(self) -> List[Comment]:
        return list(_iter_comments(self.root))

    def comment_text(self, comment: Comment) -> str:
        return comment_text(self.source, comment)


def _iter_comments(root: ts.Node) -> Iterator[Comment]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            yield Comment(
                start_byte=node.start_byte,
                end_byte=node.end_byte,
                start_line=node.start_point[0] + 1,
            )
            continue
        # reversed so that comments come out in document order
        stack.extend(reversed(node.children))


def parse_source(source: bytes, path: Optional[str] = None) -> ParsedSource:
    if not isinstance(source, bytes):
        raise ValueError("source must be bytes")

    tree = _get_parser().parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Ruby source contains syntax errors; results may be incomplete",
            path=path,
        )
    return ParsedSource(path=path, source=source, tree=tree)


def parse_file(path: str | Path) -> ParsedSource:
    file_path = Path(path)
    with open(file_path, "rb") as file:
        source = file.read()
    logger.debug("Reading Ruby file", path=str(file_path), size=len(source))
    return parse_source(source, path=str(file_path))
