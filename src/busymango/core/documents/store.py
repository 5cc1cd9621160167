"""
Filesystem storage for project documents.

Project documents are Markdown files with an optional YAML front matter
block. The store lists them, reads them, and rewrites either the body text
or the front matter through a transform function. Each rewrite is atomic
on its own (temp file + rename); a body rewrite followed by a metadata
rewrite is two separate writes with nothing tying them together.

Uses python-frontmatter for the YAML block. The block is located with a
regex rather than `frontmatter.loads` so the body around it is kept
byte-for-byte (python-frontmatter strips surrounding whitespace).
"""

from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from busymango.core.errors import DocumentParseError

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)


def split_front_matter(text: str) -> tuple[str, str]:
    """
    Split raw document text into its front matter block and body.

    Returns:
        (block, body); block is "" when the document has no front matter
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return "", text
    return match.group(0), text[match.end():]


def load_front_matter(block: str) -> dict[str, Any]:
    """Parse a front matter block into a metadata dict."""
    if not block:
        return {}
    post = frontmatter.loads(block)
    return dict(post.metadata)


def render_front_matter(metadata: dict[str, Any]) -> str:
    """Render metadata as a `---` delimited YAML block, keeping key order."""
    handler = frontmatter.YAMLHandler()
    body = handler.export(metadata, sort_keys=False)
    return f"---\n{body}\n---\n"


class DocumentStore:
    """
    Storage layer for project documents in a single folder.

    Example:
        store = DocumentStore(Path("~/notes/projects").expanduser())
        for path in store.list_documents():
            metadata, body = store.read(path)
    """

    def __init__(self, root: Path, extension: str = "md"):
        """
        Initialize store.

        Args:
            root: Folder containing project documents (not searched recursively)
            extension: Document file extension, without the dot
        """
        self.root = Path(root)
        self.extension = extension.lstrip(".")

    def list_documents(self) -> list[Path]:
        """
        List project documents, sorted by file name.

        Raises:
            FileNotFoundError: If the root folder doesn't exist
        """
        if not self.root.is_dir():
            raise FileNotFoundError(f"Projects folder not found: {self.root}")
        return sorted(
            path for path in self.root.glob(f"*.{self.extension}") if path.is_file()
        )

    def read(self, path: Path) -> tuple[dict[str, Any], str]:
        """
        Read a document's metadata and body.

        Raises:
            DocumentParseError: If the file can't be read or decoded, or its front
                matter is invalid
        """
        text = self._read_text(path)
        block, body = split_front_matter(text)
        try:
            metadata = load_front_matter(block)
        except yaml.YAMLError as e:
            raise DocumentParseError(
                f"Invalid front matter in {path}: {e}", path=str(path)
            ) from e
        return metadata, body

    def process_body(self, path: Path, transform: Callable[[str], str]) -> None:
        """Rewrite the body text, leaving the front matter block untouched."""
        text = self._read_text(path)
        block, body = split_front_matter(text)
        self._write_atomic(path, block + transform(body))

    def process_metadata(
        self, path: Path, transform: Callable[[dict[str, Any]], None]
    ) -> None:
        """Modify the front matter in place; the transform mutates the dict."""
        text = self._read_text(path)
        block, body = split_front_matter(text)
        metadata = load_front_matter(block)
        transform(metadata)
        self._write_atomic(path, render_front_matter(metadata) + body)

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentParseError(f"Failed to read {path}: {e}", path=str(path)) from e

    def _write_atomic(self, path: Path, content: str) -> None:
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(temp_path, path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
