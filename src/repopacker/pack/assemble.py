"""Assemble the final text bundle from structure and file contents."""

from __future__ import annotations

from collections.abc import Iterable

from repopacker.pack.fetch import BinaryContent, ContentRecord

SEPARATOR = "=" * 80


def assemble(repo_label: str, structure_text: str, records: Iterable[ContentRecord]) -> str:
    """Combine a repository label, its structure index and file contents.

    The output has a ``REPOSITORY:`` header, the structure under
    ``STRUCTURE:``, then one section per record in the given order. Binary
    records are replaced by a placeholder naming their MIME type.

    Parameters
    ----------
    repo_label
        Human-readable repository name, e.g. ``owner/repo``.
    structure_text
        Output of `repopacker.pack.structure.render`.
    records
        Fetched contents.

    Returns
    -------
    str
        The bundle text. Identical inputs give identical output.
    """
    parts: list[str] = [f"REPOSITORY: {repo_label}\nSTRUCTURE:\n{structure_text}\n\n"]
    for record in records:
        parts.append(f"\n{SEPARATOR}\nFILE: {record.path}\n{SEPARATOR}\n\n{_body(record)}\n")
    return "".join(parts)


def _body(record: ContentRecord) -> str:
    if isinstance(record, BinaryContent):
        return f"[Binary/Image Data: {record.mime_type}]"
    return record.text
