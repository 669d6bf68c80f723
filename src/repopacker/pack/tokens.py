"""Token counting for bundle output."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cache

import tiktoken

from repopacker.pack.fetch import ContentRecord, TextContent


@dataclass(frozen=True)
class TokenCounts:
    """Token counts for bundle content.

    Attributes
    ----------
    per_file_tokens
        Map of file path to token count (text files only).
    content_total_tokens
        Total tokens across all text files.
    bundle_tokens
        Tokens of the complete bundle text.
    """

    per_file_tokens: dict[str, int]
    content_total_tokens: int
    bundle_tokens: int


def count_tokens(text: str, *, encoding_name: str) -> int:
    """Count tokens in text using the specified encoding."""
    return len(_encoding(encoding_name).encode(text, disallowed_special=()))


def count_bundle_tokens(records: Iterable[ContentRecord], bundle_text: str, *, encoding_name: str) -> TokenCounts:
    """Count tokens for each text record and for the whole bundle.

    Binary records are skipped; only their placeholder line reaches the
    bundle.

    Parameters
    ----------
    records
        Fetched contents.
    bundle_text
        Output of `repopacker.pack.assemble.assemble`.
    encoding_name
        Token encoding name (e.g., 'cl100k_base').

    Returns
    -------
    TokenCounts
        Per-file, content and bundle totals.
    """
    per_file: dict[str, int] = {}
    total = 0
    for record in sorted((r for r in records if isinstance(r, TextContent)), key=lambda r: r.path):
        tokens = count_tokens(record.text, encoding_name=encoding_name)
        per_file[record.path] = tokens
        total += tokens
    bundle = count_tokens(bundle_text, encoding_name=encoding_name)
    return TokenCounts(per_file_tokens=per_file, content_total_tokens=total, bundle_tokens=bundle)


@cache
def _encoding(name: str) -> tiktoken.Encoding:
    return tiktoken.get_encoding(name)
