"""Lightweight single-file-component block extraction.

No parser is involved: the first ``<script>`` and ``<template>`` regions are
located with regular expressions and tagged with their line offset so rule
matches can be reported against the full file.
"""

from __future__ import annotations

from dataclasses import dataclass
from re import DOTALL, Pattern, compile

SCRIPT_BLOCK_RE = compile(r"<script[^>]*>(.*?)</script>", DOTALL)
TEMPLATE_BLOCK_RE = compile(r"<template[^>]*>(.*?)</template>", DOTALL)


@dataclass(frozen=True, slots=True)
class Block:
    """Extracted region text and the number of lines preceding it."""

    code: str
    start_line: int

    def lines(self) -> list[str]:
        return self.code.split("\n")

    def to_file_line(self, index: int) -> int:
        """Translate a 0-based region line index into a 1-based file line."""
        return self.start_line + index + 1


EMPTY_BLOCK = Block(code="", start_line=0)


@dataclass(frozen=True, slots=True)
class SfcBlocks:
    """Full component text plus its script and template regions."""

    content: str
    script: Block
    template: Block


def extract_script_block(content: str) -> Block:
    """Return the first ``<script>`` region, or an empty block."""
    return _extract_block(content, SCRIPT_BLOCK_RE)


def extract_template_block(content: str) -> Block:
    """Return the first ``<template>`` region, or an empty block.

    Nested ``<template>`` tags end the region at the first closing tag.
    """
    return _extract_block(content, TEMPLATE_BLOCK_RE)


def split_sfc(content: str) -> SfcBlocks:
    """Split component text into script and template regions."""
    return SfcBlocks(
        content=content,
        script=extract_script_block(content),
        template=extract_template_block(content),
    )


def _extract_block(content: str, pattern: Pattern[str]) -> Block:
    match = pattern.search(content)
    if match is None:
        return EMPTY_BLOCK
    code_start = match.start(1)
    return Block(code=match.group(1), start_line=content.count("\n", 0, code_start))
