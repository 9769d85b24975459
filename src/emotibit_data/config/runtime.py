"""Runtime configuration helpers for the packet parsing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class ParserConfig:
    """
    Knobs for how packet lines are parsed and batched.

    The defaults keep parsing strict (tokens are used exactly as split) and
    single-threaded.
    """

    strip_tokens: bool = False
    split_tx: bool = True
    skip_blank_lines: bool = True

    # Batch reader sizing
    workers: int = 1
    chunk_size: int = 1024

    def sanitized(self) -> ParserConfig:
        """Return a copy with derived limits applied."""
        return ParserConfig(
            strip_tokens=bool(self.strip_tokens),
            split_tx=bool(self.split_tx),
            skip_blank_lines=bool(self.skip_blank_lines),
            workers=max(1, int(self.workers)),
            chunk_size=max(1, int(self.chunk_size)),
        )

    def parse_options(self) -> dict:
        """Keyword arguments accepted by :func:`~emotibit_data.core.packet_parser.parse_line`."""
        return {"strip_tokens": self.strip_tokens, "split_tx": self.split_tx}


def _recognized_fields() -> set[str]:
    """Option names a parser config file may set."""
    return {f.name for f in fields(ParserConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Merge a nested ``parser:`` block into the top level; its keys win over top-level duplicates."""
    merged: MutableMapping[str, Any] = {key: value for key, value in data.items() if key != "parser"}
    block = data.get("parser")
    if isinstance(block, Mapping):
        merged.update(block)
    return merged


def config_from_mapping(data: Mapping[str, Any] | None) -> ParserConfig:
    """
    Build a :class:`ParserConfig` from a decoded YAML mapping.

    Options may sit at the top level or under ``parser:``. Keys that are not
    parser options (other tools sharing the file) are ignored, and the result
    is sanitized so ``workers`` and ``chunk_size`` are at least 1.
    """
    if not data:
        return ParserConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return ParserConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> ParserConfig:
    """
    Read parser options from the YAML file at ``path``.

    ``None`` or a path that does not exist gives the strict single-threaded
    defaults. An empty file does too.
    """
    if path is None:
        return ParserConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return ParserConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(
            f"Parser config {cfg_path} must be a mapping of parser options, got {type(raw).__name__}"
        )
    return config_from_mapping(raw)


__all__ = ["ParserConfig", "config_from_mapping", "load_config"]
