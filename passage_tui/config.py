from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Dict, List, Union

from .errors import ConfigMalformed, ConfigUnreadable
from .models import Config, Passage, Rgba, Style

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("./config.toml")

_COLOR_KEYS = (
    "spell_error_color",
    "spell_correct_color",
    "shadow_text_color",
    "background_color",
    "word_color",
)


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Config:
    """
    Read and validate a passage config file.

    Raises ConfigUnreadable if the file can't be read and ConfigMalformed if
    it is not TOML or does not match the expected layout.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigUnreadable(f"cannot read config file {path}: {exc}") from exc

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigMalformed(f"{path}: invalid TOML: {exc}") from exc

    config = parse_config(data)
    log.debug("loaded %d passages from %s", len(config.passages), path)
    return config


def parse_config(data: Dict[str, object]) -> Config:
    style = _parse_style(data.get("style", {}))

    if "words" not in data:
        raise ConfigMalformed("missing required key 'words'")
    words = data["words"]
    if not isinstance(words, list):
        raise ConfigMalformed("'words' must be an array of tables")

    passages: List[Passage] = []
    for i, row in enumerate(words):
        passages.append(_parse_passage(i, row))

    finished = sum(1 for p in passages if p.finished)
    if finished:
        log.debug("%d finished passages will be skipped", finished)
    return Config(style=style, passages=tuple(passages))


def _parse_passage(index: int, row: object) -> Passage:
    where = f"words[{index}]"
    if not isinstance(row, dict):
        raise ConfigMalformed(f"{where} must be a table")
    for key in ("word", "paragraph"):
        if key not in row:
            raise ConfigMalformed(f"{where}: missing required key '{key}'")
        if not isinstance(row[key], str):
            raise ConfigMalformed(f"{where}.{key} must be a string")
    finished = row.get("finished", False)
    if not isinstance(finished, bool):
        raise ConfigMalformed(f"{where}.finished must be a boolean")

    passage = Passage(label=row["word"], text=row["paragraph"], finished=finished)
    if not passage.finished and not passage.typeable:
        raise ConfigMalformed(f"{where}.paragraph must not be empty")
    return passage


def _parse_style(table: object) -> Style:
    if not isinstance(table, dict):
        raise ConfigMalformed("'style' must be a table")

    values: Dict[str, object] = {}
    for key in _COLOR_KEYS:
        if key not in table:
            continue
        channels = table[key]
        if not isinstance(channels, list):
            raise ConfigMalformed(f"style.{key} must be an array of four integers")
        try:
            values[key] = Rgba.from_sequence(channels)
        except ValueError as exc:
            raise ConfigMalformed(f"style.{key}: {exc}") from exc

    if "background_lighten" in table:
        lighten = table["background_lighten"]
        if isinstance(lighten, bool) or not isinstance(lighten, (int, float)):
            raise ConfigMalformed("style.background_lighten must be a number")
        values["background_lighten"] = float(lighten)

    return Style(**values)
