from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List

from ..errors import ParseError, SourceIOError
from ..sources import read_text_source, write_text_output
from .definition import EventDefinition

logger = logging.getLogger(__name__)

EVENT_DOCUMENT_SUFFIX = ".json"


def _event_documents(dir: Path) -> List[Path]:
    try:
        entries = sorted(dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise SourceIOError(f"failed to read dir: {dir}: {exc}", dir) from exc
    return [p for p in entries if p.is_file() and p.suffix == EVENT_DOCUMENT_SUFFIX]


def load_event_definitions(path: Path | str) -> List[EventDefinition]:
    """Parse one event document (a JSON list of event definitions)."""
    path = Path(path)
    text = read_text_source(path)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"failed to parse JSON in {path}: {exc}", path) from exc
    if not isinstance(raw, list):
        raise ParseError(f"failed to parse JSON in {path}: expected a list of events", path)

    out: List[EventDefinition] = []
    for i, item in enumerate(raw):
        try:
            out.append(EventDefinition.from_dict(item))
        except ValueError as exc:
            raise ParseError(
                f"failed to parse JSON in {path}: event #{i}: {exc}", path, i
            ) from exc
    return out


def load_event_definitions_from_dir(dir: Path | str) -> List[EventDefinition]:
    """Concatenate the events of every ``*.json`` document in ``dir``.

    Subdirectories and files with other extensions are skipped. Documents are
    read in filename order so the result is stable across platforms.
    """
    dir = Path(dir)
    out: List[EventDefinition] = []
    for doc in _event_documents(dir):
        defs = load_event_definitions(doc)
        logger.debug("loaded %d event definition(s) from %s", len(defs), doc)
        out.extend(defs)
    return out


def event_document_path(out_dir: Path | str, package_name: str) -> Path:
    return Path(out_dir) / f"{package_name}.event{EVENT_DOCUMENT_SUFFIX}"


def write_event_definitions(
    out_dir: Path | str, package_name: str, definitions: Iterable[EventDefinition]
) -> Path:
    path = event_document_path(out_dir, package_name)
    payload = [d.to_dict() for d in definitions]
    write_text_output(path, json.dumps(payload, indent=2) + "\n")
    return path
