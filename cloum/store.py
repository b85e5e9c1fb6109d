# /*
# Copyright 2026 The Cloum Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""JSON-backed store of named cluster records."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ValidationError

from cloum import logger
from cloum.errors import ClusterNotFoundError, ConfigError, DuplicateClusterError
from cloum.models import ClusterRecord, ImportSummary, parse_cluster


def _describe_validation_error(err: ValidationError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "record"
    return f"{loc}: {first.get('msg', 'invalid value')}"


def validate_entries(entries: object, source: str) -> list[ClusterRecord]:
    """Validate the ``clusters`` array of a clusters file.

    Args:
        entries: The decoded ``clusters`` value.
        source: File path used in error messages.

    Returns:
        Records in file order.

    Raises:
        ConfigError: If the value is not a list or an entry is invalid.
    """
    if not isinstance(entries, list):
        raise ConfigError(f'Invalid format in {source}: expected "clusters" array')
    records: list[ClusterRecord] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"Invalid cluster at index {index}: expected object")
        label = f'Cluster "{entry["name"]}"' if entry.get("name") else f"Cluster at index {index}"
        try:
            records.append(parse_cluster(entry))
        except ValidationError as err:
            raise ConfigError(f"{label}: {_describe_validation_error(err)}") from err
    return records


def read_clusters_file(path: Path) -> list[ClusterRecord]:
    """Read and validate an external clusters file (``{"clusters": [...]}``).

    Raises:
        ConfigError: If the file is missing, not JSON, or malformed.
    """
    if not path.is_file():
        raise ConfigError(f"File not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as err:
        raise ConfigError(f"Invalid JSON in file: {path}") from err
    if not isinstance(data, dict):
        raise ConfigError('Invalid format: expected JSON object with "clusters" array')
    return validate_entries(data.get("clusters"), str(path))


# Entries as held between load and save: validated records, or raw JSON values
# that failed validation and are written back untouched.
Entry = Union[ClusterRecord, object]


def _entry_name(entry: Entry) -> Optional[str]:
    if isinstance(entry, BaseModel):
        return entry.name
    if isinstance(entry, dict) and isinstance(entry.get("name"), str):
        return entry["name"]
    return None


class ClusterStore:
    """Ordered list of cluster records persisted as one JSON file.

    Every call reloads from disk and mutations write the full list back.
    There is no locking: concurrent writers race and the last write wins.
    Entries that fail validation are skipped with a warning but kept in the
    file, so a hand-edited mistake never blocks the other records.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"clusters": []}, indent=2) + "\n", encoding="utf-8")
        logger.debug("Created %s", self.path)

    def _entries(self) -> list[Entry]:
        self._ensure_file()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as err:
            raise ConfigError(f"Invalid JSON in config file {self.path}: {err}") from err
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {self.path}: expected a JSON object")
        raw = data.get("clusters")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ConfigError(f'Invalid format in {self.path}: expected "clusters" array')

        entries: list[Entry] = []
        for index, item in enumerate(raw):
            try:
                entries.append(parse_cluster(item))
            except ValidationError as err:
                name = _entry_name(item)
                label = f'"{name}"' if name else f"at index {index}"
                logger.warning("Skipping invalid cluster %s in %s: %s",
                               label, self.path, _describe_validation_error(err))
                entries.append(item)
        return entries

    def load(self) -> list[ClusterRecord]:
        """Return all valid records, creating an empty file on first use.

        Raises:
            ConfigError: If the file is not valid JSON.
        """
        records = [e for e in self._entries() if isinstance(e, BaseModel)]
        logger.debug("Loaded %d cluster(s) from %s", len(records), self.path)
        return records

    def save(self, entries: Iterable[Entry]) -> None:
        """Overwrite the file with *entries*, via a temp file and rename."""
        payload = {"clusters": [e.to_json() if isinstance(e, BaseModel) else e for e in entries]}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".clusters-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
            os.replace(tmp_name, self.path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Saved %d cluster(s) to %s", len(payload["clusters"]), self.path)

    def find_by_name(self, name: str) -> ClusterRecord:
        """Look up one record by exact name.

        Raises:
            ClusterNotFoundError: If no valid record has that name.
        """
        records = self.load()
        for record in records:
            if record.name == name:
                return record
        raise ClusterNotFoundError(name, [r.name for r in records])

    def add(self, record: ClusterRecord) -> None:
        """Append *record*.

        Raises:
            DuplicateClusterError: If the name exists; the file is untouched.
        """
        entries = self._entries()
        if any(_entry_name(e) == record.name for e in entries):
            raise DuplicateClusterError(record.name)
        self.save([*entries, record])

    def remove(self, name: str) -> None:
        """Delete every entry called *name*, valid or not.

        Raises:
            ClusterNotFoundError: If absent; the file is untouched.
        """
        entries = self._entries()
        kept = [e for e in entries if _entry_name(e) != name]
        if len(kept) == len(entries):
            raise ClusterNotFoundError(name, [n for n in map(_entry_name, entries) if n])
        self.save(kept)

    def merge(self, incoming: Iterable[ClusterRecord]) -> ImportSummary:
        """Append records whose names are new, skipping the rest.

        Names repeated inside *incoming* are kept once (first occurrence).
        """
        entries = self._entries()
        known = {n for n in map(_entry_name, entries) if n}
        summary = ImportSummary()
        to_add: list[ClusterRecord] = []
        for record in incoming:
            if record.name in known:
                summary.skipped.append(record.name)
                continue
            known.add(record.name)
            to_add.append(record)
            summary.added.append(record.name)
        self.save([*entries, *to_add])
        return summary
