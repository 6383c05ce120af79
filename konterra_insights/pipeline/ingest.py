"""
Snapshot Ingestion

Loads a network snapshot for the CLI from a JSON document or a directory of
CSV files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from konterra_insights.models.entities import NetworkSnapshot

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ";"

LIST_COLUMNS = {"tags", "personal_interests", "professional_goals"}

CSV_FILES = {
    "contacts": ["contacts.csv", "Contacts.csv"],
    "connections": ["connections.csv", "Connections.csv"],
    "interactions": ["interactions.csv", "Interactions.csv"],
    "favors": ["favors.csv", "Favors.csv"],
}


def _normalize_column(name: str) -> str:
    """``Source Contact Id`` / ``sourceContactId`` -> ``source_contact_id``."""
    name = name.strip()
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0 and name[i - 1].islower():
            out.append("_")
        out.append(ch.lower())
    return "".join(out).replace(" ", "_").replace("-", "_")


def _split_list(value: Any) -> list[str]:
    if value is None or (not isinstance(value, list) and pd.isna(value)):
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(LIST_SEPARATOR) if part.strip()]


def _clean_row(row: dict) -> dict:
    """Drop empty cells so model defaults apply."""
    cleaned = {}
    for key, value in row.items():
        if key in LIST_COLUMNS:
            cleaned[key] = _split_list(value)
        elif isinstance(value, str):
            if value.strip():
                cleaned[key] = value.strip()
        elif value is not None and not pd.isna(value):
            cleaned[key] = value
    return cleaned


def _read_csv_records(filepath: Path) -> list[dict]:
    """Read a CSV file into cleaned row dictionaries."""
    try:
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        logger.warning(f"{filepath.name} is empty")
        return []

    df.columns = [_normalize_column(col) for col in df.columns]

    records = []
    for row in df.to_dict(orient="records"):
        row = _clean_row(row)
        if "bidirectional" in row:
            row["bidirectional"] = str(row["bidirectional"]).strip().lower() in {"true", "1", "yes", "y"}
        records.append(row)
    return records


def _find_file(directory: Path, names: list[str]) -> Optional[Path]:
    """Find the first existing file from a list of candidate names."""
    for name in names:
        filepath = directory / name
        if filepath.exists():
            return filepath
    return None


def _load_directory(directory: Path) -> NetworkSnapshot:
    data: dict[str, list[dict]] = {}
    loaded: list[str] = []

    for section, names in CSV_FILES.items():
        filepath = _find_file(directory, names)
        if filepath is None:
            if section == "contacts":
                raise FileNotFoundError(f"contacts.csv not found in {directory}")
            logger.info(f"{names[0]} not found, {section} left empty")
            continue
        data[section] = _read_csv_records(filepath)
        loaded.append(filepath.name)

    return NetworkSnapshot(source_files=loaded, **data)


def _normalize_records(records: Any) -> Any:
    """Apply CSV column naming to JSON records, so camelCase keys load too."""
    if not isinstance(records, list):
        return records
    return [
        {_normalize_column(key): value for key, value in record.items()}
        if isinstance(record, dict) else record
        for record in records
    ]


def _load_json(filepath: Path) -> NetworkSnapshot:
    try:
        payload = json.loads(filepath.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filepath}: {e}") from e

    if not isinstance(payload, dict) or "contacts" not in payload:
        raise ValueError(f"{filepath} must contain a 'contacts' array")

    return NetworkSnapshot(
        source_files=[filepath.name],
        contacts=_normalize_records(payload.get("contacts") or []),
        connections=_normalize_records(payload.get("connections") or []),
        interactions=_normalize_records(payload.get("interactions") or []),
        favors=_normalize_records(payload.get("favors") or []),
    )


def load_snapshot(path: str | Path) -> NetworkSnapshot:
    """Load a network snapshot.

    Args:
        path: JSON file, or directory holding contacts.csv and optionally
            connections.csv, interactions.csv and favors.csv

    Returns:
        Validated NetworkSnapshot

    Raises:
        FileNotFoundError: If the path or contacts data is missing
        ValueError: If the file cannot be parsed
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")

    snapshot = _load_directory(path) if path.is_dir() else _load_json(path)

    logger.info(
        f"Snapshot loaded: {len(snapshot.contacts)} contacts, "
        f"{len(snapshot.connections)} connections, "
        f"{len(snapshot.interactions)} interactions, "
        f"{len(snapshot.favors)} favors"
    )

    return snapshot
