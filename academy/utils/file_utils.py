"""
Local export of academy records.

Records are written as the same JSON document shape the remote store
holds ({"payments": [...]}) or as a CSV table for spreadsheets.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence, Type

import pandas as pd


logger = logging.getLogger(__name__)


EXPORT_FORMATS = ("csv", "json")


def generate_filename(prefix: str, extension: str) -> str:
    """
    Timestamped file name.

    Examples:
        >>> generate_filename("students", "csv")
        'students_20250301_103045.csv'
    """
    return f"{prefix}_{datetime.now():%Y%m%d_%H%M%S}.{extension}"


def save_json(data: Any, filepath: Path) -> bool:
    """
    Write data as pretty-printed UTF-8 JSON, creating parent directories.

    Returns:
        True if the file was written
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False

    logger.debug(f"Saved JSON file: {filepath}")
    return True


def records_to_dataframe(
    records: Sequence[Any],
    columns: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """
    Tabulate records with their persisted field names as columns.

    Passing columns keeps the header (and its order) even for no records.

    Examples:
        >>> list(records_to_dataframe(students).columns)
        ['id', 'name', 'instrument', 'phone']
    """
    rows = [record.to_dict() for record in records]
    return pd.DataFrame(rows, columns=list(columns) if columns is not None else None)


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Write a DataFrame as CSV, creating parent directories.

    The file starts with a UTF-8 byte order mark so spreadsheet programs
    read the Korean text correctly.

    Returns:
        True if the file was written
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(filepath, index=False, encoding='utf-8-sig')
    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False

    logger.debug(f"Saved CSV file: {filepath}")
    return True


def export_records(
    records: Sequence[Any],
    record_type: Type[Any],
    output_dir: Path,
    export_format: str = "csv"
) -> Optional[Path]:
    """
    Write records to a new timestamped file in output_dir.

    Args:
        records: Records of record_type
        record_type: Entity class; its PROPERTY names the file and its
            FIELDS give the CSV header
        output_dir: Directory to write to
        export_format: "csv" or "json"

    Returns:
        Path of the written file, or None if it could not be written

    Raises:
        ValueError: If export_format is not supported
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(
            f"Unsupported export format: {export_format} "
            f"(expected one of: {', '.join(EXPORT_FORMATS)})"
        )

    property_name = record_type.PROPERTY
    filepath = output_dir / generate_filename(property_name, export_format)

    if export_format == "csv":
        saved = save_csv(records_to_dataframe(records, record_type.FIELDS), filepath)
    else:
        saved = save_json({property_name: [r.to_dict() for r in records]}, filepath)

    if saved:
        logger.info(f"Exported {len(records)} {property_name} to {filepath}")
    return filepath if saved else None
