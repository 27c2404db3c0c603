# storefront/storage.py
"""
Durable key/value storage for serialized cart and wishlist records.

Two backends share the same small interface (get_item / set_item / remove_item / keys):

    MemoryStorage      - plain dict, lives as long as the process
    FileBackedStorage  - one CSV (preferred) or Excel table with `key` and `value`
                         columns. Every read-modify-write holds a file lock so
                         writes to the same file never interleave.

Usage:
    from storefront.storage import FileBackedStorage
    storage = FileBackedStorage(Path("data"), "storage.csv")
    storage.set_item("cart_guest", "[]")
    storage.get_item("cart_guest")
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

import pandas as pd
from filelock import FileLock

logger = logging.getLogger(__name__)

KEY_COLUMN = "key"
VALUE_COLUMN = "value"


class StorageError(Exception):
    """Raised when a durable write cannot be completed."""


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._data.keys())


class FileBackedStorage:
    """
    Stores every key as one row of a CSV / Excel file inside data_dir.
    Values are kept verbatim as strings (JSON produced by the persistence bridge).
    """

    def __init__(self, data_dir: Path, filename: str = "storage.csv"):
        self.data_dir = Path(data_dir)
        self.filename = filename

    @property
    def path(self) -> Path:
        return self.data_dir / Path(self.filename)

    def _lock(self) -> FileLock:
        return FileLock(str(self.path) + ".lock")

    def _empty_df(self) -> pd.DataFrame:
        return pd.DataFrame(columns=[KEY_COLUMN, VALUE_COLUMN])

    def _read_df(self) -> pd.DataFrame:
        path = self.path
        if not path.exists():
            return self._empty_df()
        # keep_default_na=False so a literal "null" / "NA" value survives as text
        try:
            if path.suffix.lower() in (".xls", ".xlsx"):
                df = pd.read_excel(path, dtype=str, keep_default_na=False)
            else:
                df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return self._empty_df()
        if df.empty:
            return self._empty_df()
        return df.fillna("")

    def _write_df_nolock(self, df: pd.DataFrame) -> None:
        """
        Write DataFrame WITHOUT acquiring the file lock.
        Use this only when the caller already holds the lock.
        """
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if path.suffix.lower() in (".xls", ".xlsx"):
                df.to_excel(path, index=False)
            else:
                df.to_csv(path, index=False)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    # --- key/value primitives ---

    def get_item(self, key: str) -> Optional[str]:
        if not self.path.exists():
            return None
        with self._lock():
            df = self._read_df()
        if df.empty:
            return None
        mask = df[KEY_COLUMN].astype(str) == str(key)
        if not mask.any():
            return None
        return str(df[mask].iloc[0][VALUE_COLUMN])

    def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite the row for `key`."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data dir {self.data_dir}: {e}") from e
        with self._lock():
            df = self._read_df()
            mask = df[KEY_COLUMN].astype(str) == str(key)
            if mask.any():
                df.loc[mask, VALUE_COLUMN] = value
            else:
                df = pd.concat([df, pd.DataFrame([{KEY_COLUMN: key, VALUE_COLUMN: value}])],
                               ignore_index=True, sort=False)
            self._write_df_nolock(df)
        logger.debug("Wrote storage key %s to %s", key, self.path)

    def remove_item(self, key: str) -> bool:
        """Delete the row for `key`. Returns True if a row was removed."""
        if not self.path.exists():
            return False
        with self._lock():
            df = self._read_df()
            if df.empty:
                return False
            orig_len = len(df)
            df = df[df[KEY_COLUMN].astype(str) != str(key)]
            if len(df) == orig_len:
                return False
            self._write_df_nolock(df)
            return True

    def keys(self) -> List[str]:
        if not self.path.exists():
            return []
        with self._lock():
            df = self._read_df()
        if df.empty:
            return []
        return df[KEY_COLUMN].astype(str).tolist()
