from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional


class StorageBackend(ABC):
    """
    Abstract key-value interface for persisted view state (local disk, memory, ...).

    Values are already-serialised text; encoding/decoding is the caller's job.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass


class LocalFileSystemStorage(StorageBackend):
    """
    One file per key under a root directory: <root>/<key>.json
    """

    SUFFIX = ".json"

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        # Prevent path traversal attacks
        full_path = (self.root / f"{key}{self.SUFFIX}").resolve()
        if full_path.parent != self.root:
            raise ValueError(f"Access denied: {key}")
        return full_path

    def get(self, key: str) -> Optional[str]:
        p = self._resolve(key)
        if not p.is_file():
            return None
        return p.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        p = self._resolve(key)
        # atomic replace
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(p)

    def delete(self, key: str) -> None:
        p = self._resolve(key)
        if p.exists():
            p.unlink()

    def keys(self) -> List[str]:
        return sorted(f.name[: -len(self.SUFFIX)] for f in self.root.glob(f"*{self.SUFFIX}") if f.is_file())


class InMemoryStorage(StorageBackend):
    """
    Process-local storage. Used when no state directory is configured, and in tests.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)
