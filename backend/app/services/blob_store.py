"""Blob store for uploaded PDFs on the local filesystem."""
import logging
import re
import secrets
import time
import uuid
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath

import aiofiles
import aiofiles.os

from app.errors import StorageError

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "pdf-"
PARTIAL_SUFFIX = ".part"
_MAX_STORAGE_NAME = 255
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class StoredBlob:
    storage_name: str
    storage_path: str


def sanitize_name(declared_name: str | None) -> str:
    """Drop any directory part and collapse whitespace runs to underscores."""
    name = PureWindowsPath(declared_name or "").name  # handles both / and \
    name = _WHITESPACE.sub("_", name.strip())
    if name in ("", ".", ".."):
        return "unnamed.pdf"
    return name


def generate_storage_name(declared_name: str | None) -> str:
    """Unique blob name: prefix, epoch millis, random hex, sanitized name."""
    unique = f"{STORAGE_PREFIX}{int(time.time() * 1000)}-{secrets.token_hex(6)}-"
    safe = sanitize_name(declared_name)
    return unique + safe[-(_MAX_STORAGE_NAME - len(unique)):]


class BlobStore:
    """Writes, removes and checks blobs under a single directory."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def ensure_ready(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, storage_name: str) -> Path:
        return self.base_path / storage_name

    async def store(self, content: bytes, declared_name: str | None) -> StoredBlob:
        """Write bytes under a new unique name and return where they landed.

        The bytes go to a hidden temporary file first and are renamed onto the
        final name, so a visible storage name is always complete.
        """
        storage_name = generate_storage_name(declared_name)
        final_path = self.path_for(storage_name)
        tmp_path = self.base_path / f".{uuid.uuid4().hex}{PARTIAL_SUFFIX}"
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, final_path)
        except OSError as e:
            await self._discard(tmp_path)
            raise StorageError(f"Could not write blob {storage_name}: {e}") from e
        return StoredBlob(storage_name=storage_name, storage_path=str(final_path))

    async def remove(self, storage_path: str) -> bool:
        """Delete a blob. Returns False when it was already gone."""
        try:
            await aiofiles.os.remove(storage_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Could not remove blob {storage_path}: {e}") from e
        return True

    async def exists(self, storage_path: str) -> bool:
        return await aiofiles.os.path.isfile(storage_path)

    async def size(self, storage_path: str) -> int | None:
        try:
            stat = await aiofiles.os.stat(storage_path)
        except FileNotFoundError:
            return None
        return stat.st_size

    async def list_storage_names(self) -> list[str]:
        """Names of completed blobs in the store (temporary files excluded)."""
        if not await aiofiles.os.path.isdir(self.base_path):
            return []
        names = await aiofiles.os.listdir(self.base_path)
        return sorted(n for n in names if n.startswith(STORAGE_PREFIX))

    async def remove_partials(self) -> int:
        """Remove temporary files left behind by interrupted writes."""
        if not await aiofiles.os.path.isdir(self.base_path):
            return 0
        removed = 0
        for name in await aiofiles.os.listdir(self.base_path):
            if name.startswith(".") and name.endswith(PARTIAL_SUFFIX):
                if await self._discard(self.base_path / name):
                    removed += 1
        return removed

    async def _discard(self, path: Path) -> bool:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not discard temporary blob {path}: {e}")
            return False
        return True
