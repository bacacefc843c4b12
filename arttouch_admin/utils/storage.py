from dataclasses import dataclass
from pathlib import Path
import os
import uuid
from typing import Optional

from arttouch_admin.config import get_settings


@dataclass
class ImageUpload:
    """An uploaded image as the services see it: original filename plus raw bytes."""

    filename: str
    content: bytes

    @property
    def is_empty(self) -> bool:
        return not self.filename or not self.content


def blob_name_for(kind: str, product_id: int, filename: str) -> str:
    """Collision-resistant blob name, e.g. ``cover_12_<hex>.jpg``."""
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{kind}_{product_id}_{uuid.uuid4().hex}{ext}"


class LocalBlobStore:
    """Stores blobs under ``root/subdir`` and hands out ``url_prefix/subdir/<name>`` references."""

    def __init__(self, root: Path, url_prefix: str = "/media", subdir: str = "products"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.subdir = subdir

    def _ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def store(self, data: bytes, suggested_name: str) -> str:
        """Write ``data`` and return its stable reference. Raises OSError on I/O failure."""
        filename = Path(suggested_name).name
        if not filename:
            raise ValueError("Empty blob name")
        dst_dir = self.root / self.subdir
        self._ensure_dir(dst_dir)
        file_path = dst_dir / filename
        with file_path.open("wb") as buffer:
            buffer.write(data)
        return f"{self.url_prefix}/{self.subdir}/{filename}"

    def path_for(self, ref: Optional[str]) -> Optional[Path]:
        """Map a reference back to its file, or None when it does not point inside the root."""
        if not ref or not isinstance(ref, str):
            return None
        prefix = f"{self.url_prefix}/"
        if not ref.startswith(prefix):
            return None
        parts = [p for p in ref[len(prefix):].split("/") if p]
        if len(parts) < 2 or any(p in (".", "..") for p in parts):
            return None
        return self.root.joinpath(*parts)

    def delete(self, ref: Optional[str]) -> bool:
        """Delete a stored blob by reference. Returns True if a file was removed.

        Safety rules:
        - Only operates inside the store root
        - Ignores None/empty or foreign references
        - Missing files are not an error
        """
        target_path = self.path_for(ref)
        if target_path is None or not target_path.is_file():
            return False
        target_path.unlink()
        return True


def get_blob_store() -> LocalBlobStore:
    settings = get_settings()
    return LocalBlobStore(settings.MEDIA_ROOT, url_prefix=settings.MEDIA_URL)
