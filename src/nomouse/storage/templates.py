"""Per-extension template files."""

from __future__ import annotations

from pathlib import Path

from ..errors import FileAccessError
from ..toolchains.models import normalize_extension


class TemplateStore:
    """Keeps one ``template<ext>`` file per extension in a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, extension: str) -> Path:
        return self._directory / f"template{normalize_extension(extension)}"

    def exists(self, extension: str) -> bool:
        return self.path_for(extension).is_file()

    def load(self, extension: str) -> str | None:
        path = self.path_for(extension)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileAccessError(str(path), "read", exc.strerror or str(exc)) from exc

    def save(self, extension: str, content: str) -> Path:
        """Store ``content`` (trimmed) as the template for ``extension``."""

        path = self.path_for(extension)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_text(content.strip(), encoding="utf-8")
        except OSError as exc:
            raise FileAccessError(str(path), "write", exc.strerror or str(exc)) from exc
        return path


__all__ = ["TemplateStore"]
