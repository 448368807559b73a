"""Per-directory sidecar metadata: tags and "opened" flags.

Each directory holding tagged or opened markdown files carries one
``.mdviewer`` JSON file keyed by bare file name::

    {"tags": {"name.md": ["DONE", "IMPORTANT"]}, "opened": {"name.md": true}}

Older files stored a single tag string per file.  Those are migrated in
memory when read and only rewritten in the new shape on the next mutation.
Nothing is cached: every call goes back to the filesystem.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import InvalidRequest, MdviewerError
from .paths import is_markdown_file, sanitize_relative_path, secure_join, split_relative

logger = logging.getLogger(__name__)

SIDECAR_NAME = ".mdviewer"
ARCHIVE_DIR = ".archive"

TAG_ORDER = ("DONE", "IN-PROGRESS", "NEXT", "IMPORTANT", "REVISIT", "ARCHIVE")
VALID_TAGS = frozenset(TAG_ORDER)

TAG_ACTIONS = ("add", "remove", "clear")


def _parse_current(obj) -> "DirectoryMetadata | None":
    tags = obj.get("tags")
    opened = obj.get("opened")
    if tags is None:
        tags = {}
    if opened is None:
        opened = {}
    if not isinstance(tags, dict) or not isinstance(opened, dict):
        return None
    clean_tags = {}
    for name, values in tags.items():
        if values is None:
            continue
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            return None
        if values:
            clean_tags[name] = list(values)
    if not all(isinstance(v, bool) for v in opened.values()):
        return None
    return DirectoryMetadata(tags=clean_tags, opened=dict(opened))


def _parse_legacy(obj) -> "DirectoryMetadata | None":
    tags = obj.get("tags")
    if not isinstance(tags, dict) or not all(isinstance(v, str) for v in tags.values()):
        return None
    opened = obj.get("opened")
    if not isinstance(opened, dict) or not all(isinstance(v, bool) for v in opened.values()):
        opened = {}
    return DirectoryMetadata(
        tags={name: [tag] for name, tag in tags.items() if tag},
        opened=dict(opened),
    )


@dataclass
class DirectoryMetadata:
    tags: dict[str, list[str]] = field(default_factory=dict)
    opened: dict[str, bool] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.tags and not self.opened

    def forget(self, name: str):
        self.tags.pop(name, None)
        self.opened.pop(name, None)

    def to_json(self) -> str:
        payload = {
            "tags": {name: self.tags[name] for name in sorted(self.tags)},
            "opened": {name: self.opened[name] for name in sorted(self.opened)},
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "DirectoryMetadata":
        """Parse sidecar text, falling back to the legacy shape, then to empty."""
        try:
            obj = json.loads(text)
        except ValueError:
            logger.debug("Sidecar is not valid JSON, treating as empty")
            return cls()
        if not isinstance(obj, dict):
            return cls()
        data = _parse_current(obj)
        if data is None:
            data = _parse_legacy(obj)
        if data is None:
            logger.debug("Unrecognized sidecar contents, treating as empty")
            return cls()
        return data


def read_sidecar(dir_path) -> DirectoryMetadata:
    fp = Path(dir_path) / SIDECAR_NAME
    try:
        text = fp.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return DirectoryMetadata()
    return DirectoryMetadata.from_json(text)


def write_sidecar(dir_path, data: DirectoryMetadata):
    fp = Path(dir_path) / SIDECAR_NAME
    if data.is_empty():
        try:
            fp.unlink()
            logger.info("Removed empty %s", fp)
        except FileNotFoundError:
            pass
        return
    fp.write_text(data.to_json(), encoding="utf-8")


class MetadataStore:
    """Sidecar repository addressed by root-relative slash paths."""

    def __init__(self, root, valid_tags=VALID_TAGS):
        self.root = Path(os.path.abspath(root))
        self.valid_tags = frozenset(valid_tags)

    def _dir(self, rel_dir: str) -> Path:
        if rel_dir in ("", "."):
            return self.root
        return secure_join(self.root, rel_dir)

    def get(self, rel_dir: str) -> DirectoryMetadata:
        return read_sidecar(self._dir(rel_dir))

    def put(self, rel_dir: str, data: DirectoryMetadata):
        write_sidecar(self._dir(rel_dir), data)

    def add_tag(self, rel_path: str, tag: str):
        self.set_tag(rel_path, tag, "add")

    def remove_tag(self, rel_path: str, tag: str):
        self.set_tag(rel_path, tag, "remove")

    def clear_tags(self, rel_path: str):
        self.set_tag(rel_path, "", "clear")

    def set_tag(self, rel_path: str, tag: str, action: str = "add"):
        """Apply one tag action to a file.

        An empty ``tag`` with ``add`` or ``remove`` changes nothing but the
        sidecar is still rewritten.
        """
        action = action or "add"
        if action not in TAG_ACTIONS:
            raise InvalidRequest("invalid action")
        if action != "clear" and tag and tag not in self.valid_tags:
            raise InvalidRequest("invalid tag")

        rel_dir, name = split_relative(rel_path)
        dir_path = self._dir(rel_dir)
        data = read_sidecar(dir_path)
        if action == "clear":
            data.tags.pop(name, None)
        elif action == "remove":
            if name in data.tags:
                remaining = [t for t in data.tags[name] if t != tag]
                if remaining:
                    data.tags[name] = remaining
                else:
                    del data.tags[name]
        elif tag:
            existing = data.tags.setdefault(name, [])
            if tag not in existing:
                existing.append(tag)
        write_sidecar(dir_path, data)

    def mark_opened(self, rel_path: str):
        rel_dir, name = split_relative(rel_path)
        dir_path = self._dir(rel_dir)
        data = read_sidecar(dir_path)
        data.opened[name] = True
        write_sidecar(dir_path, data)

    def collect_all(self) -> DirectoryMetadata:
        """Merge every sidecar below the root, re-keyed by root-relative path.

        Unreadable sidecars are left out of the result.
        """
        result = DirectoryMetadata()
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=lambda err: None):
            dirnames.sort()
            if SIDECAR_NAME not in filenames:
                continue
            try:
                data = read_sidecar(dirpath)
            except OSError as e:
                logger.debug("Skipping unreadable sidecar in %s: %s", dirpath, e)
                continue
            rel_dir = os.path.relpath(dirpath, self.root).replace(os.sep, "/")
            prefix = "" if rel_dir == "." else rel_dir + "/"
            for name, tags in data.tags.items():
                result.tags[prefix + name] = tags
            for name, opened in data.opened.items():
                if opened:
                    result.opened[prefix + name] = True
        return result

    def archive(self, files) -> int:
        """Move each markdown file into a sibling ``.archive`` directory.

        Returns how many files were moved; anything that cannot be moved
        is skipped.
        """
        moved = 0
        for raw in files:
            if not isinstance(raw, str):
                continue
            try:
                rel_path = sanitize_relative_path(raw)
                if not is_markdown_file(rel_path):
                    logger.debug("Not archiving non-markdown path %r", raw)
                    continue
                src = secure_join(self.root, rel_path)
            except MdviewerError as e:
                logger.debug("Not archiving %r: %s", raw, e)
                continue
            rel_dir, name = split_relative(rel_path)
            archive_dir = src.parent / ARCHIVE_DIR
            try:
                archive_dir.mkdir(parents=True, exist_ok=True)
                os.replace(src, archive_dir / name)
            except OSError as e:
                logger.debug("Could not archive %s: %s", rel_path, e)
                continue
            logger.info("Archived %s", rel_path)
            try:
                data = read_sidecar(src.parent)
                data.forget(name)
                write_sidecar(src.parent, data)
            except OSError as e:
                logger.warning("Archived %s but could not update its metadata: %s", rel_path, e)
            moved += 1
        return moved
