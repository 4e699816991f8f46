"""Key-file codec for OSTree repository and deployment origin descriptors.

The on-disk format is the GLib key-file dialect OSTree uses:

    [core]
    repo_version=1
    mode=bare

    [remote "eos"]
    url=https://ostree.endlessm.com/ostree/eos-amd64
    branches=os/eos/amd64/eos3;
    gpg-verify=false

Parsing keeps every line verbatim, so a descriptor that is parsed and
serialized without edits comes back byte-for-byte identical. Comments, blank
lines and unknown keys survive edits to other sections.
"""

import os
import re
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

_HEADER_RE = re.compile(r"^\[(?P<name>[^\[\]]+)\]\s*$")
_ENTRY_RE = re.compile(r"^(?P<key>[^=\s][^=]*?)\s*=\s*(?P<value>.*?)\s*$")


class DescriptorError(ValueError):
    """A descriptor could not be parsed or violates its uniqueness rules."""


def remote_section(label: str) -> str:
    """Return the section name for a remote, e.g. 'remote "eos"'."""
    return f'remote "{label}"'


def _is_ignorable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#") or stripped.startswith(";")


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


@dataclass
class Section:
    """One [name] block: the raw header line plus every line up to the next header."""

    name: str
    header: str
    body: list[str] = field(default_factory=list)

    def entries(self) -> dict[str, str]:
        """Return the section's key/value pairs in file order."""
        result: dict[str, str] = {}
        for line in self.body:
            if _is_ignorable(line):
                continue
            match = _ENTRY_RE.match(line.rstrip("\r\n"))
            if match is not None:
                result[match.group("key")] = match.group("value")
        return result

    def render(self) -> str:
        """Return the section text without trailing blank separator lines."""
        body = list(self.body)
        while body and not body[-1].strip():
            body.pop()
        text = self.header + "".join(body)
        if not text.endswith("\n"):
            text += "\n"
        return text

    def _find_key(self, key: str) -> int | None:
        for index, line in enumerate(self.body):
            if _is_ignorable(line):
                continue
            match = _ENTRY_RE.match(line.rstrip("\r\n"))
            if match is not None and match.group("key") == key:
                return index
        return None

    def set(self, key: str, value: str) -> None:
        index = self._find_key(key)
        if index is not None:
            ending = _line_ending(self.body[index]) or "\n"
            self.body[index] = f"{key}={value}{ending}"
            return

        # Insert after the last non-blank line so trailing separators stay last
        insert_at = len(self.body)
        while insert_at > 0 and not self.body[insert_at - 1].strip():
            insert_at -= 1
        if insert_at == 0:
            if not self.header.endswith("\n"):
                self.header += "\n"
        elif not self.body[insert_at - 1].endswith("\n"):
            self.body[insert_at - 1] += "\n"
        self.body.insert(insert_at, f"{key}={value}\n")


@dataclass
class RepositoryDescriptor:
    """Ordered sections of an OSTree key-file.

    Invariants: section names are unique and keys are unique within a section.
    """

    preamble: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)

    @staticmethod
    def parse(text: str) -> "RepositoryDescriptor":
        """Parse descriptor text, preserving every line.

        Raises:
            DescriptorError: On malformed headers, stray lines, duplicate
                sections or duplicate keys within a section
        """
        descriptor = RepositoryDescriptor()
        current: Section | None = None
        seen_keys: set[str] = set()

        for lineno, line in enumerate(text.splitlines(keepends=True), start=1):
            content = line.rstrip("\r\n")
            if content.lstrip().startswith("["):
                match = _HEADER_RE.match(content.strip())
                if match is None:
                    raise DescriptorError(f"Malformed section header on line {lineno}: {content}")
                name = match.group("name")
                if descriptor.has_section(name):
                    raise DescriptorError(f"Duplicate section [{name}] on line {lineno}")
                current = Section(name=name, header=line)
                descriptor.sections.append(current)
                seen_keys = set()
                continue

            if _is_ignorable(line):
                if current is None:
                    descriptor.preamble.append(line)
                else:
                    current.body.append(line)
                continue

            if current is None:
                raise DescriptorError(f"Key outside of any section on line {lineno}: {content}")

            match = _ENTRY_RE.match(content)
            if match is None:
                raise DescriptorError(f"Malformed entry on line {lineno}: {content}")
            key = match.group("key")
            if key in seen_keys:
                raise DescriptorError(f"Duplicate key '{key}' in [{current.name}] on line {lineno}")
            seen_keys.add(key)
            current.body.append(line)

        return descriptor

    @staticmethod
    def from_sections(sections: list[tuple[str, dict[str, str]]]) -> "RepositoryDescriptor":
        """Build a descriptor in canonical layout: one blank line between sections."""
        descriptor = RepositoryDescriptor()
        for name, entries in sections:
            descriptor.add_section(name, entries)
        return descriptor

    def serialize(self) -> str:
        parts = list(self.preamble)
        for section in self.sections:
            parts.append(section.header)
            parts.extend(section.body)
        return "".join(parts)

    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def has_section(self, name: str) -> bool:
        return self.get(name) is not None

    def get(self, name: str) -> Section | None:
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def entries(self, name: str) -> dict[str, str]:
        """Return a section's entries, or an empty dict if it is absent."""
        section = self.get(name)
        if section is None:
            return {}
        return section.entries()

    def add_section(self, name: str, entries: dict[str, str]) -> Section:
        """Append a new section after the existing ones.

        Raises:
            DescriptorError: If a section with this name already exists
        """
        if self.has_section(name):
            raise DescriptorError(f"Duplicate section [{name}]")

        if self.sections:
            last = self.sections[-1]
            tail = last.body[-1] if last.body else last.header
            if not tail.endswith("\n"):
                if last.body:
                    last.body[-1] += "\n"
                else:
                    last.header += "\n"
                tail += "\n"
            if tail.strip():
                last.body.append("\n")
        elif self.preamble and not self.preamble[-1].endswith("\n"):
            self.preamble[-1] += "\n"

        section = Section(
            name=name,
            header=f"[{name}]\n",
            body=[f"{key}={value}\n" for key, value in entries.items()],
        )
        self.sections.append(section)
        return section

    def set_value(self, name: str, key: str, value: str) -> None:
        """Set one key, creating the section or key when absent."""
        section = self.get(name)
        if section is None:
            self.add_section(name, {key: value})
            return
        section.set(key, value)

    def remove_section(self, name: str) -> bool:
        """Remove a section with its body lines.

        Returns:
            True if the section was present and removed, False otherwise
        """
        section = self.get(name)
        if section is None:
            return False
        self.sections.remove(section)
        return True


def load_descriptor(path: Path) -> RepositoryDescriptor:
    return RepositoryDescriptor.parse(path.read_text(encoding="utf-8"))


def save_descriptor(path: Path, descriptor: RepositoryDescriptor) -> None:
    atomic_write_text(path, descriptor.serialize())


def atomic_write_text(path: Path, content: str) -> None:
    """Replace path with content so readers see either the old or new file.

    The temp file is created beside the target, so os.replace never crosses
    filesystems. An existing file's permission bits are kept.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644

    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", delete=False, dir=path.parent, prefix=f".{path.name}."
    ) as tmp:
        tmp.write(content)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)

    os.chmod(tmp_path, mode)
    os.replace(tmp_path, path)
