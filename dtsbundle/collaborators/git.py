"""Retrieval of upstream release sources through git."""

from __future__ import annotations

import re
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Mapping, Tuple

from ..logging import get_logger
from .runner import CommandRunner, default_runner

_TAG_REF = re.compile(r"^[0-9a-f]{7,40}\s+refs/tags/(?P<tag>[^\s^]+)(?P<peeled>\^\{\})?$")
_VERSION_PART = re.compile(r"\d+|[A-Za-z]+")


class FetchError(RuntimeError):
    """Raised when a git command needed for retrieval fails."""


class MetadataError(RuntimeError):
    """Raised when upstream metadata cannot be interpreted."""


@dataclass
class FetchOutcome:
    """Files copied from an upstream release."""

    tag: str
    copied: List[Path]
    missing: List[str]


def _version_key(tag: str) -> Tuple[Tuple[int, object], ...]:
    key = []
    for part in _VERSION_PART.findall(tag):
        if part.isdigit():
            key.append((1, int(part)))
        else:
            key.append((0, part))
    return tuple(key)


def parse_release_tags(listing: str) -> List[str]:
    """Return tag names from `git ls-remote --tags` output, peeled refs folded."""
    tags: List[str] = []
    for line in listing.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        match = _TAG_REF.match(stripped)
        if not match:
            raise MetadataError(f"Unrecognised ls-remote line: {stripped!r}")
        tag = match.group("tag")
        if tag not in tags:
            tags.append(tag)
    return tags


class SourceFetcher:
    """Finds the latest release tag and copies files out of a shallow clone."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or default_runner
        self.logger = get_logger("collaborators.git")

    def latest_release_tag(self, repository: str) -> str:
        listing = self._run(["git", "ls-remote", "--tags", repository], capture_output=True)
        tags = [tag for tag in parse_release_tags(listing) if re.search(r"\d", tag)]
        if not tags:
            raise MetadataError(f"No release tags found for {repository}")
        return max(tags, key=_version_key)

    @contextmanager
    def checkout(self, repository: str, tag: str) -> Iterator[Path]:
        """Shallow-clone a tag into a temporary directory removed on exit."""
        workdir = Path(tempfile.mkdtemp(prefix="dtsbundle-"))
        clone = workdir / "source"
        try:
            self._run(
                ["git", "clone", "--depth", "1", "--branch", tag, repository, str(clone)],
                cwd=workdir,
            )
            yield clone
        finally:
            shutil.rmtree(workdir, ignore_errors=True)

    def fetch_release(
        self,
        repository: str,
        files: Mapping[str, str],
        destination: Path,
    ) -> FetchOutcome:
        tag = self.latest_release_tag(repository)
        self.logger.info("Using latest release: %s", tag)
        copied: List[Path] = []
        missing: List[str] = []
        with self.checkout(repository, tag) as clone:
            destination.mkdir(parents=True, exist_ok=True)
            for source, target_name in files.items():
                source_path = clone / source
                if not source_path.is_file():
                    self.logger.warning("%s not found in release %s", source, tag)
                    missing.append(source)
                    continue
                target = destination / target_name
                shutil.copyfile(source_path, target)
                self.logger.info("Copied %s to %s", source, target)
                copied.append(target)
        return FetchOutcome(tag=tag, copied=copied, missing=missing)

    def _run(self, args: List[str], *, cwd: Path | None = None, capture_output: bool = False) -> str:
        try:
            return self._runner(args, cwd=cwd, capture_output=capture_output)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise FetchError(f"{' '.join(args[:2])} failed: {exc}") from exc


__all__ = ["FetchError", "FetchOutcome", "MetadataError", "SourceFetcher", "parse_release_tags"]
