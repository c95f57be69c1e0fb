from __future__ import annotations

import json
import logging
import os
import stat
from typing import Callable, Iterator, Mapping

from assetprune.aliases import EMPTY_ALIASES
from assetprune.models import CandidateFile, ScanConfig, ScanResult

logger = logging.getLogger(__name__)

STATUS_USED = "used"
STATUS_UNUSED = "unused"
STATUS_IGNORED = "ignored"

ProgressCallback = Callable[[CandidateFile, str], None]


def analyze(
    root: str,
    config: ScanConfig | None = None,
    aliases: Mapping[str, str] | None = None,
    indexed: bool = False,
    progress: ProgressCallback | None = None,
) -> ScanResult:
    detector = UnusedFileDetector(
        config=config or ScanConfig(),
        aliases=aliases if aliases is not None else EMPTY_ALIASES,
        indexed=indexed,
        progress=progress,
    )
    return detector.scan(root)


def _is_dir(path: str) -> bool:
    # os.stat follows symlinks and raises on dangling ones.
    return stat.S_ISDIR(os.stat(path).st_mode)


class TreeCollector:
    """Depth-first walk producing every file with a target extension.

    Directories whose joined path contains an ignored substring are pruned
    before they are listed.
    """

    def __init__(self, config: ScanConfig) -> None:
        self.config = config

    def collect(self, root: str) -> list[CandidateFile]:
        results: list[CandidateFile] = []
        for entry in os.listdir(root):
            path = os.path.join(root, entry)
            if _is_dir(path):
                if any(ignored in path for ignored in self.config.ignore_dirs):
                    logger.debug("Pruning %s", path)
                    continue
                results.extend(self.collect(path))
                continue
            if os.path.splitext(path)[1] in self.config.target_extensions:
                results.append(CandidateFile.from_path(path))
        return results


def _iter_source_files(root: str, suffixes: tuple[str, ...]) -> Iterator[str]:
    for entry in os.listdir(root):
        path = os.path.join(root, entry)
        if _is_dir(path):
            yield from _iter_source_files(path, suffixes)
        elif path.endswith(suffixes):
            yield path


def _substitute_aliases(content: str, aliases: Mapping[str, str]) -> str:
    # Plain substring replacement; "$libFoo" is rewritten too.
    for alias, replacement in aliases.items():
        content = content.replace(alias, replacement)
    return content


def _mentions(content: str, filename: str) -> bool:
    return filename in content or f"/{filename}" in content


def _read_source(path: str, aliases: Mapping[str, str]) -> str:
    with open(path, encoding="utf-8", errors="replace") as handle:
        return _substitute_aliases(handle.read(), aliases)


class UsageScanner:
    """Re-walks the search root for every query and stops at the first hit."""

    def __init__(self, config: ScanConfig, aliases: Mapping[str, str]) -> None:
        self.config = config
        self.aliases = aliases

    def is_referenced(self, filename: str, search_root: str) -> bool:
        for path in _iter_source_files(search_root, self.config.source_suffixes):
            if _mentions(_read_source(path, self.aliases), filename):
                logger.debug("%s referenced from %s", filename, path)
                return True
        return False


class ContentIndex:
    """Alias-substituted text of every source file, read once per root.

    One index serves a single scan; the detector builds a fresh one each run.
    """

    def __init__(self, config: ScanConfig, aliases: Mapping[str, str]) -> None:
        self.config = config
        self.aliases = aliases
        self._contents: dict[str, list[tuple[str, str]]] = {}

    def _load(self, search_root: str) -> list[tuple[str, str]]:
        if search_root not in self._contents:
            self._contents[search_root] = [
                (path, _read_source(path, self.aliases))
                for path in _iter_source_files(search_root, self.config.source_suffixes)
            ]
            logger.debug(
                "Indexed %d source files under %s",
                len(self._contents[search_root]),
                search_root,
            )
        return self._contents[search_root]

    def is_referenced(self, filename: str, search_root: str) -> bool:
        for path, content in self._load(search_root):
            if _mentions(content, filename):
                logger.debug("%s referenced from %s", filename, path)
                return True
        return False


class UnusedFileDetector:
    def __init__(
        self,
        config: ScanConfig,
        aliases: Mapping[str, str],
        indexed: bool = False,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.config = config
        self.aliases = aliases
        self.indexed = indexed
        self.collector = TreeCollector(config)
        self.progress = progress

    def is_ignored(self, candidate: CandidateFile) -> bool:
        if candidate.extension != self.config.component_extension:
            return False
        name = candidate.name
        return any(name.startswith(prefix) for prefix in self.config.ignore_prefixes) or any(
            token in name for token in self.config.ignore_substrings
        )

    def scan(self, root: str) -> ScanResult:
        scanner = self._make_scanner()
        result = ScanResult(root=root)
        for candidate in self.collector.collect(root):
            if self.is_ignored(candidate):
                result.ignored.append(candidate)
                self._report(candidate, STATUS_IGNORED)
                continue
            if scanner.is_referenced(candidate.name, root):
                result.used.append(candidate)
                self._report(candidate, STATUS_USED)
            else:
                result.unused.append(candidate)
                self._report(candidate, STATUS_UNUSED)
        logger.debug(
            "Scanned %d candidates under %s: %d unused",
            result.candidate_count,
            root,
            len(result.unused),
        )
        return result

    def _make_scanner(self) -> UsageScanner | ContentIndex:
        if self.indexed:
            return ContentIndex(self.config, self.aliases)
        return UsageScanner(self.config, self.aliases)

    def run(self, root: str) -> list[CandidateFile]:
        return self.scan(root).unused

    def _report(self, candidate: CandidateFile, status: str) -> None:
        if self.progress is not None:
            self.progress(candidate, status)


def render_listing(result: ScanResult) -> str:
    if not result.unused:
        return "No unused files found.\n"
    lines = ["Unused files found:"]
    lines.extend(candidate.path for candidate in result.unused)
    return "\n".join(lines) + "\n"


def render_json(result: ScanResult) -> str:
    payload = {
        "root": result.root,
        "unused": [candidate.path for candidate in result.unused],
        "ignored": [candidate.path for candidate in result.ignored],
        "used_count": len(result.used),
        "candidate_count": result.candidate_count,
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"
