from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Iterable


@dataclass(frozen=True)
class ScanConfig:
    target_extensions: frozenset[str] = frozenset({".svelte", ".png", ".jpg", ".jpeg"})
    ignore_dirs: tuple[str, ...] = ("__tests__",)
    ignore_prefixes: tuple[str, ...] = ("+",)
    ignore_substrings: tuple[str, ...] = (".story.", ".test.")
    component_extension: str = ".svelte"
    source_suffixes: tuple[str, ...] = (".ts", ".svelte")

    def with_overrides(
        self,
        ignore_dirs: Iterable[str] = (),
        ignore_prefixes: Iterable[str] = (),
        ignore_substrings: Iterable[str] = (),
    ) -> ScanConfig:
        return replace(
            self,
            ignore_dirs=self.ignore_dirs + tuple(ignore_dirs),
            ignore_prefixes=self.ignore_prefixes + tuple(ignore_prefixes),
            ignore_substrings=self.ignore_substrings + tuple(ignore_substrings),
        )


@dataclass(frozen=True)
class CandidateFile:
    path: str
    name: str
    extension: str

    @classmethod
    def from_path(cls, path: str) -> CandidateFile:
        name = os.path.basename(path)
        return cls(path=path, name=name, extension=os.path.splitext(name)[1])


@dataclass(frozen=True)
class ScanResult:
    root: str
    unused: list[CandidateFile] = field(default_factory=list)
    used: list[CandidateFile] = field(default_factory=list)
    ignored: list[CandidateFile] = field(default_factory=list)

    @property
    def candidate_count(self) -> int:
        return len(self.unused) + len(self.used) + len(self.ignored)
