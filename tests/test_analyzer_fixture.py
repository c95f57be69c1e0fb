from __future__ import annotations

import os
from pathlib import Path

from assetprune.aliases import resolve_aliases
from assetprune.analyzer import analyze

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "sample_app"


def test_fixture_flags_orphans() -> None:
    aliases = resolve_aliases(FIXTURE_ROOT / "tsconfig.json")
    src = str(FIXTURE_ROOT / "src")

    result = analyze(src, aliases=aliases)

    assert {os.path.relpath(c.path, src) for c in result.unused} == {
        os.path.join("components", "Orphan.svelte"),
        os.path.join("lib", "assets", "banner.jpg"),
    }
    assert {c.name for c in result.used} == {"Card.svelte", "Header.svelte", "logo.png"}
    assert {c.name for c in result.ignored} == {"+page.svelte", "Card.story.svelte"}
    assert all("__tests__" not in c.path for c in result.unused + result.used)
