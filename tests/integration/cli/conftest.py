from pathlib import Path

import pytest


@pytest.fixture
def lesson_dir(tmp_path: Path) -> Path:
    """Three near-duplicate lesson readmes, one with a reworded paragraph."""
    docs = tmp_path / "lessons"
    docs.mkdir()
    base = """# Introduction to Scope

Scope is a well-defined set of rules for storing variables.

```js
var a = 2;
```
"""
    (docs / "intro-1.md").write_text(base, encoding="utf-8")
    (docs / "intro-2.md").write_text(base, encoding="utf-8")
    (docs / "intro-3.md").write_text(
        base.replace("a well-defined set", "the set"), encoding="utf-8"
    )
    return docs


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
