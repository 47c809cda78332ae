"""
conftest.py
-----------
Shared pytest fixtures for Folio tests.

Provides fixtures for:
- Site configurations writing into temporary directories
- Sample post sources (valid, invalid, edge cases)
- A content directory factory
"""
import pytest
from pathlib import Path
from typing import Callable, Dict

from folio.core.config import SiteConfig


# ----- Path Fixtures -----

@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Empty content directory."""
    directory = tmp_path / "_posts"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output directory (not created)."""
    return tmp_path / "_site"


@pytest.fixture
def config(content_dir: Path, output_dir: Path) -> SiteConfig:
    """Site configuration pointing at the temporary directories."""
    return SiteConfig(
        title="Test Blog",
        content_dir=content_dir,
        output_dir=output_dir,
    )


@pytest.fixture
def write_sources(content_dir: Path) -> Callable[[Dict[str, str]], Path]:
    """Factory writing {filename: text} into the content directory."""
    def _write(sources: Dict[str, str]) -> Path:
        for name, text in sources.items():
            (content_dir / name).write_text(text, encoding="utf-8")
        return content_dir
    return _write


# ----- Sample Source Fixtures -----

@pytest.fixture
def hello_source() -> str:
    """Minimal valid post with tags and a level-1 heading."""
    return """---
title: Hello
date: 2020-01-01
tags: [a, b]
---
# Hi
"""


@pytest.fixture
def missing_date_source() -> str:
    """Post without the required date field."""
    return """---
title: No date here
tags: [a]
---
Body text.
"""


@pytest.fixture
def specflow_source() -> str:
    """Longer post with code, a table and extra front matter."""
    return """---
layout: post
title: "SpecFlow: sharing steps between features"
date: 2021-03-04 09:30:00 +0100
tags: [SpecFlow, testing, CSharp]
author: Jane Doe
comments: true
---
Step definitions in [SpecFlow](https://specflow.org) are *global*.

## Binding classes

```csharp
[Binding]
public class Steps
{
    // ---
    # not a heading
}
```

| Keyword | Meaning |
|---------|---------|
| Given   | Context |
| When    | Action  |

> Keep steps small.
"""


@pytest.fixture
def page_source() -> str:
    """Standalone page using the page layout."""
    return """---
layout: page
title: About
date: 2019-06-01
slug: about
---
About this blog.
"""
