"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_document() -> str:
    """Generate a large markdown document (~60KB)."""
    sections = []
    for i in range(100):
        sections.append(f"""
# Section {i}

This is paragraph {i} with **bold**, *italic*, and `code`.

- List item 1
- List item > {i}
- List item 3

```python
def function_{i}():
    return {i}
```

| Column A | Column B |
|----------|----------|
| Cell {i} | Data {i} |

$$
x_{i} = {i}^2
$$

Here is a [link](https://example.com/{i}) and ~~struck~~ text.
""")
    return "\n".join(sections)


@pytest.fixture
def stream_ticks(large_document: str) -> list[str]:
    """Growing prefixes of the large document, one per 64-character chunk."""
    return [large_document[:end] for end in range(64, len(large_document), 64)]


@pytest.fixture
def incomplete_blocks() -> list[str]:
    """Blocks cut off mid-construct, as seen at the tail of a stream."""
    return [
        "Text with **bold",
        "Some *italic and `code",
        "See [the documentation](https://docs.exa",
        "![diagram of the pipe",
        "$$\n\\begin{pmatrix}\nx\n\\end{pmatrix}\n=",
        "- > 25: rich ~~strike",
        "```python\ndef f():\n    return `x",
        "__init__ and _private_name and _emph",
    ]
