"""Simulate a token stream and print what a renderer would see each tick."""

from remiendo import LRUBlockCache, stabilize

response = """# Installing

First run `pip install remiendo`, then **import it**:

```python
from remiendo import stabilize
snap = stabilize(buffer)
```

See [the guide](https://example.com/guide) for $$\\sum_i x_i$$ details.
"""

cache = LRUBlockCache()
for end in range(8, len(response) + 8, 8):
    buffer = response[:end]
    snap = stabilize(buffer, streaming=end < len(response), cache=cache)
    tail = snap.healed[-1] if snap.healed else ""
    marker = " (typing...)" if snap.last_incomplete else ""
    print(f"{len(snap.blocks):2d} blocks | tail: {tail!r}{marker}")

print(f"\ncache entries: {len(cache)}")
