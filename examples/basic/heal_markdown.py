"""Heal a half-streamed Markdown block - zero config."""

from remiendo import heal

for chunk in [
    "Text with **bold",
    "See [the docs](https://exa",
    "Run `pip install",
    "- > 25: rich",
    "$$\nx = 1",
]:
    print(repr(chunk), "->", repr(heal(chunk)))
