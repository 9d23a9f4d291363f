"""Close a custom <<<JOKE>>> marker alongside the built-in handlers."""

from remiendo import HealConfig, handler, heal


def close_joke(text: str) -> str:
    if text.count("<<<JOKE>>>") > text.count("<<</JOKE>>>"):
        return text + "<<</JOKE>>>"
    return text


config = HealConfig(handlers=(handler("joke", close_joke, priority=80),))

print(heal("<<<JOKE>>>Why did the **chicken", config))
# <<<JOKE>>>Why did the **chicken**<<</JOKE>>>
