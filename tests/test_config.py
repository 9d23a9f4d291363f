"""Tests for HealConfig and the context-local configuration."""

import dataclasses
import threading

import pytest

from remiendo import (
    HealConfig,
    get_heal_config,
    handler,
    heal_config_context,
    reset_heal_config,
    set_heal_config,
)


class TestHealConfig:
    """Construction and validation."""

    def test_defaults(self) -> None:
        config = HealConfig()
        assert config.bold
        assert config.links
        assert config.block_math
        assert config.link_mode == "protocol"
        assert config.handlers == ()
        assert not config.strict_handlers

    def test_frozen(self) -> None:
        config = HealConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bold = False  # type: ignore[misc]

    def test_invalid_link_mode(self) -> None:
        with pytest.raises(ValueError, match="link_mode"):
            HealConfig(link_mode="remove")  # type: ignore[arg-type]

    def test_handlers_coerced_to_tuple(self) -> None:
        extra = handler("extra", str.strip)
        config = HealConfig(handlers=[extra])  # type: ignore[arg-type]
        assert config.handlers == (extra,)

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = HealConfig.from_dict({"bold": False, "unknown_key": 1})
        assert config.bold is False
        assert config.italic is True

    def test_from_dict_link_mode(self) -> None:
        assert HealConfig.from_dict({"link_mode": "text-only"}).link_mode == "text-only"


class TestContextConfig:
    """ContextVar-backed defaults."""

    def test_default(self) -> None:
        assert get_heal_config() == HealConfig()

    def test_set_and_reset(self) -> None:
        set_heal_config(HealConfig(bold=False))
        try:
            assert get_heal_config().bold is False
        finally:
            reset_heal_config()
        assert get_heal_config().bold is True

    def test_context_manager_restores(self) -> None:
        outer = get_heal_config()
        with heal_config_context(HealConfig(italic=False)) as config:
            assert get_heal_config() is config
        assert get_heal_config() is outer

    def test_context_manager_restores_on_error(self) -> None:
        outer = get_heal_config()
        with pytest.raises(RuntimeError), heal_config_context(HealConfig(italic=False)):
            raise RuntimeError("boom")
        assert get_heal_config() is outer

    def test_thread_isolation(self) -> None:
        seen: list[bool] = []

        def worker() -> None:
            seen.append(get_heal_config().bold)

        with heal_config_context(HealConfig(bold=False)):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()
        assert seen == [True]
