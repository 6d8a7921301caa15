"""Tests for the namespace tree and logger configuration."""

from collections.abc import Callable

import pytest
from pydantic import ValidationError

from nestlog import get_logger, root_logger
from nestlog.context import LoggingContext
from nestlog.errors import InvalidNamespaceError
from nestlog.logger import Logger, LoggerConfig


def count_nodes(logger: Logger) -> int:
    return 1 + sum(count_nodes(child) for child in logger.children.values())


# =============================================================================
# Resolution & Memoization
# =============================================================================


class TestGetLogger:
    """Test absolute, relative and direct resolution."""

    def test_direct_child_namespace(self) -> None:
        """A single segment creates a direct child of the root."""
        logger = get_logger("test")
        assert logger.namespace == "*:test"

    def test_multi_segment_namespace(self) -> None:
        """Colon paths create nested loggers."""
        logger = get_logger("test:namespace")
        assert logger.namespace == "*:test:namespace"

    def test_same_instance(self) -> None:
        """Repeated lookups return the identical instance."""
        logger = get_logger("test")
        assert get_logger("test") is logger
        assert get_logger("a:b:c") is get_logger("a:b:c")

    def test_root_sentinel(self, context: LoggingContext) -> None:
        """'*' alone is the root logger."""
        assert get_logger("*") is context.root
        assert root_logger() is context.root
        assert context.root.namespace == "*"
        assert get_logger("a").get_logger("*") is context.root

    def test_absolute_equals_relative_walk(self, context: LoggingContext) -> None:
        """'*:a:b' from any node equals root -> a -> b."""
        deep = get_logger("x:y:z")
        expected = context.root.get_logger("a").get_logger("b")
        assert deep.get_logger("*:a:b") is expected
        assert context.root.get_logger("*:a:b") is expected

    def test_relative_multi_segment_walks_from_current(self) -> None:
        """Colon paths on a non-root logger walk from that logger."""
        app = get_logger("app")
        nested = app.get_logger("db:pool")
        assert nested.namespace == "*:app:db:pool"
        assert app.children["db"].children["pool"] is nested

    def test_relative_lookup_never_reaches_ancestors(self) -> None:
        """A child asking for 'a' gets a new descendant, not the root's 'a'."""
        top_a = get_logger("a")
        child = get_logger("child")
        nested_a = child.get_logger("a")
        assert nested_a is not top_a
        assert nested_a.namespace == "*:child:a"

    def test_same_leaf_under_different_parents(self) -> None:
        """Memoization is per parent."""
        first = get_logger("one:leaf")
        second = get_logger("two:leaf")
        assert first is not second
        assert first.namespace != second.namespace

    def test_intermediate_nodes_are_created_once(self, context: LoggingContext) -> None:
        """'a:b:c' on a fresh tree creates exactly a, a:b and a:b:c."""
        assert count_nodes(context.root) == 1
        leaf = get_logger("a:b:c")

        assert count_nodes(context.root) == 4
        assert list(context.root.children) == ["a"]
        a = context.root.children["a"]
        assert list(a.children) == ["b"]
        assert get_logger("a") is a
        assert a.get_logger("b:c") is leaf
        assert count_nodes(context.root) == 4

    @pytest.mark.parametrize("path", ["", "a::b", "a:", ":a", "*:", "*a"])
    def test_invalid_paths(self, path: str) -> None:
        """Empty segments and malformed absolute paths are rejected."""
        with pytest.raises(InvalidNamespaceError):
            get_logger(path)

    def test_children_is_read_only(self) -> None:
        """The children view cannot be mutated."""
        parent = get_logger("ro")
        with pytest.raises(TypeError):
            parent.children["x"] = parent  # type: ignore[index]


# =============================================================================
# Create-time Configuration
# =============================================================================


class TestConfig:
    """Test config application and first-writer-wins."""

    def test_defaults(self) -> None:
        logger = get_logger("test")
        assert logger.level == "LOG"
        assert logger.min_level == "INFO"
        assert logger.enabled is True

    def test_config_applied_on_creation(self) -> None:
        """level/minLevel/enabled are applied, case-normalized."""
        logger = get_logger("test:next", {"level": "info", "minLevel": "warn", "enabled": False})
        assert logger.namespace == "*:test:next"
        assert logger.level == "INFO"
        assert logger.min_level == "WARN"
        assert logger.enabled is False

    def test_config_model_accepted(self) -> None:
        logger = get_logger("model", LoggerConfig(min_level="debug"))
        assert logger.min_level == "DEBUG"

    def test_config_not_reapplied(self) -> None:
        """A second lookup with a different config does not mutate the logger."""
        logger = get_logger("test:next", {"level": "info"})
        again = get_logger("test:next", {"level": "error", "minLevel": "fatal", "enabled": False})
        assert again is logger
        assert logger.level == "INFO"
        assert logger.min_level == "INFO"
        assert logger.enabled is True

    def test_config_only_applies_to_returned_node(self) -> None:
        """Intermediate nodes created on the way get defaults."""
        leaf = get_logger("p:q", {"minLevel": "error"})
        assert leaf.min_level == "ERROR"
        assert get_logger("p").min_level == "INFO"

    def test_unknown_config_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            get_logger("bad", {"minlevel": "debug"})


# =============================================================================
# Mutable Properties
# =============================================================================


class TestProperties:
    """Test level/min_level/enabled setters."""

    def test_set_level(self) -> None:
        logger = get_logger("test")
        logger.level = "debug"
        assert logger.level == "DEBUG"

    def test_set_min_level(self) -> None:
        logger = get_logger("test")
        logger.min_level = "debug"
        assert logger.min_level == "DEBUG"
        assert logger.min_level_rank == logger.registry.get("DEBUG").rank

    def test_unknown_names_fall_back_to_default(self) -> None:
        """Unknown names resolve to LOG instead of raising."""
        logger = get_logger("test")
        logger.level = "bogus"
        logger.min_level = "bogus"
        assert logger.level == "LOG"
        assert logger.min_level == "LOG"
        assert logger.min_level_rank == logger.registry.get("LOG").rank

    def test_set_enabled(self) -> None:
        logger = get_logger("test")
        logger.enabled = False
        assert logger.enabled is False
        logger.enabled = True
        assert logger.enabled is True

    def test_namespace_is_read_only(self) -> None:
        logger = get_logger("test")
        with pytest.raises(AttributeError):
            logger.namespace = "*:other"  # type: ignore[misc]

    def test_get_handlers(self, context: LoggingContext) -> None:
        """Logger exposes a copy of the registry's handlers."""
        handlers = get_logger("test").get_handlers()
        assert set(handlers) == {"NONE", "TRACE", "DEBUG", "LOG", "INFO", "WARN", "ERROR", "FATAL"}
        handlers.clear()
        assert len(context.registry) == 8

    def test_min_level_rank_tracks_renumbering(self, context: LoggingContext) -> None:
        """Inserting a level below the threshold keeps the gate aligned."""
        logger = get_logger("test")
        context.define_level("VERBOSE", "DEBUG", 1, lambda *args: None)
        assert logger.min_level_rank == context.registry.get("INFO").rank
        assert context.registry.get("LOG").rank < logger.min_level_rank

    def test_repr(self) -> None:
        assert repr(get_logger("r")) == "<Logger *:r level=LOG min_level=INFO enabled=True>"


# =============================================================================
# Namespace Overrides
# =============================================================================


class TestNamespaceOverrides:
    """Test overrides loaded from the store."""

    def test_override_beats_constructor_config(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        """Namespace entries win over the config argument."""
        make_context({"*:app": {"minLevel": "error", "enabled": False}})
        logger = get_logger("app", {"minLevel": "debug", "enabled": True})
        assert logger.min_level == "ERROR"
        assert logger.enabled is False

    def test_global_override_beats_constructor_config(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        make_context({"*": {"minLevel": "warn"}})
        assert get_logger("anything", {"minLevel": "debug"}).min_level == "WARN"

    def test_constructor_config_beats_default(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        make_context({"*:other": {"minLevel": "warn"}})
        assert get_logger("app", {"minLevel": "debug"}).min_level == "DEBUG"

    def test_override_does_not_touch_level(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        """Overrides only cover min_level and enabled."""
        make_context({"*:app": {"minLevel": "error"}})
        assert get_logger("app", {"level": "warn"}).level == "WARN"

    def test_forced_disable_vetoes_enabling(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        """Enabling a namespace pinned to disabled is silently ignored."""
        make_context({"app": {"enabled": False}})
        logger = get_logger("app")
        logger.enabled = True
        assert logger.enabled is False

    def test_enabled_true_override_does_not_veto(
        self, make_context: Callable[..., LoggingContext]
    ) -> None:
        make_context({"*:app": {"enabled": True}})
        logger = get_logger("app", {"enabled": False})
        assert logger.enabled is True
        logger.enabled = False
        assert logger.enabled is False

    def test_root_uses_global_entry(self, make_context: Callable[..., LoggingContext]) -> None:
        context = make_context({"*": {"enabled": False}})
        assert context.root.enabled is False
        assert get_logger("any").enabled is False
