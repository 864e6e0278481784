"""Column binding resolution.

A binding maps a column index (or a column title) to the field descriptor
exported there. Bindings are a pure function of a class's declarations, so
each one is computed once per class and cached.
"""

from __future__ import annotations

from types import MappingProxyType

import structlog

from sheetbind.config.models import CacheConfig, SheetbindConfig
from sheetbind.core.errors import ConfigurationError
from sheetbind.reflect._internal.cache import TypeCache
from sheetbind.reflect._internal.discovery import discover, is_dynamic
from sheetbind.reflect.models import FieldContainer, FieldDescriptor, IndexBinding, TitleBinding

log = structlog.get_logger(__name__)

_EMPTY_INDEX: IndexBinding = MappingProxyType({})
_EMPTY_TITLE: TitleBinding = MappingProxyType({})


class ColumnResolver:
    """Resolves and caches index and title bindings per record class.

    Both views are built from one cached discovery per class, so they hand
    out the same descriptor objects. The bindings themselves are cached
    independently: a class whose title binding is invalid can still be
    exported by position.
    """

    def __init__(self, config: CacheConfig | None = None) -> None:
        config = config or CacheConfig()
        self.cache_enabled = config.enabled
        self.field_cache: TypeCache[FieldContainer] = TypeCache(config.retention)
        self.index_cache: TypeCache[IndexBinding] = TypeCache(config.retention)
        self.title_cache: TypeCache[TitleBinding] = TypeCache(config.retention)

    def container(self, cls: type) -> FieldContainer:
        """Discovered fields of ``cls``, shared by both views and select_fields."""
        if not self.cache_enabled or is_dynamic(cls):
            return discover(cls)
        if (cached := self.field_cache.get(cls)) is not None:
            return cached
        return self.field_cache.setdefault(cls, discover(cls))

    def index_binding(self, cls: type) -> IndexBinding:
        """Map column index -> descriptor for ``cls``.

        Without any column metadata every field is exported in discovery
        order at indices 0..N-1. Otherwise only fields with a non-negative
        index are bound.

        Raises:
            ConfigurationError: Two fields declare the same index.
        """
        if is_dynamic(cls):
            return _EMPTY_INDEX
        if self.cache_enabled and (cached := self.index_cache.get(cls)) is not None:
            return cached

        owner = cls.__qualname__
        container = self.container(cls)
        columns = [(d, d.column) for d in container.fields() if d.column is not None]

        binding: dict[int, FieldDescriptor] = {}
        if not columns:
            binding = dict(enumerate(container.fields()))
            log.debug("index_binding_positional", type=owner, columns=len(binding))
        else:
            for descriptor, column in columns:
                if column.index < 0:
                    continue
                if (taken := binding.get(column.index)) is not None:
                    log.warning("duplicate_column_index", type=owner, index=column.index)
                    raise ConfigurationError.duplicate_index(
                        owner, column.index, taken.name, descriptor.name
                    )
                binding[column.index] = descriptor

        result: IndexBinding = MappingProxyType(binding)
        if self.cache_enabled:
            self.index_cache.put(cls, result)
        log.debug("index_binding_resolved", type=owner, indices=sorted(binding))
        return result

    def title_binding(self, cls: type) -> TitleBinding:
        """Map column title -> descriptor for ``cls``.

        Only fields with column metadata and a non-empty title are bound.

        Raises:
            ConfigurationError: No field has column metadata, or two fields
                declare the same title.
        """
        if is_dynamic(cls):
            return _EMPTY_TITLE
        if self.cache_enabled and (cached := self.title_cache.get(cls)) is not None:
            return cached

        owner = cls.__qualname__
        columns = [(d, d.column) for d in self.container(cls).fields() if d.column is not None]
        if not columns:
            log.warning("no_column_metadata", type=owner)
            raise ConfigurationError.no_column_metadata(owner)

        binding: dict[str, FieldDescriptor] = {}
        for descriptor, column in columns:
            if not column.title:
                continue
            if (taken := binding.get(column.title)) is not None:
                log.warning("duplicate_column_title", type=owner, title=column.title)
                raise ConfigurationError.duplicate_title(owner, column.title, taken.name, descriptor.name)
            binding[column.title] = descriptor

        result: TitleBinding = MappingProxyType(binding)
        if self.cache_enabled:
            self.title_cache.put(cls, result)
        log.debug("title_binding_resolved", type=owner, titles=list(binding))
        return result

    def evict(self, cls: type) -> None:
        """Drop everything cached for ``cls``."""
        self.field_cache.discard(cls)
        self.index_cache.discard(cls)
        self.title_cache.discard(cls)

    def clear(self) -> None:
        self.field_cache.clear()
        self.index_cache.clear()
        self.title_cache.clear()


_default_resolver = ColumnResolver()


def get_resolver() -> ColumnResolver:
    return _default_resolver


def configure(config: SheetbindConfig) -> ColumnResolver:
    """Replace the process-wide resolver, dropping everything it cached."""
    global _default_resolver  # noqa: PLW0603
    _default_resolver = ColumnResolver(config.cache)
    log.debug(
        "resolver_configured",
        cache_enabled=config.cache.enabled,
        retention=config.cache.retention,
    )
    return _default_resolver


def resolve_index_binding(cls: type) -> IndexBinding:
    return _default_resolver.index_binding(cls)


def resolve_title_binding(cls: type) -> TitleBinding:
    return _default_resolver.title_binding(cls)


def clear_caches() -> None:
    _default_resolver.clear()
