"""
Dependency Resolvers

A resolver turns one entity's metadata into the raw list of entity IDs it
depends on. Resolvers are plain callables passed to every build; nothing
here keeps process-wide state.

Provided:
- default_resolver: reads ``extends``, ``mixins`` and ``dependencies``
- field_resolver: builds a resolver over arbitrary field names
- template_id: composite ``category/device/name`` key for template records
"""

from typing import Any, Callable, Iterable, List, Optional

Resolver = Callable[[Any], Optional[Iterable[str]]]

DEFAULT_FIELDS = ('extends', 'mixins', 'dependencies')


def _get_field(metadata: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute-style object"""
    if metadata is None:
        return None
    if isinstance(metadata, dict):
        return metadata.get(name)
    return getattr(metadata, name, None)


def _collect(value: Any, into: List[str]) -> None:
    if value is None:
        return
    if isinstance(value, str):
        if value:
            into.append(value)
        return
    if isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            if isinstance(item, str) and item:
                into.append(item)


def field_resolver(*fields: str) -> Resolver:
    """
    Create a resolver that gathers IDs from the given metadata fields.

    Each field may hold a single ID string or a list of IDs; anything else
    is ignored.

    Example:
        >>> resolve = field_resolver('parent', 'uses')
        >>> resolve({'parent': 'base', 'uses': ['a', 'b']})
        ['base', 'a', 'b']
    """
    names = fields or DEFAULT_FIELDS

    def resolve(metadata: Any) -> List[str]:
        dependencies: List[str] = []
        for name in names:
            _collect(_get_field(metadata, name), dependencies)
        return dependencies

    resolve.__name__ = f"field_resolver({', '.join(names)})"
    return resolve


def default_resolver(metadata: Any) -> List[str]:
    """Resolve ``extends`` (single ID), ``mixins`` and ``dependencies`` (lists)"""
    dependencies: List[str] = []
    for name in DEFAULT_FIELDS:
        _collect(_get_field(metadata, name), dependencies)
    return dependencies


def template_id(metadata: Any) -> str:
    """
    Composite key for template metadata: ``category/device/name``.

    Records carrying an explicit ``id`` use it as-is.
    """
    explicit = _get_field(metadata, 'id')
    if explicit:
        return str(explicit)
    parts = [_get_field(metadata, key) for key in ('category', 'device', 'name')]
    if not parts[2]:
        raise ValueError(f"Cannot derive an ID from metadata without a name: {metadata!r}")
    return '/'.join(str(part) for part in parts if part)
