"""
Column builders.

Every factory returns a :class:`ColBuilder` pre-populated with defaults for its
data kind. Builders are immutable: each chained call returns a new builder,
so partially configured builders can be shared and reused freely.

    from table_schema import col

    col.number().label("Latency").display("number", unit="ms").filterable("slider", min=0, max=5000)
    col.enum(LEVELS).label("Level").default_open()
    col.record().label("Headers").hidden().sheet(class_name="flex-col")

Each builder carries the set of filter types legal for its kind:

    string     input
    number     input, slider, checkbox
    boolean    checkbox
    timestamp  timerange
    enum       checkbox
    array      checkbox
    record     (none)

``filterable()`` with a type outside that set raises
:class:`FilterNotAllowedError` immediately; after ``not_filterable()`` the set
is empty.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, Optional, Sequence, Union

from table_schema.errors import FilterNotAllowedError, InvalidDisplayError
from table_schema.models import (
    CellRenderer,
    ColConfig,
    ColKind,
    DatePreset,
    DisplayConfig,
    DisplayType,
    FilterConfig,
    FilterType,
    Number,
    Option,
    OptionRenderer,
    RowCondition,
    RowRenderer,
    SheetConfig,
)

ALLOWED_FILTERS: Dict[ColKind, FrozenSet[FilterType]] = {
    ColKind.string: frozenset({FilterType.input}),
    ColKind.number: frozenset({FilterType.input, FilterType.slider, FilterType.checkbox}),
    ColKind.boolean: frozenset({FilterType.checkbox}),
    ColKind.timestamp: frozenset({FilterType.timerange}),
    ColKind.enum: frozenset({FilterType.checkbox}),
    ColKind.array: frozenset({FilterType.checkbox}),
    ColKind.record: frozenset(),
}

# Parameters each filter type accepts in filterable(type, ...)
_FILTER_PARAMS: Dict[FilterType, FrozenSet[str]] = {
    FilterType.input: frozenset(),
    FilterType.timerange: frozenset({"presets"}),
    FilterType.checkbox: frozenset({"options", "component"}),
    FilterType.slider: frozenset({"min", "max"}),
}

BOOLEAN_OPTIONS = (Option(label="Yes", value=True), Option(label="No", value=False))

OptionLike = Union[Option, Dict[str, Any]]
PresetLike = Union[DatePreset, Dict[str, Any]]


def _sorted_names(types: Iterable[FilterType]) -> str:
    return ", ".join(sorted(t.value for t in types))


class ColBuilder:
    """Immutable, chainable column builder."""

    __slots__ = ("_config", "_allowed")

    def __init__(self, config: ColConfig, allowed: Optional[Iterable[FilterType]] = None):
        self._config = config
        if allowed is None:
            allowed = ALLOWED_FILTERS[config.kind] if config.filter is not None else ()
        self._allowed: FrozenSet[FilterType] = frozenset(allowed)

    def __repr__(self) -> str:
        return f"ColBuilder(kind={self._config.kind.value!r}, label={self._config.label!r})"

    @property
    def config(self) -> ColConfig:
        return self._config

    @property
    def kind(self) -> ColKind:
        return self._config.kind

    @property
    def allowed_filters(self) -> FrozenSet[FilterType]:
        return self._allowed

    def _with(self, allowed: Optional[FrozenSet[FilterType]] = None, **changes: Any) -> ColBuilder:
        config = self._config.model_copy(update=changes) if changes else self._config
        return ColBuilder(config, self._allowed if allowed is None else allowed)

    # -- text -------------------------------------------------------------

    def label(self, text: str) -> ColBuilder:
        return self._with(label=text)

    def description(self, text: str) -> ColBuilder:
        """Semantic note for downstream tooling; not rendered."""
        return self._with(description=text)

    # -- rendering --------------------------------------------------------

    def display(
        self,
        type: Union[DisplayType, str],
        *,
        unit: Optional[str] = None,
        cell: Optional[CellRenderer] = None,
    ) -> ColBuilder:
        """
        Choose the cell renderer.

        ``unit`` is only accepted for ``"number"``; ``"custom"`` requires a
        ``cell(value, row)`` callable, which is dropped on serialization.
        """
        try:
            display_type = DisplayType(type)
        except ValueError:
            raise InvalidDisplayError(
                f"Unknown display type {type!r}. "
                f"Expected one of: {', '.join(t.value for t in DisplayType)}"
            ) from None

        if unit is not None and display_type != DisplayType.number:
            raise InvalidDisplayError(f"display({display_type.value!r}) does not accept a unit")
        if display_type == DisplayType.custom:
            if not callable(cell):
                raise InvalidDisplayError('display("custom") requires a callable cell renderer')
        elif cell is not None:
            raise InvalidDisplayError(f"display({display_type.value!r}) does not accept a cell renderer")

        return self._with(display=DisplayConfig(type=display_type, unit=unit, cell=cell))

    def size(self, px: int) -> ColBuilder:
        return self._with(size=px)

    def hidden(self) -> ColBuilder:
        return self._with(hidden=True)

    def sortable(self) -> ColBuilder:
        return self._with(sortable=True)

    def optional(self) -> ColBuilder:
        return self._with(optional=True)

    # -- filtering --------------------------------------------------------

    def filterable(
        self,
        type: Union[FilterType, str, None] = None,
        *,
        options: Optional[Sequence[OptionLike]] = None,
        component: Optional[OptionRenderer] = None,
        min: Optional[Number] = None,
        max: Optional[Number] = None,
        presets: Optional[Sequence[PresetLike]] = None,
    ) -> ColBuilder:
        """
        Enable filtering, optionally with an explicit type and its parameters.

        Without a type the current filter type is kept. ``default_open`` and
        ``command_disabled`` carry over from the existing filter; every other
        parameter is replaced.
        """
        kind = self._config.kind
        if not self._allowed:
            raise FilterNotAllowedError(
                f"Column of kind {kind.value!r} is not filterable"
                + (" (not_filterable() was called)" if ALLOWED_FILTERS[kind] else "")
            )

        existing = self._config.filter
        if type is None:
            filter_type = existing.type if existing else min_filter(self._allowed)
        else:
            try:
                filter_type = FilterType(type)
            except ValueError:
                raise FilterNotAllowedError(
                    f"Unknown filter type {type!r}. "
                    f"Expected one of: {_sorted_names(FilterType)}"
                ) from None

        if filter_type not in self._allowed:
            raise FilterNotAllowedError(
                f"Filter type {filter_type.value!r} is not allowed for {kind.value!r} columns. "
                f"Allowed: {_sorted_names(self._allowed)}"
            )

        params: Dict[str, Any] = {
            "options": options,
            "component": component,
            "min": min,
            "max": max,
            "presets": presets,
        }
        given = {name: value for name, value in params.items() if value is not None}
        unexpected = set(given) - _FILTER_PARAMS[filter_type]
        if unexpected:
            raise FilterNotAllowedError(
                f"Filter type {filter_type.value!r} does not accept: {', '.join(sorted(unexpected))}"
            )

        if "options" in given:
            given["options"] = tuple(
                o if isinstance(o, Option) else Option.model_validate(o) for o in given["options"]
            )
        if "presets" in given:
            given["presets"] = tuple(
                p if isinstance(p, DatePreset) else DatePreset.model_validate(p) for p in given["presets"]
            )

        new_filter = FilterConfig(
            type=filter_type,
            default_open=existing.default_open if existing else False,
            command_disabled=existing.command_disabled if existing else False,
            **given,
        )
        return self._with(filter=new_filter)

    def not_filterable(self) -> ColBuilder:
        return self._with(allowed=frozenset(), filter=None)

    def default_open(self) -> ColBuilder:
        """Open this filter in the sidebar by default. No-op when not filterable."""
        if self._config.filter is None:
            return self._with()
        return self._with(filter=self._config.filter.model_copy(update={"default_open": True}))

    def command_disabled(self) -> ColBuilder:
        """Exclude this filter from the command palette syntax. No-op when not filterable."""
        if self._config.filter is None:
            return self._with()
        return self._with(filter=self._config.filter.model_copy(update={"command_disabled": True}))

    # -- detail sheet -----------------------------------------------------

    def sheet(
        self,
        config: Optional[SheetConfig] = None,
        *,
        label: Optional[str] = None,
        component: Optional[RowRenderer] = None,
        condition: Optional[RowCondition] = None,
        class_name: Optional[str] = None,
        skeleton_class_name: Optional[str] = None,
    ) -> ColBuilder:
        """Include the column in the row detail view."""
        if config is None:
            config = SheetConfig(
                label=label,
                component=component,
                condition=condition,
                class_name=class_name,
                skeleton_class_name=skeleton_class_name,
            )
        return self._with(sheet=config)


def min_filter(types: Iterable[FilterType]) -> FilterType:
    """Deterministic pick from a capability set (input first)."""
    order = list(FilterType)
    return sorted(types, key=order.index)[0]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _base(kind: ColKind, display: DisplayType, filter: Optional[FilterConfig], **extra: Any) -> ColBuilder:
    config = ColConfig(
        kind=kind,
        display=DisplayConfig(type=display),
        filter=filter,
        **extra,
    )
    return ColBuilder(config, ALLOWED_FILTERS[kind])


def string() -> ColBuilder:
    """Text column: ``text`` display, ``input`` filter."""
    return _base(ColKind.string, DisplayType.text, FilterConfig(type=FilterType.input))


def number() -> ColBuilder:
    """
    Numeric column: ``number`` display, ``input`` filter.

    Use ``"slider"`` for continuous values (latency, size) and ``"checkbox"``
    for discrete ones (status codes, ports).
    """
    return _base(ColKind.number, DisplayType.number, FilterConfig(type=FilterType.input))


def boolean() -> ColBuilder:
    """Boolean column: ``checkbox`` filter with Yes/No options pre-wired."""
    return _base(
        ColKind.boolean,
        DisplayType.boolean,
        FilterConfig(type=FilterType.checkbox, options=BOOLEAN_OPTIONS),
    )


def timestamp() -> ColBuilder:
    return _base(ColKind.timestamp, DisplayType.timestamp, FilterConfig(type=FilterType.timerange))


def enum(values: Sequence[str]) -> ColBuilder:
    """
    Enum column over a fixed list of string literals.

    Checkbox options are not derived from ``values`` here; pass them via
    ``filterable("checkbox", options=...)`` or use ``presets.log_level``.
    """
    if isinstance(values, str):
        raise TypeError("enum() expects a sequence of values, not a single string")
    return _base(
        ColKind.enum,
        DisplayType.badge,
        FilterConfig(type=FilterType.checkbox),
        enum_values=tuple(values),
    )


def array(item: ColBuilder) -> ColBuilder:
    """Multi-value column, most commonly ``array(enum(values))``."""
    return _base(
        ColKind.array,
        DisplayType.badge,
        FilterConfig(type=FilterType.checkbox),
        array_item=item.config,
    )


def record() -> ColBuilder:
    """Key/value map column (headers, metadata). Never filterable."""
    return _base(ColKind.record, DisplayType.text, None)
