"""Typed slots and the per-render value store.

A :class:`SlotKey` names a dynamic value; a :class:`Slot` marks where that
value lands inside a node tree; a :class:`RenderContext` supplies the values
for one render session. Contexts optionally cache the rendered output of each
slot (:attr:`RenderPolicy.COMPILE_ON_FIRST_HIT`) so that rendering the same
template repeatedly with an unchanged context does not recompute component
values. Writing a key with :meth:`RenderContext.put` always discards its
cached output.

Examples
--------
>>> from pagesmith.core.slots import RenderContext, Slot, SlotKey
>>> name = SlotKey("name", default="world")
>>> Slot(name).render(RenderContext.empty())
'world'
>>> Slot(name).render(RenderContext.builder().with_value(name, "<you>").build())
'&lt;you&gt;'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import typing as typ

from pagesmith._constants import SLOT_PLACEHOLDER_TEMPLATE
from pagesmith.core.nodes import Node, escape_html

T = typ.TypeVar("T")

logger = logging.getLogger(__name__)

DefaultProvider = typ.Callable[["RenderContext"], typ.Any]


@dc.dataclass(frozen=True, slots=True)
class SlotKey(typ.Generic[T]):
    """Name of a dynamic value, optionally with a fallback.

    Attributes
    ----------
    name : str
        Identity of the key. Two keys with the same name are equal whatever
        their type parameter or default.
    default : object, optional
        Static value used when a context holds no explicit value.
    provider : Callable[[RenderContext], T], optional
        Computes the fallback from the current context, letting one slot's
        default read another slot's value. Takes precedence over ``default``.
    """

    name: str
    default: T | None = dc.field(default=None, compare=False)
    provider: DefaultProvider | None = dc.field(default=None, compare=False)

    def default_for(self, context: RenderContext) -> T | None:
        """Return the fallback value for ``context``, or ``None``."""
        if self.provider is not None:
            return self.provider(context)
        return self.default

    @property
    def placeholder(self) -> str:
        """Literal token that marks this key inside a compiled template source."""
        return SLOT_PLACEHOLDER_TEMPLATE.format(name=self.name)

    def __repr__(self) -> str:
        return f"SlotKey({self.name!r})"


class RenderPolicy(enum.Enum):
    """How a context treats repeated lookups of the same slot."""

    LIVE = "live"
    COMPILE_ON_FIRST_HIT = "compile_on_first_hit"


def render_value(value: object, context: RenderContext) -> str:
    """Render a slot value: nodes render themselves, anything else is escaped."""
    if value is None:
        return ""
    if isinstance(value, Node):
        return value.render(context)
    return escape_html(str(value))


class RenderContext:
    """Values and cached slot output for one render session.

    Not safe to share between concurrent renders; build one per request.
    """

    def __init__(
        self,
        values: cabc.Mapping[SlotKey[typ.Any], object] | None = None,
        *,
        policy: RenderPolicy = RenderPolicy.LIVE,
    ) -> None:
        self._values: dict[SlotKey[typ.Any], object] = dict(values or {})
        self._compiled: dict[SlotKey[typ.Any], str] = {}
        self._policy = policy

    @classmethod
    def empty(cls) -> RenderContext:
        """Return a new context with no values."""
        return cls()

    @classmethod
    def of(cls, values: cabc.Mapping[SlotKey[typ.Any], object]) -> RenderContext:
        """Return a context holding a copy of ``values``."""
        return cls(values)

    @classmethod
    def builder(cls) -> RenderContextBuilder:
        """Return a builder that stages values before creating a context."""
        return RenderContextBuilder()

    @property
    def policy(self) -> RenderPolicy:
        """Active lookup policy."""
        return self._policy

    def with_policy(self, policy: RenderPolicy) -> RenderContext:
        """Switch the lookup policy and return this context."""
        if policy is None:
            msg = "RenderContext policy must not be None."
            raise TypeError(msg)
        self._policy = policy
        return self

    def put(self, key: SlotKey[T], value: T) -> RenderContext:
        """Store ``value`` for ``key`` and discard any compiled output for it."""
        self._values[key] = value
        self._compiled.pop(key, None)
        return self

    def remove(self, key: SlotKey[typ.Any]) -> RenderContext:
        """Forget both the live value and the compiled output for ``key``."""
        self._values.pop(key, None)
        self._compiled.pop(key, None)
        return self

    def put_compiled(self, key: SlotKey[typ.Any], html: str) -> RenderContext:
        """Record trusted, already rendered output for ``key``."""
        self._compiled[key] = html
        return self

    def get_compiled(self, key: SlotKey[typ.Any]) -> str | None:
        """Return cached output for ``key`` or ``None``."""
        return self._compiled.get(key)

    def is_compiled(self, key: SlotKey[typ.Any]) -> bool:
        """Return whether ``key`` has cached output."""
        return key in self._compiled

    def contains(self, key: SlotKey[typ.Any]) -> bool:
        """Return whether an explicit value is stored for ``key``."""
        return key in self._values

    def get(self, key: SlotKey[T]) -> T | None:
        """Return the explicit value for ``key``, else its default, else ``None``.

        Compiled output is not a live value and is never returned here.
        """
        if key in self._values:
            value = self._values[key]
            if value is not None:
                return typ.cast("T", value)
        return key.default_for(self)

    def resolve(self, key: SlotKey[typ.Any]) -> str:
        """Return the rendered output for ``key``.

        Cached output wins when present. Otherwise the value from
        :meth:`get` is rendered; under
        :attr:`RenderPolicy.COMPILE_ON_FIRST_HIT` the result is cached until
        the next :meth:`put` for the same key. A key with neither a value nor
        a default renders as ``""``.
        """
        cached = self._compiled.get(key)
        if cached is not None:
            return cached
        value = self.get(key)
        if value is None:
            logger.debug("slot %r unresolved; substituting empty string", key.name)
        html = render_value(value, self)
        if self._policy is RenderPolicy.COMPILE_ON_FIRST_HIT:
            self._compiled[key] = html
        return html

    def copy(self) -> RenderContext:
        """Return an independent context with the same values and policy."""
        clone = RenderContext(self._values, policy=self._policy)
        clone._compiled = dict(self._compiled)
        return clone

    def __repr__(self) -> str:
        names = ", ".join(sorted(key.name for key in self._values))
        return f"RenderContext([{names}], policy={self._policy.name})"


class RenderContextBuilder:
    """Accumulate slot values, then create a :class:`RenderContext`."""

    def __init__(self) -> None:
        self._values: dict[SlotKey[typ.Any], object] = {}
        self._policy = RenderPolicy.LIVE

    def with_value(self, key: SlotKey[T], value: T) -> RenderContextBuilder:
        """Stage ``value`` for ``key``."""
        self._values[key] = value
        return self

    def with_policy(self, policy: RenderPolicy) -> RenderContextBuilder:
        """Stage the lookup policy."""
        self._policy = policy
        return self

    def build(self) -> RenderContext:
        """Create the context from the staged values."""
        return RenderContext(self._values, policy=self._policy)


class Slot(Node):
    """Position in a node tree filled from the render context.

    Inside :meth:`Template.of <pagesmith.core.template.Template.of>` a slot
    compiles to a typed substitution point and contributes its
    :attr:`placeholder` to the template source. Rendered directly, it renders
    the context's resolved value so both paths produce the same markup.
    """

    __slots__ = ("key",)

    def __init__(self, key: SlotKey[typ.Any]) -> None:
        self.key = key

    @property
    def placeholder(self) -> str:
        """Literal ``{{SLOT:<name>}}`` token for this slot."""
        return self.key.placeholder

    def render(self, context: RenderContext | None = None) -> str:
        if context is None:
            context = RenderContext.empty()
        return context.resolve(self.key)

    def __repr__(self) -> str:
        return f"Slot({self.key.name!r})"


__all__ = [
    "DefaultProvider",
    "RenderContext",
    "RenderContextBuilder",
    "RenderPolicy",
    "Slot",
    "SlotKey",
    "render_value",
]
