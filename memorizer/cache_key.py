# derive a canonical cache key string from an argument list.
# every value is tagged with its type, so 1, 1.0, True and "1" never collide.

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import SerializationError

Encoder = Callable[[Any], Any]


class KeyBuilder:
    def __init__(self, encoders: Optional[Dict[type, Encoder]] = None):
        self.encoders: Dict[type, Encoder] = dict(encoders or {})

    def register(self, value_type: type, encoder: Encoder) -> "KeyBuilder":
        """return a new builder which also accepts value_type.
        encoder converts a value into something this builder already supports"""
        encoders = dict(self.encoders)
        encoders[value_type] = encoder
        return KeyBuilder(encoders)

    def build(self, args: Tuple, kwargs: Optional[Dict[str, Any]] = None) -> str:
        parts = [self.__encode_argument(v, "args[%d]" % i)
                 for i, v in enumerate(args)]
        if kwargs:
            for name in sorted(kwargs):
                parts.append("%s=%s" % (name, self.__encode_argument(
                    kwargs[name], "kwargs[%r]" % name)))
        return "(" + ",".join(parts) + ")"

    def __encode_argument(self, value: Any, path: str) -> str:
        try:
            return self.__encode(value, path, [])
        except RecursionError:
            raise SerializationError(path, type(value), "too deeply nested") from None

    # 'active' holds ids of containers on the current path, for cycle detection
    def __encode(self, value: Any, path: str, active: List[int]) -> str:
        t = type(value)
        if t in self.encoders:
            return "%s:%s" % (_tag(t), self.__encode(self.encoders[t](value), path, active))
        if value is None:
            return "None"
        if t is bool:
            return "bool:%s" % value
        if t is int:
            return "int:%d" % value
        if t is float:
            return "float:%s" % _float_repr(value)
        if t is complex:
            return "complex:%s,%s" % (_float_repr(value.real), _float_repr(value.imag))
        if t is str or t is bytes:
            return "%s:%r" % (t.__name__, value)
        if isinstance(value, (list, tuple, dict, set, frozenset)):
            if id(value) in active:
                raise SerializationError(path, t, "cyclic reference in")
            active.append(id(value))
            try:
                return self.__encode_container(value, path, active)
            finally:
                active.pop()
        if isinstance(value, (bool, int, float, complex, str, bytes)):
            # subclass of a builtin scalar: keep its own class name in the tag
            base = next(b for b in (bool, int, float, complex, str, bytes)
                        if isinstance(value, b))
            return "%s:%s" % (_tag(t), self.__encode(base(value), path, active))
        raise SerializationError(path, t)

    def __encode_container(self, value: Any, path: str, active: List[int]) -> str:
        tag = _tag(type(value))
        if isinstance(value, dict):
            items = []
            for k, v in value.items():
                ek = self.__encode(k, "%s.<key>" % path, active)
                items.append((ek, self.__encode(v, "%s[%r]" % (path, k), active)))
            items.sort(key=lambda e: e[0])
            return "%s{%s}" % (tag, ",".join("%s:%s" % e for e in items))
        if isinstance(value, (set, frozenset)):
            members = sorted(self.__encode(m, "%s.<member>" % path, active)
                             for m in value)
            return "%s{%s}" % (tag, ",".join(members))
        return "%s[%s]" % (tag, ",".join(
            self.__encode(e, "%s[%d]" % (path, i), active) for i, e in enumerate(value)))


def _tag(t: type) -> str:
    if t.__module__ == "builtins":
        return t.__name__
    return "%s.%s" % (t.__module__, t.__qualname__)


def _float_repr(f: float) -> str:
    # repr() keeps full precision; nan has no sign worth keeping
    if math.isnan(f):
        return "nan"
    return repr(f)


DEFAULT_KEY_BUILDER = KeyBuilder()


def canonical_key(*args, **kwargs) -> str:
    return DEFAULT_KEY_BUILDER.build(args, kwargs)
