# cache the result of function call, keyed by the canonical form of its arguments.
# a Memoizer owns its cache; two wrappers never share entries.

import functools
import threading
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from .cache_key import DEFAULT_KEY_BUILDER, KeyBuilder

LOCK_MODES = ("none", "global", "per-key")

_NO_CONTEXT = object()


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    errors: int
    size: int


class _NoLock:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class Memoizer:
    def __init__(self, fn: Callable, context: Any = _NO_CONTEXT, key_builder: Optional[KeyBuilder] = None,
                 lock: str = "per-key", trace: bool = False):
        if not callable(fn):
            raise TypeError("%r is not callable" % (fn, ))
        if lock not in LOCK_MODES:
            raise ValueError("lock must be one of %s, not %r" %
                             (", ".join(LOCK_MODES), lock))
        functools.update_wrapper(self, fn)
        self.name: str = getattr(fn, "__qualname__", repr(fn))
        self.fn = fn
        self.context = context
        self.key_builder = key_builder or DEFAULT_KEY_BUILDER
        self.lock_mode = lock
        self.trace = trace
        self._cache: Dict[str, Any] = {}
        self._hits = 0
        self._misses = 0
        self._errors = 0
        # guards the counters and, in "global" mode, every lookup + evaluation
        self._lock = threading.RLock()
        self._key_locks: Dict[str, threading.RLock] = {}

    def __call__(self, *args, **kwargs):
        return self._invoke(self.context, args, kwargs)

    def call_with(self, context: Any, *args, **kwargs):
        """call with an explicit receiver. the receiver is not a part of the key"""
        return self._invoke(context, args, kwargs)

    # placed in a class body, the instance becomes the receiver
    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return functools.partial(self.call_with, obj)

    def _invoke(self, context: Any, args: tuple, kwargs: dict):
        # SerializationError surfaces here, before fn runs or the cache changes
        key = self.key_builder.build(args, kwargs)
        with self._lock_for(key):
            if key in self._cache:
                with self._lock:
                    self._hits += 1
                self._print_trace("hit", key)
                return self._cache[key]
            self._print_trace("miss", key)
            try:
                if context is _NO_CONTEXT:
                    v = self.fn(*args, **kwargs)
                else:
                    v = self.fn(context, *args, **kwargs)
            except Exception:
                with self._lock:
                    self._errors += 1
                raise
            with self._lock:
                self._misses += 1
                self._cache[key] = v
            return v

    # per-key locks stay held while fn runs: evaluations that recurse into each
    # other's keys from two threads need "global"
    def _lock_for(self, key: str):
        if self.lock_mode == "global":
            return self._lock
        if self.lock_mode == "per-key":
            with self._lock:
                lock = self._key_locks.get(key)
                if lock is None:
                    lock = self._key_locks[key] = threading.RLock()
            return lock
        return _NoLock()

    def _print_trace(self, event: str, key: str) -> None:
        if self.trace:
            print("memoize %s: %s key=%s" % (self.name, event, key))

    def is_cached(self, *args, **kwargs) -> bool:
        return self.key_builder.build(args, kwargs) in self._cache

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._cache.keys())

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, self._errors, len(self._cache))

    def __repr__(self) -> str:
        return "<Memoizer %s lock=%s size=%d>" % (self.name, self.lock_mode, len(self._cache))


def memoize(fn: Optional[Callable] = None, context: Any = _NO_CONTEXT, key_builder: Optional[KeyBuilder] = None,
            lock: str = "per-key", trace: bool = False):
    """wrap fn so that it is evaluated at most once per distinct argument list.

    works as a bare decorator (@memoize) and with options (@memoize(lock="global")).
    when 'context' is given, fn is called as fn(context, *args, **kwargs).
    """
    if fn is None:
        return lambda f: Memoizer(f, context, key_builder, lock, trace)
    return Memoizer(fn, context, key_builder, lock, trace)


def once(f: Callable, context: Any = _NO_CONTEXT) -> Callable:
    """evaluate f on the first call only; later calls return the first result
    whatever their arguments. a failed first call is not remembered."""
    lock = threading.Lock()
    done: List[Any] = []

    @functools.wraps(f)
    def w(*args, **kwargs):
        if done:  # cache hit
            return done[0]
        with lock:
            if not done:
                if context is _NO_CONTEXT:
                    done.append(f(*args, **kwargs))
                else:
                    done.append(f(context, *args, **kwargs))
            return done[0]
    return w
