from .cache_key import KeyBuilder, canonical_key
from .errors import MemorizerError, SerializationError
from .memorizer import LOCK_MODES, CacheInfo, Memoizer, memoize, once
