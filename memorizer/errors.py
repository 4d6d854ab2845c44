class MemorizerError(Exception):
    pass


class SerializationError(MemorizerError, TypeError):
    """argument list cannot be turned into a cache key"""

    def __init__(self, path: str, value_type: type, reason: str = "unsupported type"):
        self.path = path
        self.value_type = value_type
        super(SerializationError, self).__init__("%s: %s %s" % (
            path, reason, value_type.__qualname__))
