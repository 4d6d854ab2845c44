from .error_counter import ErrorCounter
from .memorizer_args import DEFAULT_CONF_PATH, MemoizerArgs
