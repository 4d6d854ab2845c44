from typing import TYPE_CHECKING
from yaml2obj.loader import line_of
from yaml2obj.writer import YamlWriter
from memorizer_args.error_counter import ErrorCounter
from memorizer.memorizer import LOCK_MODES

if TYPE_CHECKING:
    from memorizer_args.memorizer_args import MemoizerArgs


class LockingArgs:
    DEFAULT_MODE = "per-key"

    def __init__(self, parent: "MemoizerArgs"):
        self.parent = parent
        self.mode = LockingArgs.DEFAULT_MODE

    def fill_and_validate(self, data: dict, error_counter: ErrorCounter):
        if data is None:
            error_counter.record("locking section is empty")
            return
        if not isinstance(data, dict):
            error_counter.record("locking section must be a mapping",
                                 line_of(self.parent.source_object, "locking"))
            return
        self.mode = data.get("mode", LockingArgs.DEFAULT_MODE)
        if self.mode not in LOCK_MODES:
            error_counter.record("'mode' must be none, global, or per-key",
                                 line_of(data, "mode"))

    def write_to(self, writer: YamlWriter):
        writer.comment("mode can be none, global, or per-key")
        writer.comment("  none: no locking, single threaded use only")
        writer.comment(
            "  global: one lock around every lookup and evaluation")
        writer.comment(
            "  per-key: one lock per argument list, unrelated calls run in parallel")
        writer.name("mode").value(self.mode)

    @classmethod
    def auto_configure(cls, parent: "MemoizerArgs") -> "LockingArgs":
        a = LockingArgs(parent)
        a.mode = LockingArgs.DEFAULT_MODE
        return a
