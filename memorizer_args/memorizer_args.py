import os
from pathlib import Path
from typing import Any, Callable, Optional

from yaml2obj.loader import YamlLoaderWithLineNumber, line_of
from yaml2obj.writer import YamlWriter

from memorizer.memorizer import Memoizer, memoize
from memorizer_args.error_counter import ErrorCounter
from memorizer_args.locking import LockingArgs
from memorizer_args.report import ReportArgs

DEFAULT_CONF_PATH = ".memorizer.d/config.yml"


class MemoizerArgs:
    SCHEMA_VERSION = "1.0"

    def __init__(self):
        self.locking = LockingArgs(self)
        self.report = ReportArgs(self)
        self.trace = False
        self.error_counter = ErrorCounter()
        self.source_object: dict = {}

    # fill content and print message if necessary
    # 'data' should have line number information
    def fill_and_validate(self, data: dict):
        self.error_counter = ErrorCounter()
        self.source_object = data
        if not isinstance(data, dict):
            self.error_counter.record(
                "configuration must be a mapping, not %s" % type(data).__name__)
            self.error_counter.print_errors()
            return
        version = data.get("schema-version", None)
        if version is None:
            self.error_counter.record("schema-version is not specified")
        elif str(version) != MemoizerArgs.SCHEMA_VERSION:
            self.error_counter.record("schema-version %s is not supported" % version,
                                      line_of(data, "schema-version"))
        self.trace = self.check_bool_field(
            data, "trace", False, self.error_counter)
        if os.getenv("MEMORIZER_TRACE") == "1":
            self.trace = True
        self.locking.fill_and_validate(
            data.get("locking", None), self.error_counter)
        self.report.fill_and_validate(
            data.get("report", None), self.error_counter)

        if self.error_counter.error_count > 0:
            self.error_counter.print_errors()

    def write_to(self, writer: YamlWriter):
        writer.comment("Memoizer configuration file")
        writer.comment(" ")

        writer.name("schema-version").value(MemoizerArgs.SCHEMA_VERSION)

        writer.name("locking").begin_object()
        self.locking.write_to(writer)
        writer.end_object()

        writer.comment("print every cache hit and miss (MEMORIZER_TRACE=1 forces it on)")
        writer.name("trace").value(self.trace)

        writer.name("report").begin_object()
        self.report.write_to(writer)
        writer.end_object()

    def write_as_yaml(self, path: str):
        p = Path(path).resolve()
        p.parents[0].mkdir(parents=True, exist_ok=True)
        with p.open('w') as s:
            self.write_to(YamlWriter(s))

    def memoize(self, fn: Callable, **options) -> Memoizer:
        """memoize fn with the configured lock mode and tracing"""
        options.setdefault("lock", self.locking.mode)
        options.setdefault("trace", self.trace)
        return memoize(fn, **options)

    def record_field_error(self, data: dict, key: str, msg: str, error_counter: ErrorCounter):
        error_counter.record("@%s: %s" % (key, msg), line_of(data, key))

    # read value from dictionary and verify the content.
    # if error is not found, return the value itself
    # else, record error message with line number information and return None
    def check_mandatory_field(self, data: dict, key: str, verifier: Callable[[Any], Optional[str]],
                              error_counter: ErrorCounter) -> Optional[Any]:
        value = data.get(key)
        if value is None:
            error_counter.record("object from line %d: key %s is not found" % (
                line_of(data, "__begin__"), key))
            return None
        msg = verifier(value)
        if msg is not None:
            self.record_field_error(data, key, msg, error_counter)
            return None
        return value

    # parse optional integer field
    def check_int_field(self, data: dict, key: str, default_value: int, error_counter: ErrorCounter) -> Optional[int]:
        value = data.get(key)
        if value is None:
            return default_value
        if isinstance(value, bool):
            self.record_field_error(
                data, key, "%s is not an integer" % value, error_counter)
            return None
        if isinstance(value, float) and not value.is_integer():
            self.record_field_error(
                data, key, "%s is not an integer" % value, error_counter)
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            self.record_field_error(
                data, key, "%s is not an integer" % value, error_counter)
            return None

    # parse optional boolean field
    def check_bool_field(self, data: dict, key: str, default_value: bool, error_counter: ErrorCounter) -> bool:
        value = data.get(key)
        if value is None:
            return default_value
        if not isinstance(value, bool):
            self.record_field_error(
                data, key, "%s is not true or false" % value, error_counter)
            return default_value
        return value

    @classmethod
    def from_yaml(cls, path: str) -> "MemoizerArgs":
        args = MemoizerArgs()
        args.fill_and_validate(YamlLoaderWithLineNumber.from_file(path))
        return args

    @classmethod
    def from_string(cls, body: str) -> "MemoizerArgs":
        args = MemoizerArgs()
        args.fill_and_validate(YamlLoaderWithLineNumber.from_string(body))
        return args

    @classmethod
    def auto_configure(cls) -> "MemoizerArgs":
        args = MemoizerArgs()
        args.trace = False
        args.locking = LockingArgs.auto_configure(args)
        args.report = ReportArgs.auto_configure(args)
        return args
