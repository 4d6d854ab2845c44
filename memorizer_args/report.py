from typing import TYPE_CHECKING, Optional
from yaml2obj.loader import line_of
from yaml2obj.writer import YamlWriter
from memorizer_args.error_counter import ErrorCounter

if TYPE_CHECKING:
    from memorizer_args.memorizer_args import MemoizerArgs


class ReportArgs:
    def __init__(self, parent: "MemoizerArgs"):
        self.parent = parent
        self.result_dir: Optional[str] = None
        self.repeat: Optional[int] = 2

    def fill_and_validate(self, data: dict, error_counter: ErrorCounter):
        def verify_result_dir(path) -> Optional[str]:
            if not isinstance(path, str) or len(path.strip()) == 0:
                return "must be a directory name"
            return None

        if data is None:
            error_counter.record("report section is empty")
            return
        if not isinstance(data, dict):
            error_counter.record("report section must be a mapping",
                                 line_of(self.parent.source_object, "report"))
            return
        self.result_dir = self.parent.check_mandatory_field(
            data, "result-dir", verify_result_dir, error_counter)
        self.repeat = self.parent.check_int_field(
            data, "repeat", 2, error_counter)
        if self.repeat is not None and self.repeat < 1:
            self.parent.record_field_error(
                data, "repeat", "must be 1 or more", error_counter)
            self.repeat = None

    def write_to(self, writer: YamlWriter):
        writer.comment("The cache report is placed here in XML format")
        writer.name("result-dir").value(self.result_dir)
        writer.comment("how many times each demo scenario is called")
        writer.name("repeat").value(self.repeat)

    @classmethod
    def auto_configure(cls, parent: "MemoizerArgs") -> "ReportArgs":
        a = ReportArgs(parent)
        a.result_dir = ".memorizer.d/results"
        a.repeat = 2
        return a
