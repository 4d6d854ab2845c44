# write object tree to text stream as YAML format

from io import TextIOWrapper
from typing import Any

import yaml


class YamlWriter:
    def __init__(self, stream: TextIOWrapper):
        self.stream = stream
        self.level = 0

    def name(self, key: str) -> "YamlWriter":
        self.__indent()
        self.stream.write(key)
        self.stream.write(":")
        return self

    def value(self, value: Any) -> "YamlWriter":
        self.stream.write(" ")
        self.stream.write(scalar(value))
        self.stream.write("\n")
        return self

    def begin_object(self) -> "YamlWriter":
        self.stream.write("\n")
        self.level = self.level + 1
        return self

    def end_object(self) -> "YamlWriter":
        if self.level <= 0:
            raise ValueError("level is already 0")
        self.level = self.level - 1
        return self

    def comment(self, body: str) -> "YamlWriter":
        self.__indent()
        self.stream.write("# ")
        self.stream.write(body)
        self.stream.write("\n")
        return self

    def __indent(self) -> "YamlWriter":
        for _ in range(self.level * 2):
            self.stream.write(" ")
        return self


def scalar(value: Any) -> str:
    """render a scalar so that reading it back gives the same value"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        try:
            same = yaml.safe_load(value) == value
        except yaml.YAMLError:
            same = False
        if not same or value != value.strip():
            # "1.0", "true", "" and friends would come back as another type
            return "'%s'" % value.replace("'", "''")
        return value
    return str(value)
