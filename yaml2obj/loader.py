import io
import os
from typing import Any
import yaml
from yaml.loader import SafeLoader
from yaml.composer import Composer
from yaml.constructor import Constructor

# every mapping gets a "__line__" entry: key -> line number, plus "__begin__"


class YamlLoaderWithLineNumber(SafeLoader):
    def __init__(self, stream):
        super(YamlLoaderWithLineNumber, self).__init__(stream)

    def compose_node(self, parent, index):
        node = Composer.compose_node(self, parent, index)
        node.__line__ = self.line + 1
        return node

    def construct_mapping(self, node, deep=False):
        line_info = {}
        min_line = node.start_mark.line + 1
        for k, _ in node.value:
            line_info[k.value] = k.__line__
            min_line = min(min_line, k.__line__)
        # the object starts from line number __begin__
        line_info["__begin__"] = min_line

        mapping = Constructor.construct_mapping(self, node, deep=deep)
        mapping["__line__"] = line_info
        return mapping

    @classmethod
    def from_file(cls, path: str) -> Any:
        with open(path) as file:
            o = cls.load_mapping(file)
            if isinstance(o, dict):
                o['__fullpath__'] = os.path.abspath(path)
            return o

    @classmethod
    def from_string(cls, body: str) -> Any:
        return cls.load_mapping(io.StringIO(body))

    # an empty document is an empty mapping, so that validators can still report missing keys
    @classmethod
    def load_mapping(cls, stream) -> Any:
        o = yaml.load(stream, Loader=cls)
        if o is None:
            o = {"__line__": {"__begin__": 1}}
        return o


def line_of(data: dict, key: str) -> int:
    """line number of 'key' in the loaded mapping, or where the mapping begins"""
    line_info = data.get("__line__", {})
    return line_info.get(key, line_info.get("__begin__", 0))
