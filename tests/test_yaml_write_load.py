import io
import pytest
from yaml2obj.loader import YamlLoaderWithLineNumber, line_of
from yaml2obj.writer import YamlWriter, scalar

# 　Write YAML and read it with line numbers


def test_yaml_read_write():
    b = make_sample_yaml()
    v = YamlLoaderWithLineNumber.from_string(b)
    line_info = v["__line__"]
    assert v["key0"] == "value0"
    assert line_info["key0"] == 1
    assert line_info["key1"] == 2
    assert line_of(v["key1"], "key11") == 3
    assert v["key1"]["flag"] is False
    assert v["key1"]["version"] == "1.0"
    assert v["key1"]["nothing"] is None


def test_line_of_missing_key():
    v = YamlLoaderWithLineNumber.from_string("a: 1\nb:\n  c: 2\n")
    assert line_of(v["b"], "missing") == 3


def test_empty_document():
    v = YamlLoaderWithLineNumber.from_string("")
    assert line_of(v, "anything") == 1


def test_scalar_quotes_ambiguous_strings():
    assert scalar("per-key") == "per-key"
    assert scalar("true") == "'true'"
    assert scalar("") == "''"
    assert scalar("it's: here") == "'it''s: here'"
    assert scalar(3) == "3"
    assert scalar(None) == "null"


# expected yaml
# key0: value0
# key1:
#  key11: value11
#  flag: false
#  version: '1.0'
#  nothing: null

def make_sample_yaml() -> str:
    s = io.StringIO()
    writer = YamlWriter(s)
    writer.name("key0").value("value0")
    writer.name("key1").begin_object()
    writer.name("key11").value("value11")
    writer.name("flag").value(False)
    writer.name("version").value("1.0")
    writer.name("nothing").value(None)
    writer.end_object()
    return s.getvalue()


def test_end_object_at_top_level():
    writer = YamlWriter(io.StringIO())
    with pytest.raises(ValueError):
        writer.end_object()
