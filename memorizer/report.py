import os
from typing import Iterable

from lxml.builder import E  # type: ignore
from lxml import etree  # type: ignore

from .memorizer import Memoizer

REPORT_FILE_NAME = "memoizer-report.xml"


def cache_report(memoizers: Iterable[Memoizer]) -> etree._Element:
    array = []
    for m in memoizers:
        info = m.cache_info()
        entries = [E.entry(key=k) for k in m.keys()]
        array.append(E.memoizer(*entries,
                                name=m.name,
                                lock=m.lock_mode,
                                hits=str(info.hits),
                                misses=str(info.misses),
                                errors=str(info.errors),
                                size=str(info.size)))
    return E.memoizers(*array)


def write_report(memoizers: Iterable[Memoizer], result_dir: str) -> str:
    if not os.path.exists(result_dir):
        os.makedirs(result_dir)
    path = os.path.join(result_dir, REPORT_FILE_NAME)
    with open(path, "w", encoding="utf-8") as out_strm:
        out_strm.write(etree.tostring(
            cache_report(memoizers), encoding="unicode", pretty_print=True))
    return path
