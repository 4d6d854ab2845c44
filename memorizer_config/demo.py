# scenarios run by 'python -m memorizer_config --demo'

import time
from typing import List

from memorizer.memorizer import Memoizer, once
from memorizer_args import MemoizerArgs


class CallCounter:
    def __init__(self):
        self.count = 0


def slow_multiply(counter: CallCounter, a: int, b: int) -> int:
    counter.count += 1
    time.sleep(0.05)  # stands in for an expensive computation
    return a * b


def bump(counter: CallCounter, increment: int) -> int:
    counter.count += increment
    return counter.count


def timed_call(label: str, f, *args):
    start = time.perf_counter()
    v = f(*args)
    print("%s: %s (%.3f ms)" % (label, v, (time.perf_counter() - start) * 1000))
    return v


def run(conf: MemoizerArgs) -> List[Memoizer]:
    repeat = conf.report.repeat or 1

    multiply_calls = CallCounter()
    multiply = conf.memoize(slow_multiply, context=multiply_calls)
    for i in range(repeat):
        timed_call("multiply call %d" % (i + 1), multiply, 9467, 7649)
    print("multiply was evaluated %d times" % multiply_calls.count)

    bumps = CallCounter()
    counter = conf.memoize(bump, context=bumps)
    for i in range(3):
        timed_call("counter call %d" % (i + 1), counter, 5)
    print("counter value is %d after 3 calls" % bumps.count)

    hello = once(lambda a, b: print("Hello!", a, b))
    hello(1, 2)
    hello(1, 2)  # prints nothing

    return [multiply, counter]
