import os
import sys
import argparse
from memorizer.report import write_report
from memorizer_args import DEFAULT_CONF_PATH, MemoizerArgs
from memorizer_config import demo


def main() -> int:
    parser = argparse.ArgumentParser(
        description='generate/verify memoizer configuration file and run the demo scenarios')
    parser.add_argument('--file', dest="file",
                        default=DEFAULT_CONF_PATH, help='configuration file name')
    parser.add_argument('--create', action="store_true",
                        help='create new configuration file by standard settings')
    parser.add_argument('--verify', action="store_true",
                        help='verify existing configuration file')
    parser.add_argument('--demo', action="store_true",
                        help='run the demo scenarios and write the cache report')

    args = parser.parse_args()
    path = args.file

    exit_code = 0
    if args.verify or args.demo:
        if not os.path.isfile(path):
            print("%s does not exist." % path)
            return 1
        print("verifying configuration file %s..." %
              (os.path.join(os.getcwd(), path)))
        conf = MemoizerArgs.from_yaml(path)
        if not conf.error_counter.ok():
            return 1
        if args.verify:
            print("No obvious errors were found.")
        if args.demo:
            memoizers = demo.run(conf)
            report = write_report(memoizers, conf.report.result_dir)
            print("cache report is written to %s" % report)
    elif args.create:
        conf = MemoizerArgs.auto_configure()
        conf.write_as_yaml(path)
        print("memoizer configuration file is written to %s" %
              (os.path.join(os.getcwd(), path)))
    else:
        print("one of --create, --verify or --demo must be specified")
        exit_code = 1
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
