import argparse
import dataclasses
import sys
import time
from typing import List, Optional

from .config import Configuration, OnEOF
from .errors import LoadError
from .host import StreamHost
from .interpreter import Interpreter
from .loader import load_file, load_string


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Run a Brainfuck program. Text after the first '!' is used as the program's input.",
    )
    parser.add_argument("file", help="program file, or - to read the program from stdin")
    parser.add_argument("--on-eof", choices=[m.value for m in OnEOF], default=None,
                        help="what a read does at end of input (default: zero, or $BFTAPE_ON_EOF)")
    parser.add_argument("--debug", action="store_true", help="enable the # tape dump instruction")
    parser.add_argument("--show-program", action="store_true", help="print the parsed program before running it")
    parser.add_argument("--show-tape", action="store_true", help="print the visited tape after the run")
    parser.add_argument("--time", action="store_true", help="report load and execution times")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        configuration = Configuration.from_env()
    except ValueError as e:
        print(f"Invalid environment: {e}", file=sys.stderr)
        return 2
    if args.on_eof is not None:
        configuration = dataclasses.replace(configuration, on_eof=OnEOF.parse(args.on_eof))
    if args.debug:
        configuration = dataclasses.replace(configuration, debug_enabled=True)

    start = time.time()
    try:
        if args.file == "-":
            program = load_string(sys.stdin.read())
        else:
            program = load_file(args.file)
    except LoadError as e:
        print(f"Cannot load program: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot load program: {e}", file=sys.stderr)
        return 1
    end = time.time()

    if args.time:
        print(f"Loading took {(end - start) * 1000:.2f} ms", file=sys.stderr)
    if args.show_program:
        print(program.instructions.to_source(), file=sys.stderr)

    interpreter = Interpreter(configuration=configuration, program=program, host=StreamHost())
    start = time.time()
    ok = interpreter.run()
    end = time.time()

    if args.time:
        print(f"Execution took {(end - start) * 1000:.2f} ms", file=sys.stderr)
    if args.show_tape:
        print(interpreter.tape.dump(), file=sys.stderr)

    if not ok:
        print(f"Cannot run program: {interpreter.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
