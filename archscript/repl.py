"""Interactive shell and command-line entry point. Uses cmd as backend."""

from __future__ import annotations

import argparse
import cmd
import logging
import sys
from typing import Optional

from archscript import __version__, config
from archscript.interpreter import Interpreter
from archscript.types.errors import ArchError

logger = logging.getLogger(__name__)


class Shell(cmd.Cmd):
    """ArchScript read-eval-print loop."""
    intro = f"ArchScript {__version__}\nType (help) for the list of functions, Ctrl-D to exit."

    def __init__(self, interpreter: Optional[Interpreter] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter or Interpreter()
        self.prompt = config.get_prompt()
        if self.stdin is not sys.stdin:
            # input() only reads the process stdin
            self.use_rawinput = False

    def onecmd(self, line: str) -> bool:
        # Every line is ArchScript source; cmd's do_* dispatch is not used
        if line == "EOF":
            return self.do_EOF(line)
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def default(self, line: str) -> bool:
        """Evaluates one line of ArchScript and prints the result or the error."""
        try:
            result = self.interpreter.eval(line, more_input=self.more_input)
        except ArchError as error:
            logger.info("error: %s", error)
            self.stdout.write(f"{error}\n")
            return False
        self.stdout.write(f"{result.source()}\n")
        return False

    def more_input(self, partial: str) -> str:
        """Continuation prompt: show the open form and read one more line."""
        prompt = f"{config.get_continuation_prompt()}{partial}\n"
        if not self.use_rawinput:
            self.stdout.write(prompt)
            self.stdout.flush()
            return self.stdin.readline().rstrip("\r\n")
        try:
            return input(prompt)
        except EOFError:
            return ""

    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits interpreter."""
        self.stdout.write("\n")
        return True


def run_once(source: str, interpreter: Optional[Interpreter] = None) -> int:
    """Evaluate one source text, print the outcome; exit status 1 on Error."""
    interpreter = interpreter or Interpreter()
    try:
        result = interpreter.eval(source)
    except ArchError as error:
        logger.info("error: %s", error)
        print(error)
        return 1
    print(result.source())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="archscript", description="ArchScript interpreter")
    parser.add_argument("source", nargs="?", help="evaluate this text once instead of starting the shell")
    parser.add_argument("--log-level", default=config.get_log_level(),
                        help="logging level (default: $ARCHSCRIPT_LOG_LEVEL or WARNING)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.source is not None:
        return run_once(args.source)
    try:
        Shell().cmdloop()
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
