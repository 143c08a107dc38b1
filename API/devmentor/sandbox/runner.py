"""Child-process entry point for Python snippets.

Started as ``python -I runner.py`` with the snippet on stdin, so every run gets
a fresh interpreter and nothing from the parent's environment. Only the
standard library may be imported here. The outcome is written as a single
marker-prefixed JSON line on the real stdout.
"""
import ast
import json
import sys
import warnings

RESULT_MARKER = "__DEVMENTOR_RESULT__"
SNIPPET_NAME = "<snippet>"


class CappedLines:
    """Collected output lines; once ``limit`` characters are held, the rest is dropped."""

    def __init__(self, limit=0):
        self.lines = []
        self.limit = limit
        self.used = 0
        self.truncated = False

    def append(self, line):
        if self.truncated:
            return
        if self.limit and self.used + len(line) > self.limit:
            remaining = self.limit - self.used
            if remaining > 0:
                self.lines.append(line[:remaining])
            self.truncated = True
            return
        self.lines.append(line)
        self.used += len(line) + 1


class LineChannel:
    """File-like sink that records each completed line, optionally prefixed."""

    def __init__(self, lines, prefix=""):
        self._lines = lines
        self._prefix = prefix
        self._buffer = ""

    def write(self, text):
        text = str(text)
        if self._lines.truncated:
            return len(text)
        self._buffer += text
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            self._lines.append(self._prefix + line)
        # A line that never ends still counts against the limit.
        if self._lines.limit and len(self._buffer) > self._lines.limit:
            self._lines.append(self._prefix + self._buffer)
            self._buffer = ""
        return len(text)

    def flush(self):
        pass

    def isatty(self):
        return False

    def drain(self):
        if self._buffer:
            self._lines.append(self._prefix + self._buffer)
            self._buffer = ""


def render_value(value):
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            return repr(value)
    if isinstance(value, str):
        return value
    return repr(value)


def describe_error(exc):
    if isinstance(exc, SyntaxError):
        return f"SyntaxError: {exc.msg} (line {exc.lineno})"
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


def run(source, limit=0):
    lines = CappedLines(limit)
    outcome = {"lines": lines.lines, "truncated": False, "return_value": None, "error": None}
    stdout = LineChannel(lines)
    stderr = LineChannel(lines, "ERROR: ")
    namespace = {"__name__": "__main__", "__builtins__": __builtins__}

    def show_warning(message, category, filename, lineno, file=None, line=None):
        stdout.drain()
        lines.append(f"WARNING: {message}")

    warnings.simplefilter("default")
    warnings.showwarning = show_warning
    sys.stdout, sys.stderr = stdout, stderr
    try:
        tree = ast.parse(source, SNIPPET_NAME, "exec")
        tail = None
        if tree.body and isinstance(tree.body[-1], ast.Expr):
            tail = ast.Expression(body=tree.body.pop().value)
        exec(compile(tree, SNIPPET_NAME, "exec"), namespace)
        if tail is not None:
            value = eval(compile(tail, SNIPPET_NAME, "eval"), namespace)
            if value is not None:
                outcome["return_value"] = render_value(value)
    # SystemExit and KeyboardInterrupt raised by the snippet are reported like any other error.
    except BaseException as exc:
        outcome["error"] = describe_error(exc)
    finally:
        stdout.drain()
        stderr.drain()
        sys.stdout, sys.stderr = sys.__stdout__, sys.__stderr__
        outcome["truncated"] = lines.truncated
    return outcome


def main():
    limit = int(sys.argv[1]) if len(sys.argv) > 1 else 0
    source = sys.stdin.buffer.read().decode("utf-8", errors="replace")
    outcome = run(source, limit)
    sys.__stdout__.write(RESULT_MARKER + json.dumps(outcome) + "\n")
    sys.__stdout__.flush()


if __name__ == "__main__":
    main()
