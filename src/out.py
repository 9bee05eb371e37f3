import os
import sys
import textwrap
import time


# -----------------------------
# Terminal helpers
# -----------------------------
def terminal_width(stream=None):
    """Return the column count of the terminal behind stream, or None if it is not a tty."""
    stream = stream or sys.stdout
    try:
        if not stream.isatty():
            return None
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, ValueError, OSError):
        return None


def out(text="", stream=None):
    """Print text, wrapping each line to the terminal width when there is one."""
    stream = stream or sys.stdout
    cols = terminal_width(stream)
    if not cols:
        print(text, file=stream)
        return

    lines = []
    for line in str(text).split("\n"):
        if len(line) < cols:
            lines.append(line)
        else:
            lines.extend(textwrap.wrap(line, width=cols, subsequent_indent="  ") or [""])
    print("\n".join(lines), file=stream)


# -----------------------------
# Logging helper
# -----------------------------
def log(msg):
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    out(f"[{timestamp}] {msg}")
