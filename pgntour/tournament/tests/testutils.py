import logging
import os
import tempfile


def write_pgn_file(testcase, text):
    """Write PGN text to a temporary file removed when the test finishes."""
    handle, path = tempfile.mkstemp(suffix=".pgn")
    with os.fdopen(handle, "w", encoding="utf-8") as f:
        f.write(text)
    testcase.addCleanup(os.remove, path)
    return path


class Shush:
    """Silence logging inside the block; exceptions still propagate."""

    def __enter__(self):
        logging.disable(logging.CRITICAL)
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        logging.disable(logging.NOTSET)
        return False
