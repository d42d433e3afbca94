"""Line sources and sinks shared by the processor tests."""

import threading

WAIT_SEC = 5.0


class ScriptedSource:
    """Line source that serves fixed lines, then blocks like an idle console.

    ``release()`` unblocks the final read and reports end of input.
    """

    def __init__(self, lines, block_at_end=True):
        self._lines = [line if line.endswith("\n") else line + "\n" for line in lines]
        self._block_at_end = block_at_end
        self._released = threading.Event()
        self.exhausted = threading.Event()

    def readline(self):
        if self._lines:
            return self._lines.pop(0)
        self.exhausted.set()
        if self._block_at_end:
            self._released.wait()
        return ""

    def release(self):
        self._released.set()


class FailingSource:
    """Line source whose reads raise after serving the given lines."""

    def __init__(self, lines, error):
        self._lines = list(lines)
        self._error = error

    def readline(self):
        if self._lines:
            return self._lines.pop(0)
        raise self._error


class RecordingStream:
    """Thread-safe text sink that lets tests wait for expected output."""

    def __init__(self):
        self._chunks = []
        self._changed = threading.Condition()

    def write(self, text):
        with self._changed:
            self._chunks.append(text)
            self._changed.notify_all()
        return len(text)

    def flush(self):
        pass

    @property
    def text(self):
        with self._changed:
            return "".join(self._chunks)

    def wait_for(self, fragment, timeout=WAIT_SEC):
        with self._changed:
            return self._changed.wait_for(lambda: fragment in "".join(self._chunks), timeout)
