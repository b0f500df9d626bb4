import logging

import numpy as np


class PointArrayFilter(logging.Filter):
    """
    Keeps log records short when they carry point arrays.

    numpy array arguments are replaced by a shape summary; any other argument
    or literal message longer than max_length is cut.
    """

    def __init__(self, name: str = "", max_length: int = 250):
        super().__init__(name)
        self.max_length = max_length

    def _shorten(self, value: object) -> object:
        if isinstance(value, np.ndarray):
            return f"<array shape={value.shape}>"
        text = str(value)
        if len(text) > self.max_length:
            return text[: self.max_length] + "..."
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(self._shorten(arg) for arg in record.args)
        elif isinstance(record.msg, str) and len(record.msg) > self.max_length:
            # f-strings arrive fully rendered
            record.msg = record.msg[: self.max_length] + "..."
        return True
