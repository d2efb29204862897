"""Errors raised while converting a TCX document.

A run either succeeds or raises one of these; there is no partial output.
Missing numeric values are not errors, they travel through as NaN.
"""


class ConversionError(Exception):
    pass


class TcxParseError(ConversionError):
    """The input is not well-formed XML."""


class MalformedInput(ConversionError):
    """An expected element (Activities, Lap, Position, Time) is missing.

    Indices are 0-based positions in document order; ``None`` when the
    failure is above that level.
    """

    def __init__(self, message, activity=None, lap=None, trackpoint=None):
        self.reason = message
        self.activity = activity
        self.lap = lap
        self.trackpoint = trackpoint
        super().__init__(self._describe())

    def _describe(self):
        where = []
        if self.activity is not None:
            where.append(f"activity {self.activity}")
        if self.lap is not None:
            where.append(f"lap {self.lap}")
        if self.trackpoint is not None:
            where.append(f"trackpoint {self.trackpoint}")
        if not where:
            return self.reason
        return f"{', '.join(where)}: {self.reason}"
