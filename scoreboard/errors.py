class ScoreboardError(Exception):
    pass


class InvalidInput(ScoreboardError):
    """Client sent a submission that is not a finite number."""


class StorageUnavailable(ScoreboardError):
    """The score store could not complete an insert or query."""
