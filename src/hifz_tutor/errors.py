"""Exceptions raised by the maintenance workflow."""


class HifzTutorError(Exception):
    """Base class for all tutor errors."""


class PersistenceError(HifzTutorError):
    """A read or write against the database failed; the operation may be retried."""


class SessionNotFoundError(HifzTutorError):
    def __init__(self, session_id: int):
        super().__init__(f"No daily session with id {session_id}")
        self.session_id = session_id


class InvalidPassageError(HifzTutorError):
    def __init__(self, session_id: int, passage_index: int, total: int):
        super().__init__(
            f"Session {session_id} has {total} passages; index {passage_index} is out of range"
        )
        self.session_id = session_id
        self.passage_index = passage_index
