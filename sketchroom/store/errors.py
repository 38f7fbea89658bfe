from __future__ import annotations


class UserInputError(Exception):
    """Rejected request from a client. `code` is sent back on the wire."""

    code = "BAD_REQUEST"

    def __init__(self, message: str, *, room_code: str = ""):
        super().__init__(message)
        self.message = message
        self.room_code = room_code


class InvalidRoomCodeError(UserInputError):
    code = "INVALID_ROOM_CODE"


class DuplicateRoomError(UserInputError):
    code = "ROOM_EXISTS"


class RoomNotFoundError(UserInputError):
    code = "ROOM_NOT_FOUND"


class RoomFullError(UserInputError):
    code = "ROOM_FULL"
