"""Domain errors. Each carries the HTTP status the API answers with."""

from typing import Optional

from fastapi import status


class PetError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "pet operation failed"

    def __init__(self, pet_id=None, detail: Optional[str] = None):
        self.pet_id = pet_id
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFound(PetError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "no such pet"


class AlreadyExists(PetError):
    status_code = status.HTTP_409_CONFLICT
    detail = "pet already exists"


class Unauthorized(PetError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "only the owner can do that"


class TooHungry(PetError):
    status_code = status.HTTP_409_CONFLICT
    detail = "pet is too hungry to train – feed it first"


class CreationDisabled(PetError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "minting is currently disabled"
