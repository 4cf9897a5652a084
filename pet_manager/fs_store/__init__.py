"""File-system backed pet storage."""

from .errors import ParseError, ReadError, StoreError, WriteError
from .pet_record import PetRecord
from .pet_record_list import PetRecordList
