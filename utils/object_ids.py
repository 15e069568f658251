# utils/object_ids.py
from bson import ObjectId
from core.exceptions import InvalidIdentifierError

def canonical_id(value, kind: str) -> str:
    """
    Return the lower-case hex form MongoDB gives `str(ObjectId)`.

    Ids are stored and compared as strings, so every id taken from a
    request goes through here before it is queried, stored or matched.
    Raises InvalidIdentifierError for anything that is not 24 hex chars.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifierError(f"Invalid {kind} id")
    return str(ObjectId(value))
