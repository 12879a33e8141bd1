import re
from typing import Any, Dict, List, Optional

from bson import ObjectId

from errors import ValidationError

_HEX24 = re.compile(r"^[0-9a-fA-F]{24}$")


class ObjectIdValidator:
    """Path identifiers must be 24-character hex ObjectIds."""

    @staticmethod
    def is_valid(value: Optional[str]) -> bool:
        if not isinstance(value, str):
            return False
        # ObjectId.is_valid also accepts 12-byte strings; only hex tokens are allowed here
        return bool(_HEX24.match(value)) and ObjectId.is_valid(value)


class RequiredFieldValidator:
    """Explicit presence checks for create/update payloads.

    Each field is checked on its own so every missing one can be reported.
    A counter of 0 or an empty inventory object is not "missing".
    """

    @staticmethod
    def is_blank_text(value: Any) -> bool:
        # only absence and the empty string count; whitespace is a value
        if value is None:
            return True
        return isinstance(value, str) and value == ""

    @staticmethod
    def is_empty_list(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, (list, tuple)) and len(value) == 0

    @staticmethod
    def collect_missing(text_fields: Dict[str, Any] = None, list_fields: Dict[str, Any] = None,
                        object_fields: Dict[str, Any] = None) -> List[str]:
        missing: List[str] = []
        for name, value in (text_fields or {}).items():
            if RequiredFieldValidator.is_blank_text(value):
                missing.append(name)
        for name, value in (list_fields or {}).items():
            if RequiredFieldValidator.is_empty_list(value):
                missing.append(name)
        for name, value in (object_fields or {}).items():
            if value is None:
                missing.append(name)
        return missing

    @staticmethod
    def require(text_fields: Dict[str, Any] = None, list_fields: Dict[str, Any] = None,
                object_fields: Dict[str, Any] = None) -> None:
        missing = RequiredFieldValidator.collect_missing(text_fields, list_fields, object_fields)
        if missing:
            raise ValidationError(missing)
