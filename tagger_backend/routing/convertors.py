"""
URL convertors.

``{id:objectid}`` only matches path segments of exactly 24 characters, so
ids of any other length never reach a handler and the router answers 404.
The hex charset is not checked here: a 24-character non-hex id
is routed and simply matches no document.
"""

from starlette.convertors import Convertor, register_url_convertor

from ..constants import OBJECT_ID_LENGTH


class ObjectIdConvertor(Convertor):
    regex = f"[^/]{{{OBJECT_ID_LENGTH}}}"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("objectid", ObjectIdConvertor())
