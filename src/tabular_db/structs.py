from typing import Any, Self

import msgspec


class _Struct:
    @classmethod
    def from_json(cls, s: str | bytes) -> Self:
        return msgspec.json.decode(s, type=cls)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Self:
        return msgspec.msgpack.decode(raw, type=cls)

    def encode(self) -> bytes:
        return msgspec.msgpack.encode(self)

    @classmethod
    def convert(cls, obj: Any) -> Self:
        return msgspec.convert(obj, type=cls)

    def to_dict(self) -> dict:
        return msgspec.to_builtins(self)

    def to_json(self, *, indent: int = 2) -> str:
        '''
        Human readable, indented json document.

        '''
        raw = msgspec.json.encode(self)
        return msgspec.json.format(raw, indent=indent).decode('utf-8')


class Struct(msgspec.Struct, _Struct): ...


class FrozenStruct(msgspec.Struct, _Struct, frozen=True): ...
