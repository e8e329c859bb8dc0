import codecs
from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictStr, field_validator

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    RENDEZVOUS_HASH_LOG_LEVEL: Literal[
        "trace", "debug", "info", "warn", "error", "critical", "fatal"
    ] = "info"
    RENDEZVOUS_HASH_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    RENDEZVOUS_HASH_KEY_ENCODING: StrictStr = "utf-8"

    @field_validator("RENDEZVOUS_HASH_KEY_ENCODING")
    @classmethod
    def validate_key_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown key encoding {value!r}") from None

        return value

    @classmethod
    def types_map(self) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "RENDEZVOUS_HASH_LOG_LEVEL": str.lower,
            "RENDEZVOUS_HASH_LOG_OUTPUT": str.lower,
            "RENDEZVOUS_HASH_KEY_ENCODING": str,
        }
