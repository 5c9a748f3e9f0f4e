from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    RING_REPLICATION_FACTOR: StrictInt = 10
    RING_LOAD_FACTOR: StrictFloat = 1.25
    RING_HASHER: Literal["blake2b", "md5"] = "blake2b"
    RING_LOG_LEVEL: StrictStr = "info"
    RING_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "RING_REPLICATION_FACTOR": int,
            "RING_LOAD_FACTOR": float,
            "RING_HASHER": str,
            "RING_LOG_LEVEL": str,
            "RING_LOG_OUTPUT": str,
        }
