from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ringshard.env import Env


class RingConfig(BaseModel):
    """
    Ring configuration.

    Attributes:
        replication_factor: Virtual nodes placed per host. More replicas
            smooth the key distribution at the cost of a larger index.
        load: Slack multiplier over the mean load used as the bounded-load
            cap. Lower values balance tighter but overflow more often.
    """

    model_config = ConfigDict(frozen=True)

    replication_factor: StrictInt = Field(default=10, ge=1)
    load: float = Field(default=1.25, ge=1.0)

    @classmethod
    def from_env(cls, env: Env) -> RingConfig:
        return cls(
            replication_factor=env.RING_REPLICATION_FACTOR,
            load=env.RING_LOAD_FACTOR,
        )
