from .duration import Duration
from .keyspace import (CENSORED_KEYSPACE, DEFAULT_KEYSPACE, Keyspace, RequestKey,
                       to_request_id, to_request_key)
from .linear_congruential_generator import LinearCongruentialGenerator, lcg_step
from .multi_hop import MultiHopDriver
from .preset_generator import PresetGenerator

__all__ = ['Duration', 'Keyspace', 'RequestKey', 'DEFAULT_KEYSPACE', 'CENSORED_KEYSPACE',
           'to_request_key', 'to_request_id', 'LinearCongruentialGenerator', 'lcg_step',
           'MultiHopDriver', 'PresetGenerator']
