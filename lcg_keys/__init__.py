from .errors import (FactorizationInputError, IllegalCharactersError, InvalidModulusError, KeyOverflowError,
                     ParameterSearchError)
from .parameter_analysis import LcgParameters, check_hull_conditions, find_parameters
from .primes import prime_factors
from .utils.entities import (DEFAULT_KEYSPACE, Keyspace, LinearCongruentialGenerator, MultiHopDriver,
                             RequestKey, to_request_id, to_request_key)
from .verification import PeriodVerifier, VerificationResult, VerificationStatus, verify_full_period

__all__ = ['FactorizationInputError', 'IllegalCharactersError', 'InvalidModulusError', 'KeyOverflowError',
           'ParameterSearchError',
           'LcgParameters', 'check_hull_conditions', 'find_parameters', 'prime_factors',
           'DEFAULT_KEYSPACE', 'Keyspace', 'LinearCongruentialGenerator', 'MultiHopDriver',
           'RequestKey', 'to_request_id', 'to_request_key',
           'PeriodVerifier', 'VerificationResult', 'VerificationStatus', 'verify_full_period']
