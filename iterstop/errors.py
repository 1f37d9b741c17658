#!/usr/bin/env python
'''
exceptions raised for misuse of the stop criteria. A solver that
fails to converge is not an error, it is reported with
IterationStatus.DIVERGED
'''


class ConfigurationError(ValueError):
  '''
  Raised when a criterium is given an invalid setting, such as a
  negative residual maximum
  '''


class InputContractError(ValueError):
  '''
  Raised when a criterium or solver is called with inputs that break
  its contract, such as a negative iteration number or vectors with
  differing lengths
  '''
