#!/usr/bin/env python
import numpy as np
from iterstop.errors import ConfigurationError
from iterstop.errors import InputContractError


def asvector(v):
  '''
  returns v as a 1D numpy array
  '''
  v = np.asarray(v)
  if v.ndim != 1:
    raise InputContractError(
      'expected a one dimensional vector, got an array with shape %s' % (v.shape,))

  return v


def norm(v):
  '''
  Euclidean norm of a real or complex vector
  '''
  return float(np.linalg.norm(v))


def has_invalid(v):
  '''
  returns True if any element of v is nan or has an infinite magnitude
  '''
  return not np.all(np.isfinite(v))


def check_count(value,minimum,name):
  '''
  makes sure that a configuration setting is a finite integer no
  smaller than minimum and returns it as an int. Integral floats such
  as 2.0 are accepted
  '''
  if not np.isfinite(value):
    raise ConfigurationError('%s must be finite, got %s' % (name,value))

  if value != int(value):
    raise ConfigurationError('%s must be an integer, got %s' % (name,value))

  if value < minimum:
    raise ConfigurationError(
      '%s must be %s or greater, got %s' % (name,minimum,value))

  return int(value)


def check_iteration_number(iteration_number):
  if iteration_number < 0:
    raise InputContractError(
      'iteration number must be 0 or greater, got %s' % iteration_number)


def check_lengths(solution,source,residual):
  '''
  makes sure that the solution, source and residual vectors have the
  same length
  '''
  lengths = (len(solution),len(source),len(residual))
  if not (lengths[0] == lengths[1] == lengths[2]):
    raise InputContractError(
      'solution, source and residual must have equal lengths, got %s, %s and %s' % lengths)
