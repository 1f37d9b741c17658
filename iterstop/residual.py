#!/usr/bin/env python
'''
stop criterium which monitors the relative residual,

  ||b - Ax|| / ||b||,

and declares convergence once it has stayed at or below a maximum for
a minimum number of iterations
'''
import collections
import logging
import numpy as np
from iterstop.criterium import Criterium
from iterstop.status import IterationStatus
from iterstop.errors import ConfigurationError
from iterstop.misc import asvector
from iterstop.misc import norm
from iterstop.misc import has_invalid
from iterstop.misc import check_iteration_number
from iterstop.misc import check_lengths
from iterstop.misc import check_count

logger = logging.getLogger(__name__)

DEFAULT_MAXIMUM = 1e-12

DEFAULT_MINIMUM_ITERATIONS_BELOW_MAXIMUM = 0


ResidualState = collections.namedtuple(
  'ResidualState',
  ['maximum',
   'minimum_iterations_below_maximum',
   'crossing_iteration',
   'status'])
ResidualState.__doc__ = '''
  immutable state of a residual stop criterium

    maximum: relative residual at or below which the solution is
      considered converged

    minimum_iterations_below_maximum: number of iterations the
      relative residual must stay at or below maximum

    crossing_iteration: iteration at which the relative residual last
      dropped to or below maximum, None if it is currently above

    status: last IterationStatus
  '''


def _check_maximum(maximum):
  # also catches nan
  if not maximum >= 0:
    raise ConfigurationError(
      'maximum relative residual must be 0 or greater, got %s' % maximum)

  return maximum


def _check_minimum_iterations(minimum_iterations):
  return check_count(minimum_iterations,0,'minimum iterations below maximum')


def initial_state(maximum=DEFAULT_MAXIMUM,
                  minimum_iterations_below_maximum=DEFAULT_MINIMUM_ITERATIONS_BELOW_MAXIMUM):
  '''
  returns a validated ResidualState with no crossing iteration and a
  CONTINUE status
  '''
  return ResidualState(_check_maximum(maximum),
                       _check_minimum_iterations(minimum_iterations_below_maximum),
                       None,
                       IterationStatus.CONTINUE)


def relative_residual(source,residual):
  '''
  returns ||residual||/||source||. If the source norm is zero then the
  ratio is zero when the residual norm is also zero and inf otherwise
  '''
  norm_source = norm(source)
  norm_residual = norm(residual)
  if norm_source == 0.0:
    if norm_residual == 0.0:
      return 0.0
    else:
      return np.inf

  return norm_residual/norm_source


def residual_transition(state,iteration_number,solution,source,residual):
  '''
  Pure transition function of the residual stop criterium

  Parameters
  ----------
    state: ResidualState before the call

    iteration_number: current iteration number, 0 or greater. Calls
      within one solve should have non-decreasing iteration numbers

    solution: (N,) current solution estimate. Only its length is used

    source: (N,) right hand side vector

    residual: (N,) residual vector

  Returns
  -------
    new_state: ResidualState after the call

    status: IterationStatus, same as new_state.status

  Notes
  -----
    The window of minimum_iterations_below_maximum is measured as the
    difference in iteration numbers, not the number of calls, so a
    driver which only checks every few iterations still converges
    once enough iterations have passed below the maximum.

  '''
  check_iteration_number(iteration_number)
  solution = asvector(solution)
  source = asvector(source)
  residual = asvector(residual)
  check_lengths(solution,source,residual)

  if has_invalid(source) or has_invalid(residual):
    logger.debug('invalid value in source or residual at itr=%s' % iteration_number)
    state = state._replace(status=IterationStatus.DIVERGED)
    return state,state.status

  ratio = relative_residual(source,residual)
  if ratio <= state.maximum:
    crossing_iteration = state.crossing_iteration
    if crossing_iteration is None:
      crossing_iteration = iteration_number

    if (iteration_number - crossing_iteration) >= state.minimum_iterations_below_maximum:
      status = IterationStatus.CONVERGED
      logger.debug('converged:     ratio=%s, itr=%s' % (ratio,iteration_number))
    else:
      status = IterationStatus.CONTINUE
      logger.debug('below maximum: ratio=%s, itr=%s' % (ratio,iteration_number))

  else:
    crossing_iteration = None
    status = IterationStatus.CONTINUE
    logger.debug('above maximum: ratio=%s, itr=%s' % (ratio,iteration_number))

  state = state._replace(crossing_iteration=crossing_iteration,status=status)
  return state,status


class ResidualStopCriterium(Criterium):
  '''
  Monitors the relative residual ||b - Ax||/||b||.

  CONVERGED is returned once the relative residual has been at or
  below maximum for at least minimum_iterations_below_maximum
  iterations. DIVERGED is returned if the source or residual contains
  nan or inf. CONTINUE is returned otherwise.

  The criterium does not stop returning statuses after CONVERGED or
  DIVERGED, it is up to the solver to stop iterating.

  Parameters
  ----------
    maximum: relative residual threshold, 0 or greater

    minimum_iterations_below_maximum: hysteresis window, integer 0 or
      greater

  '''
  def __init__(self,maximum=DEFAULT_MAXIMUM,
               minimum_iterations_below_maximum=DEFAULT_MINIMUM_ITERATIONS_BELOW_MAXIMUM):
    self._state = initial_state(maximum,minimum_iterations_below_maximum)

  @property
  def state(self):
    return self._state

  @property
  def status(self):
    return self._state.status

  @property
  def maximum(self):
    return self._state.maximum

  @maximum.setter
  def maximum(self,value):
    self._state = self._state._replace(maximum=_check_maximum(value))

  @property
  def minimum_iterations_below_maximum(self):
    return self._state.minimum_iterations_below_maximum

  @minimum_iterations_below_maximum.setter
  def minimum_iterations_below_maximum(self,value):
    value = _check_minimum_iterations(value)
    self._state = self._state._replace(minimum_iterations_below_maximum=value)

  def reset_maximum_to_default(self):
    self.maximum = DEFAULT_MAXIMUM

  def reset_minimum_iterations_below_maximum_to_default(self):
    self.minimum_iterations_below_maximum = DEFAULT_MINIMUM_ITERATIONS_BELOW_MAXIMUM

  def determine_status(self,iteration_number,solution,source,residual):
    self._state,status = residual_transition(self._state,iteration_number,
                                             solution,source,residual)
    return status

  def reset(self):
    self._state = self._state._replace(crossing_iteration=None,
                                       status=IterationStatus.CONTINUE)

  def clone(self):
    return ResidualStopCriterium(self.maximum,
                                 self.minimum_iterations_below_maximum)

  def __repr__(self):
    return ('ResidualStopCriterium(maximum=%s, minimum_iterations_below_maximum=%s)'
            % (self.maximum,self.minimum_iterations_below_maximum))
