#!/usr/bin/env python
'''
stop criteria which sit next to ResidualStopCriterium. They are meant
to be combined with it in a CompositeCriterium
'''
import collections
import logging
from iterstop.criterium import Criterium
from iterstop.status import IterationStatus
from iterstop.errors import ConfigurationError
from iterstop.misc import norm
from iterstop.misc import has_invalid
from iterstop.misc import check_count

logger = logging.getLogger(__name__)

DEFAULT_MAXIMUM_ITERATIONS = 1000

DEFAULT_MAXIMUM_RELATIVE_INCREASE = 0.08

DEFAULT_MINIMUM_ITERATIONS = 10


class IterationCountStopCriterium(Criterium):
  '''
  Returns DIVERGED once the iteration number reaches
  maximum_iterations. maximum_iterations=0 will stop on the first
  call, maximum_iterations=1 on the second call, etc.
  '''
  def __init__(self,maximum_iterations=DEFAULT_MAXIMUM_ITERATIONS):
    Criterium.__init__(self)
    self.maximum_iterations = maximum_iterations

  @property
  def maximum_iterations(self):
    return self._maximum_iterations

  @maximum_iterations.setter
  def maximum_iterations(self,value):
    self._maximum_iterations = check_count(value,0,'maximum iterations')

  def reset_maximum_iterations_to_default(self):
    self.maximum_iterations = DEFAULT_MAXIMUM_ITERATIONS

  def _determine_status(self,iteration_number,solution,source,residual):
    if iteration_number >= self._maximum_iterations:
      logger.debug('finished due to maximum iterations: itr=%s' % iteration_number)
      return IterationStatus.DIVERGED

    return IterationStatus.CONTINUE

  def clone(self):
    return IterationCountStopCriterium(self._maximum_iterations)


class FailureStopCriterium(Criterium):
  '''
  Returns DIVERGED if the solution or the residual contains nan or
  inf. The source vector is not checked
  '''
  def _determine_status(self,iteration_number,solution,source,residual):
    if has_invalid(solution) or has_invalid(residual):
      logger.debug('encountered invalid value: itr=%s' % iteration_number)
      return IterationStatus.DIVERGED

    return IterationStatus.CONTINUE

  def clone(self):
    return FailureStopCriterium()


class DivergenceStopCriterium(Criterium):
  '''
  Returns DIVERGED when the residual norm has grown by more than
  maximum_relative_increase on each of the last minimum_iterations
  iterations.

  The residual norms of the last minimum_iterations + 1 iterations are
  kept. A call whose iteration number is not larger than the last
  recorded one leaves the history alone and returns the last status.

  Parameters
  ----------
    maximum_relative_increase: growth of the residual norm between two
      iterations, as a fraction of the earlier norm, which is
      considered divergent. Must be greater than 0

    minimum_iterations: number of consecutive divergent iterations
      needed before DIVERGED is returned. Must be 1 or greater

  '''
  def __init__(self,maximum_relative_increase=DEFAULT_MAXIMUM_RELATIVE_INCREASE,
               minimum_iterations=DEFAULT_MINIMUM_ITERATIONS):
    Criterium.__init__(self)
    self.maximum_relative_increase = maximum_relative_increase
    self.minimum_iterations = minimum_iterations

  @property
  def maximum_relative_increase(self):
    return self._maximum_relative_increase

  @maximum_relative_increase.setter
  def maximum_relative_increase(self,value):
    if not value > 0:
      raise ConfigurationError(
        'maximum relative increase must be greater than 0, got %s' % value)

    self._maximum_relative_increase = float(value)

  @property
  def minimum_iterations(self):
    return self._minimum_iterations

  @minimum_iterations.setter
  def minimum_iterations(self,value):
    self._minimum_iterations = check_count(value,1,'minimum iterations')
    # changing the window invalidates the history
    self.reset()

  def reset_maximum_relative_increase_to_default(self):
    self.maximum_relative_increase = DEFAULT_MAXIMUM_RELATIVE_INCREASE

  def reset_minimum_iterations_to_default(self):
    self.minimum_iterations = DEFAULT_MINIMUM_ITERATIONS

  @property
  def history(self):
    return list(self._history)

  def _is_diverging(self):
    history = list(self._history)
    for previous,current in zip(history[:-1],history[1:]):
      if not current > previous*(1.0 + self._maximum_relative_increase):
        return False

    return True

  def _determine_status(self,iteration_number,solution,source,residual):
    if (self._last_iteration is not None) and (iteration_number <= self._last_iteration):
      return self._status

    self._last_iteration = iteration_number
    self._history.append(norm(residual))
    if len(self._history) < self._history.maxlen:
      return IterationStatus.CONTINUE

    if self._is_diverging():
      logger.debug('diverging:     error=%s, itr=%s' % (self._history[-1],iteration_number))
      return IterationStatus.DIVERGED

    return IterationStatus.CONTINUE

  def reset(self):
    Criterium.reset(self)
    self._history = collections.deque(maxlen=self._minimum_iterations + 1)
    self._last_iteration = None

  def clone(self):
    return DivergenceStopCriterium(self._maximum_relative_increase,
                                   self._minimum_iterations)
