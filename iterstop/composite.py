#!/usr/bin/env python
import logging
from iterstop.criterium import Criterium
from iterstop.status import IterationStatus
from iterstop.errors import ConfigurationError

logger = logging.getLogger(__name__)


class CompositeCriterium(Criterium):
  '''
  Combines several criteria into one verdict.

  Every member is evaluated on every call so that criteria which keep
  a history stay up to date. The verdicts are then combined so that
  DIVERGED from any member wins, otherwise CONVERGED from any member
  wins, otherwise CONTINUE is returned.

  Parameters
  ----------
    criteria: iterable of Criterium instances

  '''
  def __init__(self,criteria=()):
    Criterium.__init__(self)
    self._criteria = []
    for c in criteria:
      self.add(c)

  @property
  def criteria(self):
    return tuple(self._criteria)

  def add(self,criterium):
    if not isinstance(criterium,Criterium):
      raise ConfigurationError('%s is not a Criterium' % (criterium,))

    if any(c is criterium for c in self._criteria):
      raise ConfigurationError('%s has already been added' % (criterium,))

    self._criteria.append(criterium)

  def remove(self,criterium):
    for i,c in enumerate(self._criteria):
      if c is criterium:
        del self._criteria[i]
        return

    raise ConfigurationError('%s is not a member' % (criterium,))

  def determine_status(self,iteration_number,solution,source,residual):
    if len(self._criteria) == 0:
      raise ConfigurationError('composite criterium has no members')

    return Criterium.determine_status(self,iteration_number,solution,
                                      source,residual)

  def _determine_status(self,iteration_number,solution,source,residual):
    statuses = [c.determine_status(iteration_number,solution,source,residual)
                for c in self._criteria]
    if IterationStatus.DIVERGED in statuses:
      culprits = [type(c).__name__ for c,s in zip(self._criteria,statuses)
                  if s == IterationStatus.DIVERGED]
      logger.debug('diverged due to %s: itr=%s' % (', '.join(culprits),iteration_number))
      return IterationStatus.DIVERGED

    if IterationStatus.CONVERGED in statuses:
      return IterationStatus.CONVERGED

    return IterationStatus.CONTINUE

  def reset(self):
    Criterium.reset(self)
    for c in self._criteria:
      c.reset()

  def clone(self):
    return CompositeCriterium([c.clone() for c in self._criteria])

  def __repr__(self):
    return 'CompositeCriterium(%s)' % ', '.join(repr(c) for c in self._criteria)
