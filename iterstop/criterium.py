#!/usr/bin/env python
from iterstop.status import IterationStatus
from iterstop.misc import asvector
from iterstop.misc import check_iteration_number
from iterstop.misc import check_lengths


class Criterium:
  '''
  Base class for the stop criteria. A criterium is called once per
  solver iteration and returns an IterationStatus telling the solver
  whether to keep going.

  Subclasses implement _determine_status, reset and clone. The
  arguments to determine_status are validated here before they are
  handed to _determine_status.

  A criterium holds run-state which is mutated on every call, so an
  instance should only be used by one solve at a time. Use clone to
  get an independent copy with the same settings.

  Attributes
  ----------
    status: last status returned by determine_status, CONTINUE before
      the first call and after reset
  '''
  def __init__(self):
    self._status = IterationStatus.CONTINUE

  @property
  def status(self):
    return self._status

  def determine_status(self,iteration_number,solution,source,residual):
    '''
    Parameters
    ----------
      iteration_number: number of the current solver iteration, must
        be 0 or greater

      solution: (N,) current estimate of the solution

      source: (N,) right hand side of the linear system

      residual: (N,) current residual vector, b - Ax

    Returns
    -------
      status: IterationStatus
    '''
    check_iteration_number(iteration_number)
    solution = asvector(solution)
    source = asvector(source)
    residual = asvector(residual)
    check_lengths(solution,source,residual)
    self._status = self._determine_status(iteration_number,solution,
                                          source,residual)
    return self._status

  def _determine_status(self,iteration_number,solution,source,residual):
    raise NotImplementedError

  def reset(self):
    self._status = IterationStatus.CONTINUE

  def clone(self):
    raise NotImplementedError

  def __repr__(self):
    return '%s(status=%s)' % (type(self).__name__,self._status.name)
