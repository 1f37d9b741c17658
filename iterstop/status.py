#!/usr/bin/env python
from enum import IntEnum


class IterationStatus(IntEnum):
  '''
  verdict returned by a stop criterium on each iteration

    0: CONTINUE, the solver should take another step

    1: CONVERGED, the solver should stop and report its solution

    2: DIVERGED, the solver should stop and report failure
  '''
  CONTINUE = 0
  CONVERGED = 1
  DIVERGED = 2
