#!/usr/bin/env python
'''
wall clock timing of solver calls
'''
import time as timemod
import logging
from functools import wraps
import collections
import threading

logger = logging.getLogger(__name__)


def _convert(t):
  '''
  returns t in a readable unit
  '''
  if t > 3600.0:
    return t/3600.0,'hr'
  elif t > 60.0:
    return t/60.0,'min'
  elif t < 1.0:
    return t*1000.0,'ms'
  else:
    return t,'s'


class Timer:
  '''
  keeps track of running processes and the accumulated time spent in
  each of them. A Timer can be shared between threads

  Attributes
  ----------
    running: maps the ID of each running process to its start time

    total: maps the name of each process that has been timed to its
      accumulated running time in seconds

    calls: maps the name of each process to the number of times it
      has been stopped

  '''
  def __init__(self):
    self.running = collections.OrderedDict()
    self.names = {}
    self.total = collections.OrderedDict()
    self.calls = collections.OrderedDict()
    self._lock = threading.RLock()

  def tic(self,name='process'):
    '''
    starts timing name and returns an ID for the running process
    which should be passed to toc. If name is already being timed,
    for example by another thread or a recursive call, then the ID is
    name followed by the smallest free number
    '''
    with self._lock:
      ID = name
      itr = 1
      while ID in self.running:
        ID = '%s %s' % (name,itr)
        itr += 1

      self.total.setdefault(name,0.0)
      self.calls.setdefault(name,0)
      self.names[ID] = name
      self.running[ID] = timemod.time()

    logger.debug('timing %s' % ID)
    return ID

  def toc(self,ID=None):
    '''
    stops timing ID, or the most recently started process, and
    returns the elapsed time in seconds
    '''
    with self._lock:
      if ID is None:
        ID = next(reversed(self.running))

      runtime = timemod.time() - self.running.pop(ID)
      name = self.names.pop(ID)
      self.total[name] += runtime
      self.calls[name] += 1

    logger.debug('elapsed time for last call to %s: %.4g %s' % ((ID,) + _convert(runtime)))
    return runtime

  def summary(self):
    with self._lock:
      while len(self.running) > 0:
        self.toc()

      totals = list(self.total.items())

    logger.info('---- TIME SUMMARY ----')
    for name,val in totals:
      logger.info('total time running %s (%s calls): %.4g %s'
                  % ((name,self.calls[name]) + _convert(val)))


GLOBAL_TIMER = Timer()


def funtime(fun):
  '''
  decorator which records the time spent in each call to fun on
  GLOBAL_TIMER
  '''
  @wraps(fun)
  def subfun(*args,**kwargs):
    ID = GLOBAL_TIMER.tic(fun.__name__)
    try:
      return fun(*args,**kwargs)
    finally:
      GLOBAL_TIMER.toc(ID)

  return subfun


def tic(*args,**kwargs):
  return GLOBAL_TIMER.tic(*args,**kwargs)


def toc(*args,**kwargs):
  return GLOBAL_TIMER.toc(*args,**kwargs)


def summary(*args,**kwargs):
  return GLOBAL_TIMER.summary(*args,**kwargs)
