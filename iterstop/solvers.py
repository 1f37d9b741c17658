#!/usr/bin/env python
'''
iterative solvers which are stopped by a Criterium. These are small
drivers showing how a solver loop consumes the stop criteria.
'''
import logging
from functools import wraps
import numpy as np
import scipy.sparse.linalg
from iterstop.status import IterationStatus
from iterstop.errors import InputContractError
from iterstop.residual import ResidualStopCriterium
from iterstop.criteria import IterationCountStopCriterium
from iterstop.criteria import FailureStopCriterium
from iterstop.composite import CompositeCriterium
from iterstop.misc import norm
from iterstop.timing import funtime

logger = logging.getLogger(__name__)


def default_criterium(maxitr=1000,rtol=1e-10):
  '''
  returns a CompositeCriterium which stops when the relative residual
  drops below rtol, when maxitr iterations have been taken, or when a
  nan or inf shows up in the solution or residual
  '''
  return CompositeCriterium([IterationCountStopCriterium(maxitr),
                             ResidualStopCriterium(rtol),
                             FailureStopCriterium()])


def _arg_checker(square=False):
  def decorator(fin):
    @wraps(fin)
    def fout(G,d,*args,**kwargs):
      G = scipy.sparse.linalg.aslinearoperator(G)
      d = np.asarray(d)
      if d.ndim > 1:
        d = np.squeeze(d)

      if d.ndim != 1:
        raise InputContractError('data vector must be one dimensional')

      if square and (G.shape[0] != G.shape[1]):
        raise InputContractError(
          'system matrix must be square, got shape %s' % (G.shape,))

      if G.shape[0] != d.shape[0]:
        raise InputContractError(
          'system matrix with shape %s is inconsistent with data vector of length %s'
          % (G.shape,d.shape[0]))

      dtype = np.result_type(G.dtype,d.dtype,np.float64)
      return fin(G,d.astype(dtype),*args,**kwargs)

    return fout

  return decorator


def _initial_guess(x0,size,dtype):
  if x0 is None:
    return np.zeros(size,dtype=dtype)

  x0 = np.array(x0,dtype=dtype)
  if x0.shape != (size,):
    raise InputContractError(
      'initial guess must have shape (%s,), got %s' % (size,x0.shape))

  return x0


def _criterium(criterium,maxitr):
  if criterium is None:
    return default_criterium(maxitr=maxitr)

  # the template may be shared between solves. The iteration count
  # guarantees that the loop ends if the criterium never stops it
  return CompositeCriterium([criterium.clone(),
                             IterationCountStopCriterium(maxitr)])


def _finish(soln,status,itr,residual,full_output):
  if status == IterationStatus.CONVERGED:
    logger.debug('converged after %s iterations: residual norm=%s' % (itr,norm(residual)))
  else:
    logger.warning('diverged after %s iterations: residual norm=%s' % (itr,norm(residual)))

  if full_output:
    return soln,status,itr
  else:
    return soln


@funtime
@_arg_checker(square=True)
def cg(A,b,x0=None,criterium=None,maxitr=1000,full_output=False):
  '''
  conjugate gradient solver for Ax = b

  Parameters
  ----------
    A: (N,N) symmetric positive definite matrix. Can be an array, a
      scipy sparse matrix or a LinearOperator

    b: (N,) right hand side

    x0: (N,) initial guess, defaults to zeros

    criterium: Criterium which decides when to stop. It is cloned
      before the solve. Defaults to default_criterium(maxitr)

    maxitr: maximum number of iterations. The solve is stopped with
      a DIVERGED status after this many iterations, even when
      criterium would keep going

    full_output: if True then the status and number of iterations are
      also returned

  Returns
  -------
    x: (N,) solution

    status: IterationStatus, only returned if full_output is True

    itr: number of iterations taken, only returned if full_output is
      True

  '''
  conv = _criterium(criterium,maxitr)
  x = _initial_guess(x0,A.shape[1],b.dtype)
  r = b - A.matvec(x)
  p = np.copy(r)
  rr = np.vdot(r,r).real
  k = 0
  status = conv.determine_status(k,x,b,r)
  with np.errstate(divide='ignore',invalid='ignore'):
    while status == IterationStatus.CONTINUE:
      Ap = A.matvec(p)
      alpha = rr/np.vdot(p,Ap)
      x = x + alpha*p
      r = r - alpha*Ap
      rr_new = np.vdot(r,r).real
      p = r + (rr_new/rr)*p
      rr = rr_new
      k += 1
      status = conv.determine_status(k,x,b,r)

  return _finish(x,status,k,r,full_output)


@funtime
@_arg_checker()
def cgls(G,d,m0=None,criterium=None,maxitr=1000,full_output=False):
  '''
  conjugate gradient least squares solver for min||Gm - d||

  algorithm from Aster et al. 2005. The criterium monitors the
  residual of the normal equations, G^H d - G^H G m, relative to
  G^H d

  Parameters
  ----------
    G: (N,M) system matrix. Can be an array, a scipy sparse matrix
      or a LinearOperator

    d: (N,) data vector

    m0: (M,) initial guess, defaults to zeros

    criterium: Criterium which decides when to stop. It is cloned
      before the solve. Defaults to default_criterium(maxitr)

    maxitr: maximum number of iterations. The solve is stopped with
      a DIVERGED status after this many iterations, even when
      criterium would keep going

    full_output: if True then the status and number of iterations are
      also returned

  Returns
  -------
    m: (M,) solution

    status: IterationStatus, only returned if full_output is True

    itr: number of iterations taken, only returned if full_output is
      True

  '''
  conv = _criterium(criterium,maxitr)
  m = _initial_guess(m0,G.shape[1],d.dtype)
  Gtd = G.rmatvec(d)
  s = d - G.matvec(m)
  r = G.rmatvec(s)
  p = np.copy(r)
  rr = np.vdot(r,r).real
  k = 0
  status = conv.determine_status(k,m,Gtd,r)
  with np.errstate(divide='ignore',invalid='ignore'):
    while status == IterationStatus.CONTINUE:
      Gp = G.matvec(p)
      alpha = rr/np.vdot(Gp,Gp).real
      m = m + alpha*p
      s = s - alpha*Gp
      r = G.rmatvec(s)
      rr_new = np.vdot(r,r).real
      p = r + (rr_new/rr)*p
      rr = rr_new
      k += 1
      status = conv.determine_status(k,m,Gtd,r)

  return _finish(m,status,k,r,full_output)
