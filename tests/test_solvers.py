#!/usr/bin/env python
import unittest
import logging
import threading
import numpy as np
import scipy.linalg
import scipy.sparse
import iterstop
from iterstop import IterationStatus
logging.basicConfig(level=logging.WARNING)

np.random.seed(1)
M = np.random.normal(0.0,1.0,(8,8))
A = M.dot(M.T) + 8.0*np.eye(8)
b = np.random.normal(0.0,1.0,8)

G = np.random.normal(0.0,1.0,(20,4))
m_true = np.array([1.0,-2.0,0.5,3.0])
d = G.dot(m_true)


class WaitCriterium(iterstop.Criterium):
  '''
  converges on the first call, once every solve sharing the barrier
  has reached it
  '''
  def __init__(self,barrier):
    iterstop.Criterium.__init__(self)
    self.barrier = barrier

  def _determine_status(self,iteration_number,solution,source,residual):
    self.barrier.wait(10.0)
    return IterationStatus.CONVERGED

  def clone(self):
    return WaitCriterium(self.barrier)


class TestCG(unittest.TestCase):
  def test_dense(self):
    x,status,itr = iterstop.cg(A,b,full_output=True)
    self.assertEqual(status,IterationStatus.CONVERGED)
    self.assertTrue(np.allclose(x,scipy.linalg.solve(A,b)))
    self.assertTrue(itr > 0)

  def test_sparse(self):
    x = iterstop.cg(scipy.sparse.csr_matrix(A),b)
    self.assertTrue(np.allclose(x,scipy.linalg.solve(A,b)))

  def test_complex_hermitian(self):
    H = A + 1j*(np.triu(np.ones((8,8)),1) - np.tril(np.ones((8,8)),-1))
    rhs = b + 1j*b[::-1]
    x,status,itr = iterstop.cg(H,rhs,full_output=True)
    self.assertEqual(status,IterationStatus.CONVERGED)
    self.assertTrue(np.allclose(H.dot(x),rhs))

  def test_exact_initial_guess(self):
    x0 = scipy.linalg.solve(A,b)
    x,status,itr = iterstop.cg(A,A.dot(x0),x0=x0,full_output=True)
    self.assertEqual(status,IterationStatus.CONVERGED)
    self.assertEqual(itr,0)

  def test_zero_rhs(self):
    x,status,itr = iterstop.cg(A,np.zeros(8),full_output=True)
    self.assertEqual(status,IterationStatus.CONVERGED)
    self.assertTrue(np.all(x == 0.0))

  def test_iteration_budget(self):
    crit = iterstop.default_criterium(maxitr=2,rtol=1e-300)
    x,status,itr = iterstop.cg(A,b,criterium=crit,full_output=True)
    self.assertEqual(status,IterationStatus.DIVERGED)
    self.assertEqual(itr,2)

  def test_criterium_template_is_not_mutated(self):
    crit = iterstop.ResidualStopCriterium(1e-10)
    iterstop.cg(A,b,criterium=crit)
    self.assertEqual(crit.status,IterationStatus.CONTINUE)
    self.assertIsNone(crit.state.crossing_iteration)

  def test_hysteresis(self):
    crit = iterstop.CompositeCriterium([iterstop.ResidualStopCriterium(1e-8,3),
                                        iterstop.IterationCountStopCriterium(100)])
    x1,status1,itr1 = iterstop.cg(A,b,criterium=crit,full_output=True)
    crit = iterstop.CompositeCriterium([iterstop.ResidualStopCriterium(1e-8,0),
                                        iterstop.IterationCountStopCriterium(100)])
    x2,status2,itr2 = iterstop.cg(A,b,criterium=crit,full_output=True)
    self.assertEqual(status1,IterationStatus.CONVERGED)
    self.assertEqual(status2,IterationStatus.CONVERGED)
    self.assertEqual(itr1,itr2 + 3)

  def test_criterium_without_iteration_limit(self):
    crit = iterstop.ResidualStopCriterium(0.0)
    x,status,itr = iterstop.cg(A,b,criterium=crit,maxitr=5,full_output=True)
    self.assertEqual(status,IterationStatus.DIVERGED)
    self.assertEqual(itr,5)

  def test_overlapping_solves(self):
    crit = WaitCriterium(threading.Barrier(2))
    results = []
    errors = []
    def solve():
      try:
        results.append(iterstop.cg(2.0*np.eye(4),np.ones(4),criterium=crit,
                                   full_output=True))
      except Exception as err:
        errors.append(err)

    threads = [threading.Thread(target=solve) for i in range(2)]
    for t in threads:
      t.start()

    for t in threads:
      t.join()

    self.assertEqual(errors,[])
    self.assertEqual([r[1] for r in results],[IterationStatus.CONVERGED]*2)
    self.assertNotIn('cg',iterstop.timing.GLOBAL_TIMER.running)

  def test_bad_input(self):
    self.assertRaises(iterstop.InputContractError,iterstop.cg,G,d)
    self.assertRaises(iterstop.InputContractError,iterstop.cg,A,np.ones(3))
    self.assertRaises(iterstop.InputContractError,iterstop.cg,A,b,np.ones(3))


class TestCGLS(unittest.TestCase):
  def test_overdetermined(self):
    m,status,itr = iterstop.cgls(G,d,full_output=True)
    self.assertEqual(status,IterationStatus.CONVERGED)
    self.assertTrue(np.allclose(m,m_true))

  def test_noisy_matches_lstsq(self):
    d_noisy = d + np.random.normal(0.0,0.1,20)
    m = iterstop.cgls(G,d_noisy)
    self.assertTrue(np.allclose(m,scipy.linalg.lstsq(G,d_noisy)[0]))

  def test_column_data(self):
    m = iterstop.cgls(G,d[:,None])
    self.assertTrue(np.allclose(m,m_true))

  def test_iteration_budget(self):
    crit = iterstop.default_criterium(maxitr=1,rtol=1e-300)
    m,status,itr = iterstop.cgls(G,d,criterium=crit,full_output=True)
    self.assertEqual(status,IterationStatus.DIVERGED)
    self.assertEqual(itr,1)

  def test_criterium_without_iteration_limit(self):
    crit = iterstop.ResidualStopCriterium(0.0)
    m,status,itr = iterstop.cgls(G,d,criterium=crit,maxitr=3,full_output=True)
    self.assertEqual(status,IterationStatus.DIVERGED)
    self.assertEqual(itr,3)

  def test_bad_input(self):
    self.assertRaises(iterstop.InputContractError,iterstop.cgls,G,np.ones(4))
    self.assertRaises(iterstop.InputContractError,iterstop.cgls,G,np.ones((20,2)))


if __name__ == '__main__':
  unittest.main()
