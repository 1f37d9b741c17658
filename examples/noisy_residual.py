#!/usr/bin/env python
import logging
import numpy as np
import iterstop
logging.basicConfig(level=logging.DEBUG)

# A residual which oscillates around the threshold. Without a
# hysteresis window the first lucky dip is taken as convergence. With
# a window of 5 iterations convergence is only declared once the
# relative residual has stayed below 1e-3 for 5 iterations.
itr = np.arange(40)
ratio = 1e-2*np.exp(-0.15*itr)*(1.0 + 0.9*np.sin(itr))

source = np.ones(3)
solution = np.zeros(3)

template = iterstop.ResidualStopCriterium(1e-3,0)
for window in [0,5]:
  crit = template.clone()
  crit.minimum_iterations_below_maximum = window
  for i,r in zip(itr,ratio):
    residual = r*source
    status = crit.determine_status(i,solution,source,residual)
    if status != iterstop.IterationStatus.CONTINUE:
      break

  print('window=%s: %s at iteration %s' % (window,status.name,i))

# solve a linear system with conjugate gradient and a composite
# criterium
np.random.seed(0)
M = np.random.normal(0.0,1.0,(50,50))
A = M.dot(M.T) + 50.0*np.eye(50)
b = np.random.normal(0.0,1.0,50)
crit = iterstop.CompositeCriterium([iterstop.ResidualStopCriterium(1e-12,2),
                                    iterstop.IterationCountStopCriterium(200),
                                    iterstop.FailureStopCriterium(),
                                    iterstop.DivergenceStopCriterium()])
x,status,itr = iterstop.cg(A,b,criterium=crit,full_output=True)
print('cg finished with %s after %s iterations' % (status.name,itr))
iterstop.summary()
