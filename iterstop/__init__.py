#!/usr/bin/env python
from iterstop.status import IterationStatus
from iterstop.errors import ConfigurationError
from iterstop.errors import InputContractError
from iterstop.criterium import Criterium
from iterstop.residual import ResidualStopCriterium
from iterstop.residual import ResidualState
from iterstop.residual import residual_transition
from iterstop.residual import relative_residual
from iterstop.residual import initial_state
from iterstop.criteria import IterationCountStopCriterium
from iterstop.criteria import FailureStopCriterium
from iterstop.criteria import DivergenceStopCriterium
from iterstop.composite import CompositeCriterium
from iterstop.solvers import cg
from iterstop.solvers import cgls
from iterstop.solvers import default_criterium
from iterstop.timing import tic
from iterstop.timing import toc
from iterstop.timing import summary
