#!/usr/bin/env python
from setuptools import setup

if __name__ == '__main__':
  setup(name='IterStop',
        version='0.1',
        description='stop criteria for iterative linear solvers',
        packages=['iterstop'],
        license='MIT',
        python_requires='>=3.7',
        install_requires=['numpy',
                          'scipy'],
        extras_require={'test':['pytest']})
